MIN_TIER = 1
MAX_TIER = 9

# A connected group of equal tiers at least this large reacts into the next tier.
MIN_REACTION_COUNT = 3

# Points awarded for a structure of each tier (index 0 unused).
BUILD_SCORES = (None, 4, 20, 100, 500, 1500, 5000, 20_000, 100_000, 500_000)
# Fraction of a structure's build score lost when it is bombed.
BOMB_RATIO = 0.5

# Tool identifiers shared by input, action and preview systems
TOOL_BUILD = "build"
TOOL_STAR = "star"
TOOL_BOMB = "bomb"
TOOLS = (TOOL_BUILD, TOOL_STAR, TOOL_BOMB)
TOOL_TITLES = {TOOL_BUILD: "Build", TOOL_STAR: "Star", TOOL_BOMB: "Bomber"}
# Primary (left button) then secondary tool.
DEFAULT_TOOL_SELECTION = (TOOL_BUILD, TOOL_STAR)

# Mouse button ids follow arcade's numbering.
MOUSE_BUTTON_LEFT = 1
MOUSE_BUTTON_RIGHT = 4

# Textual command keywords (input side is case-insensitive)
COMMAND_PUT = "put"
COMMAND_STAR = "star"
COMMAND_BOMBER = "bomber"
COMMAND_TOOLS = {COMMAND_PUT: TOOL_BUILD, COMMAND_STAR: TOOL_STAR, COMMAND_BOMBER: TOOL_BOMB}
# Exported log keywords per tool
EXPORT_KEYWORDS = {TOOL_BUILD: "BUILD", TOOL_STAR: "STAR", TOOL_BOMB: "BOMBER"}
OUTPUT_TERMINATOR = "END"

# Maximum number of upcoming queue entries listed by the status panel.
QUEUE_PREVIEW_LIMIT = 40

LOG_LEVEL_ENV = "CHAINBUILD_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"
