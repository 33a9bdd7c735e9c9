from dataclasses import dataclass

from chainbuild.components.rules import DEFAULT_RULES, GameRules

@dataclass(slots=True)
class Session:
    """Marks the single entity holding the play session.

    The same entity carries ToolSelection and DisplayState, plus Level and
    History once a level has been loaded.
    """
    rules: GameRules = DEFAULT_RULES
