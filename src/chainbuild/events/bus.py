from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Use weak=False to retain strong reference to bound methods so systems not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# NOTIFICATIONS
# ============================================================================
EVENT_NOTIFY = "notify"    # payload: message=str, level=str ('info'|'error')


# ============================================================================
# LEVEL LOADING
# ============================================================================
EVENT_LEVEL_LOAD_REQUEST = "level_load_request"    # payload: text=str|None, path=str|Path|None
EVENT_LEVEL_LOADED = "level_loaded"                # payload: level=Level, state=GameState
EVENT_LEVEL_LOAD_FAILED = "level_load_failed"      # payload: reason=str, message=str


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_TOOL_SELECT = "tool_select"          # payload: tool=str, button=int
EVENT_TOOL_SELECTION_CHANGED = "tool_selection_changed"  # payload: selected=tuple[str, str]
EVENT_CELL_CLICK = "cell_click"            # payload: x=int, y=int, button=int
EVENT_CELL_HOVER = "cell_hover"            # payload: x=int|None, y=int|None
EVENT_HISTORY_HOVER = "history_hover"      # payload: index=int|None


# ============================================================================
# ACTIONS & COMMAND BATCHES
# ============================================================================
EVENT_ACTION_REQUEST = "action_request"            # payload: tool=str, x=int, y=int
EVENT_ACTION_APPLIED = "action_applied"            # payload: state=GameState, result=ActionResult
EVENT_ACTION_REJECTED = "action_rejected"          # payload: tool=str, x=int, y=int, message=str, unexpected=bool
EVENT_COMMAND_BATCH_REQUEST = "command_batch_request"      # payload: text=str
EVENT_COMMAND_BATCH_EXECUTED = "command_batch_executed"    # payload: count=int, states=list[GameState]
EVENT_COMMAND_BATCH_FAILED = "command_batch_failed"        # payload: line_number=int|None, message=str


# ============================================================================
# HISTORY & EXPORT
# ============================================================================
EVENT_UNDO_REQUEST = "undo_request"                # payload: None
EVENT_REDO_REQUEST = "redo_request"                # payload: None
EVENT_HISTORY_JUMP_REQUEST = "history_jump_request"    # payload: index=int
EVENT_HISTORY_CHANGED = "history_changed"          # payload: step_number=int, length=int, reason=str
EVENT_COPY_COMMANDS_REQUEST = "copy_commands_request"  # payload: None
EVENT_COMMANDS_EXPORTED = "commands_exported"      # payload: text=str, commands=list[str], terminated=bool
EVENT_SAVE_REQUEST = "save_request"                # payload: path=str|Path|None
EVENT_OUTPUT_SAVED = "output_saved"                # payload: path=Path, text=str


# ============================================================================
# DISPLAY
# ============================================================================
EVENT_DISPLAY_CHANGED = "display_changed"          # payload: source=str ('current'|'preview'|'history')
