import logging

from esper import World

from chainbuild.errors import GameError
from chainbuild.events.bus import (
    EventBus,
    EVENT_ACTION_REQUEST,
    EVENT_ACTION_APPLIED,
    EVENT_ACTION_REJECTED,
    EVENT_HISTORY_CHANGED,
    EVENT_NOTIFY,
)
from chainbuild.systems.action_ops import apply_action
from chainbuild.systems.session_utils import get_display_state, get_history, get_level, is_level_loaded

logger = logging.getLogger(__name__)


class ActionSystem:
    """Applies single player actions to a clone of the current step.

    Successful clones are appended to the history (discarding any redo branch).
    User-facing failures are reported with their own message; anything else is
    logged with its traceback and reported generically. Either way the
    history is left as it was.
    """
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_ACTION_REQUEST, self.on_action_request)

    def on_action_request(self, sender, **kwargs):
        tool = kwargs.get('tool')
        x = kwargs.get('x')
        y = kwargs.get('y')
        if not is_level_loaded(self.world) or x is None or y is None:
            return
        history = get_history(self.world)
        queue = get_level(self.world).queue
        try:
            new_state, result = apply_action(history.current_state(), tool, x, y, queue)
        except GameError as exc:
            logger.debug("Rejected %s at (%s, %s): %s", tool, x, y, exc)
            self._reject(tool, x, y, exc.message, unexpected=False)
            return
        except Exception:
            logger.exception("Unexpected error applying %s at (%s, %s)", tool, x, y)
            self._reject(tool, x, y, "An unexpected error occured.", unexpected=True)
            return
        history.append(new_state)
        get_display_state(self.world).reset()
        self.event_bus.emit(EVENT_ACTION_APPLIED, state=new_state, result=result)
        self.event_bus.emit(
            EVENT_HISTORY_CHANGED,
            step_number=history.step_number,
            length=len(history),
            reason='action',
        )

    def _reject(self, tool, x, y, message: str, *, unexpected: bool) -> None:
        self.event_bus.emit(EVENT_ACTION_REJECTED, tool=tool, x=x, y=y, message=message, unexpected=unexpected)
        self.event_bus.emit(EVENT_NOTIFY, message=message, level='error')
