import logging

from esper import World

from chainbuild.errors import BatchError, EmptyBatchError
from chainbuild.events.bus import (
    EventBus,
    EVENT_COMMAND_BATCH_REQUEST,
    EVENT_COMMAND_BATCH_EXECUTED,
    EVENT_COMMAND_BATCH_FAILED,
    EVENT_HISTORY_CHANGED,
    EVENT_NOTIFY,
)
from chainbuild.systems.action_ops import run_command_batch
from chainbuild.systems.session_utils import get_display_state, get_history, get_level, is_level_loaded

logger = logging.getLogger(__name__)


class CommandSystem:
    """Executes a block of textual commands as a single all-or-nothing step."""
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_COMMAND_BATCH_REQUEST, self.on_batch_request)

    def on_batch_request(self, sender, **kwargs):
        text = kwargs.get('text') or ''
        if not is_level_loaded(self.world):
            return
        history = get_history(self.world)
        queue = get_level(self.world).queue
        try:
            states = run_command_batch(history.current_state(), text, queue)
        except EmptyBatchError as exc:
            self._fail(None, exc.message, level='info')
            return
        except BatchError as exc:
            if exc.unexpected:
                logger.error(
                    "Unexpected error on command line %d; batch rolled back",
                    exc.line_number, exc_info=exc.cause,
                )
            else:
                logger.info("Command batch stopped at line %d: %s", exc.line_number, exc.cause)
            self._fail(exc.line_number, exc.message, level='error')
            return
        history.extend(states)
        get_display_state(self.world).reset()
        count = len(states)
        logger.info("Executed %d command(s); now at step %d", count, history.step_number)
        self.event_bus.emit(EVENT_COMMAND_BATCH_EXECUTED, count=count, states=states)
        self.event_bus.emit(
            EVENT_HISTORY_CHANGED,
            step_number=history.step_number,
            length=len(history),
            reason='batch',
        )
        self.event_bus.emit(EVENT_NOTIFY, message=self.success_message(count), level='info')

    @staticmethod
    def success_message(count: int) -> str:
        return f"Success: {count} command{'s were' if count > 1 else ' was'} executed."

    def _fail(self, line_number, message: str, *, level: str) -> None:
        self.event_bus.emit(EVENT_COMMAND_BATCH_FAILED, line_number=line_number, message=message)
        self.event_bus.emit(EVENT_NOTIFY, message=message, level=level)
