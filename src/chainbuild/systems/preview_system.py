import logging

from esper import World

from chainbuild.errors import GameError
from chainbuild.events.bus import (
    EventBus,
    EVENT_CELL_HOVER,
    EVENT_HISTORY_HOVER,
    EVENT_DISPLAY_CHANGED,
)
from chainbuild.systems.action_ops import preview_action
from chainbuild.systems.session_utils import (
    get_display_state,
    get_history,
    get_level,
    get_tool_selection,
    is_level_loaded,
)

logger = logging.getLogger(__name__)


class PreviewSystem:
    """Keeps DisplayState in sync with what the pointer is hovering.

    Hovering a cell previews the primary tool there; hovering a history entry
    shows that snapshot. Leaving (x/index of None) falls back to the current step.
    Previews run on clones, so the history is never touched.
    """
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_CELL_HOVER, self.on_cell_hover)
        self.event_bus.subscribe(EVENT_HISTORY_HOVER, self.on_history_hover)

    def on_cell_hover(self, sender, **kwargs):
        if not is_level_loaded(self.world):
            return
        display = get_display_state(self.world)
        x = kwargs.get('x')
        y = kwargs.get('y')
        display.reset()
        if x is not None and y is not None:
            current = get_history(self.world).current_state()
            tool = get_tool_selection(self.world).primary
            try:
                preview = preview_action(current, tool, x, y, get_level(self.world).queue)
            except GameError as exc:
                logger.debug("No preview for %s at (%s, %s): %s", tool, x, y, exc)
                preview = None
            if preview is not None:
                display.source = 'preview'
                display.state = preview.state
                display.preview_target = preview.target
                display.reaction_cells = set(preview.reaction_cells)
        self.event_bus.emit(EVENT_DISPLAY_CHANGED, source=display.source)

    def on_history_hover(self, sender, **kwargs):
        if not is_level_loaded(self.world):
            return
        display = get_display_state(self.world)
        index = kwargs.get('index')
        display.reset()
        history = get_history(self.world)
        if index is not None and 0 <= index < len(history):
            display.source = 'history'
            display.state = history[index]
            display.hover_index = index
        self.event_bus.emit(EVENT_DISPLAY_CHANGED, source=display.source)
