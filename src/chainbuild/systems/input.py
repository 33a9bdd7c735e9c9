from esper import World

from chainbuild.constants import TOOLS
from chainbuild.events.bus import (
    EventBus,
    EVENT_TOOL_SELECT,
    EVENT_TOOL_SELECTION_CHANGED,
    EVENT_CELL_CLICK,
    EVENT_ACTION_REQUEST,
)
from chainbuild.systems.session_utils import get_tool_selection, is_level_loaded

class InputSystem:
    """Maps raw clicks to tool bindings and action requests.

    Left button drives the primary tool, every other button the secondary one.
    """
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TOOL_SELECT, self.on_tool_select)
        self.event_bus.subscribe(EVENT_CELL_CLICK, self.on_cell_click)

    def on_tool_select(self, sender, **kwargs):
        tool = kwargs.get('tool')
        button = kwargs.get('button')
        if tool not in TOOLS or button is None:
            return
        selection = get_tool_selection(self.world)
        selection.select(tool, button)
        self.event_bus.emit(EVENT_TOOL_SELECTION_CHANGED, selected=tuple(selection.selected))

    def on_cell_click(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        button = kwargs.get('button')
        if x is None or y is None or button is None:
            return
        if not is_level_loaded(self.world):
            return
        tool = get_tool_selection(self.world).tool_for(button)
        self.event_bus.emit(EVENT_ACTION_REQUEST, tool=tool, x=x, y=y)
