from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from esper import World

from chainbuild.components.display_state import DisplayState
from chainbuild.components.rules import DEFAULT_RULES, GameRules
from chainbuild.components.session import Session
from chainbuild.components.tool_selection import ToolSelection
from chainbuild.events.bus import EventBus
from chainbuild.systems.action_system import ActionSystem
from chainbuild.systems.command_system import CommandSystem
from chainbuild.systems.history_system import HistorySystem
from chainbuild.systems.input import InputSystem
from chainbuild.systems.level_system import LevelSystem
from chainbuild.systems.preview_system import PreviewSystem


def create_world(event_bus: EventBus, *, rules: GameRules = DEFAULT_RULES) -> World:
    """Create the session world; Level and History are attached when a level loads."""
    world = World()
    world.create_entity(Session(rules=rules), ToolSelection(), DisplayState())
    return world


@dataclass(slots=True)
class Systems:
    level: LevelSystem
    action: ActionSystem
    command: CommandSystem
    history: HistorySystem
    input: InputSystem
    preview: PreviewSystem


def create_systems(world: World, event_bus: EventBus, *, output_dir: Path | None = None) -> Systems:
    """Wire every gameplay system to the bus."""
    return Systems(
        level=LevelSystem(world, event_bus),
        action=ActionSystem(world, event_bus),
        command=CommandSystem(world, event_bus),
        history=HistorySystem(world, event_bus, output_dir=output_dir),
        input=InputSystem(world, event_bus),
        preview=PreviewSystem(world, event_bus),
    )
