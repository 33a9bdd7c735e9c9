from __future__ import annotations

from esper import World

from chainbuild.components.display_state import DisplayState
from chainbuild.components.game_state import GameState
from chainbuild.components.history import History
from chainbuild.components.level import Level
from chainbuild.components.session import Session
from chainbuild.components.tool_selection import ToolSelection
from chainbuild.errors import NoLevelLoadedError


def get_or_create_session_entity(world: World) -> int:
    """Return the session entity, creating it with default components if absent."""
    existing = list(world.get_component(Session))
    if existing:
        return existing[0][0]
    return world.create_entity(Session(), ToolSelection(), DisplayState())


def get_session(world: World) -> Session:
    return world.component_for_entity(get_or_create_session_entity(world), Session)


def get_tool_selection(world: World) -> ToolSelection:
    return world.component_for_entity(get_or_create_session_entity(world), ToolSelection)


def get_display_state(world: World) -> DisplayState:
    return world.component_for_entity(get_or_create_session_entity(world), DisplayState)


def is_level_loaded(world: World) -> bool:
    entity = get_or_create_session_entity(world)
    return world.has_component(entity, Level) and world.has_component(entity, History)


def get_level(world: World) -> Level:
    entity = get_or_create_session_entity(world)
    try:
        return world.component_for_entity(entity, Level)
    except KeyError:
        raise NoLevelLoadedError() from None


def get_history(world: World) -> History:
    entity = get_or_create_session_entity(world)
    try:
        return world.component_for_entity(entity, History)
    except KeyError:
        raise NoLevelLoadedError() from None


def current_state(world: World) -> GameState:
    return get_history(world).current_state()


def display_state(world: World) -> GameState:
    """The snapshot the UI should draw: a hover state when present, else the current step."""
    display = get_display_state(world)
    if display.source != "current" and display.state is not None:
        return display.state
    return current_state(world)
