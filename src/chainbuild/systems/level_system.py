from __future__ import annotations

import logging

from esper import World

from chainbuild.components.game_state import GameState
from chainbuild.components.history import History
from chainbuild.components.level import Level
from chainbuild.errors import GameError
from chainbuild.events.bus import (
    EventBus,
    EVENT_LEVEL_LOAD_REQUEST,
    EVENT_LEVEL_LOADED,
    EVENT_LEVEL_LOAD_FAILED,
    EVENT_HISTORY_CHANGED,
    EVENT_NOTIFY,
)
from chainbuild.systems.session_utils import get_display_state, get_or_create_session_entity, get_session
from chainbuild.utils.level_parser import load_level, parse_level

logger = logging.getLogger(__name__)


class LevelSystem:
    """Loads level descriptions and starts a fresh history for them.

    On EVENT_LEVEL_LOAD_REQUEST with ``text`` (already read) or ``path``:
      - decode the level; IO and parse failures leave any running session untouched
      - replace Level and History on the session entity
      - emit EVENT_LEVEL_LOADED and EVENT_HISTORY_CHANGED
    """
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_LEVEL_LOAD_REQUEST, self.on_load_request)

    def on_load_request(self, sender, **kwargs):
        text = kwargs.get('text')
        path = kwargs.get('path')
        filename = kwargs.get('filename')
        if text is None and path is None:
            self._fail('missing_input', "No input file was selected.")
            return
        try:
            if text is not None:
                level = parse_level(text, filename=filename)
            else:
                level = load_level(path)
        except OSError as exc:
            logger.warning("Could not read level file %s: %s", path, exc)
            self._fail('read_error', "Failed to read input file.")
            return
        except GameError as exc:
            logger.warning("Could not parse level %s: %s", path or filename or '<text>', exc)
            self._fail('parse_error', "Failed to parse input file.", detail=str(exc))
            return
        self.load(level)

    def load(self, level: Level) -> GameState:
        rules = get_session(self.world).rules
        state = GameState(
            score=0,
            num_built=0,
            num_stars=level.num_stars,
            num_bombs=level.num_bombs,
            grid=level.grid,
            command=None,
            rules=rules,
        )
        entity = get_or_create_session_entity(self.world)
        self.world.add_component(entity, level)
        self.world.add_component(entity, History(state))
        get_display_state(self.world).reset()
        logger.info(
            "Loaded level %s: %dx%d board, %d queued, %d stars, %d bombers",
            level.filename or '<text>', level.height, level.width,
            len(level.queue), level.num_stars, level.num_bombs,
        )
        self.event_bus.emit(EVENT_LEVEL_LOADED, level=level, state=state)
        self.event_bus.emit(EVENT_HISTORY_CHANGED, step_number=0, length=1, reason='load')
        return state

    def _fail(self, reason: str, message: str, detail: str | None = None) -> None:
        self.event_bus.emit(EVENT_LEVEL_LOAD_FAILED, reason=reason, message=message, detail=detail)
        self.event_bus.emit(EVENT_NOTIFY, message=message, level='error')
