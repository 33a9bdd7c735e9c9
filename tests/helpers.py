from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from esper import World

from chainbuild.components.game_state import GameState
from chainbuild.events.bus import EventBus, EVENT_LEVEL_LOAD_REQUEST
from chainbuild.world import Systems, create_systems, create_world


def make_state(rows: Sequence[str], *, stars: int = 0, bombs: int = 0, score: int = 0, num_built: int = 0) -> GameState:
    """Build a GameState from level-style rows ('.' empty, digits are tiers)."""

    grid = [[None if ch == '.' else int(ch) for ch in row] for row in rows]
    return GameState(score=score, num_built=num_built, num_stars=stars, num_bombs=bombs, grid=grid)


def level_text(rows: Sequence[str], *, stars: int = 0, bombs: int = 0, queue: Sequence[int] = ()) -> str:
    lines = [f"{len(rows)} {len(rows[0])}", f"{stars} {bombs}", *rows, str(len(queue))]
    if queue:
        lines.append(" ".join(str(tier) for tier in queue))
    return "\n".join(lines) + "\n"


def make_session(
    rows: Sequence[str],
    *,
    stars: int = 0,
    bombs: int = 0,
    queue: Sequence[int] = (),
    filename: Optional[str] = None,
    output_dir: Optional[Path] = None,
) -> tuple[EventBus, World, Systems]:
    """Event bus + world with every system wired and the level already loaded."""

    bus = EventBus()
    world = create_world(bus)
    systems = create_systems(world, bus, output_dir=output_dir)
    bus.emit(
        EVENT_LEVEL_LOAD_REQUEST,
        text=level_text(rows, stars=stars, bombs=bombs, queue=queue),
        filename=filename,
    )
    return bus, world, systems


def recorder(bus: EventBus, event: str) -> list[dict]:
    """Subscribe to ``event`` and collect every payload."""

    received: list[dict] = []
    bus.subscribe(event, lambda sender, **payload: received.append(payload))
    return received
