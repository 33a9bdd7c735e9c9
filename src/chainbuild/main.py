"""Headless entry point for chainbuild.

Loads a level, optionally runs a command file as one batch, saves the command
log and prints the resulting board and status panel.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from chainbuild.events.bus import (
    EventBus,
    EVENT_NOTIFY,
    EVENT_LEVEL_LOAD_REQUEST,
    EVENT_LEVEL_LOAD_FAILED,
    EVENT_COMMAND_BATCH_REQUEST,
    EVENT_COMMAND_BATCH_FAILED,
    EVENT_SAVE_REQUEST,
    EVENT_OUTPUT_SAVED,
)
from chainbuild.systems.session_utils import current_state, get_level, is_level_loaded
from chainbuild.systems.status import queue_preview, render_grid_text, status_lines
from chainbuild.utils.logging_utils import configure_logging
from chainbuild.world import create_systems, create_world


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chainbuild",
        description="Replay chainbuild commands against a level file.",
    )
    parser.add_argument("level", help="Path to the level (.in) file")
    parser.add_argument("--commands", "-c", help="File with PUT/STAR/BOMBER lines to execute as one batch")
    parser.add_argument("--output", "-o", help="Where to save the command log (default: <level>.out)")
    parser.add_argument("--no-save", action="store_true", help="Do not write the command log")
    parser.add_argument("--log-level", default=None, help="Logging level (default: $CHAINBUILD_LOG_LEVEL or INFO)")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(level=args.log_level)

    event_bus = EventBus()
    level_path = Path(args.level)
    world = create_world(event_bus)
    create_systems(world, event_bus, output_dir=level_path.parent)

    failures: list[str] = []
    event_bus.subscribe(EVENT_NOTIFY, lambda sender, **kw: print(kw.get('message', '')))
    event_bus.subscribe(EVENT_LEVEL_LOAD_FAILED, lambda sender, **kw: failures.append('load'))

    def on_batch_failed(sender, **kw):
        # An empty command file is only a notice.
        if kw.get('line_number') is not None:
            failures.append('batch')

    event_bus.subscribe(EVENT_COMMAND_BATCH_FAILED, on_batch_failed)
    event_bus.subscribe(EVENT_OUTPUT_SAVED, lambda sender, **kw: print(f"Saved: {kw.get('path')}"))

    event_bus.emit(EVENT_LEVEL_LOAD_REQUEST, path=level_path)
    if not is_level_loaded(world):
        return 1

    if args.commands:
        try:
            text = Path(args.commands).read_text(encoding="utf-8")
        except OSError as exc:
            print(f"Error: cannot read command file: {exc}", file=sys.stderr)
            return 1
        event_bus.emit(EVENT_COMMAND_BATCH_REQUEST, text=text)

    if not args.no_save:
        event_bus.emit(EVENT_SAVE_REQUEST, path=Path(args.output) if args.output else None)

    for line in render_grid_text(world):
        print(line)
    for line in status_lines(world):
        print(line)
    upcoming = queue_preview(get_level(world).queue, current_state(world).num_built)
    print("Next: " + (" ".join(upcoming) if upcoming else "(queue empty)"))

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
