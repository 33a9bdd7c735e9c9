from __future__ import annotations

import logging
from pathlib import Path

from esper import World

from chainbuild.errors import GameError
from chainbuild.events.bus import (
    EventBus,
    EVENT_UNDO_REQUEST,
    EVENT_REDO_REQUEST,
    EVENT_HISTORY_JUMP_REQUEST,
    EVENT_HISTORY_CHANGED,
    EVENT_COPY_COMMANDS_REQUEST,
    EVENT_COMMANDS_EXPORTED,
    EVENT_SAVE_REQUEST,
    EVENT_OUTPUT_SAVED,
    EVENT_NOTIFY,
)
from chainbuild.systems.session_utils import get_display_state, get_history, get_level, is_level_loaded
from chainbuild.utils.commands import format_output, output_filename

logger = logging.getLogger(__name__)


class HistorySystem:
    """Moves the history pointer and exports the command log.

    Logic:
      - undo/redo/jump only move the pointer; no snapshot is dropped.
      - copy exports the commands up to the pointer (no terminator) and needs at least one step.
      - save writes the commands up to the pointer followed by END, next to the
        requested path or as ``<level>.out`` in the working directory.
    """
    def __init__(self, world: World, event_bus: EventBus, *, output_dir: Path | None = None):
        self.world = world
        self.event_bus = event_bus
        self.output_dir = Path(output_dir) if output_dir is not None else Path.cwd()
        self.event_bus.subscribe(EVENT_UNDO_REQUEST, self.on_undo)
        self.event_bus.subscribe(EVENT_REDO_REQUEST, self.on_redo)
        self.event_bus.subscribe(EVENT_HISTORY_JUMP_REQUEST, self.on_jump)
        self.event_bus.subscribe(EVENT_COPY_COMMANDS_REQUEST, self.on_copy)
        self.event_bus.subscribe(EVENT_SAVE_REQUEST, self.on_save)

    def on_undo(self, sender, **kwargs):
        self._move('undo', lambda history: history.undo())

    def on_redo(self, sender, **kwargs):
        self._move('redo', lambda history: history.redo())

    def on_jump(self, sender, **kwargs):
        index = kwargs.get('index')
        self._move('jump', lambda history: history.jump_to(index))

    def _move(self, reason: str, step) -> None:
        if not is_level_loaded(self.world):
            return
        history = get_history(self.world)
        try:
            step(history)
        except GameError as exc:
            self.event_bus.emit(EVENT_NOTIFY, message=exc.message, level='error')
            return
        get_display_state(self.world).reset()
        self.event_bus.emit(
            EVENT_HISTORY_CHANGED,
            step_number=history.step_number,
            length=len(history),
            reason=reason,
        )

    def on_copy(self, sender, **kwargs):
        if not is_level_loaded(self.world):
            return
        history = get_history(self.world)
        if history.step_number == 0:
            self.event_bus.emit(EVENT_NOTIFY, message="No command can be copied.", level='error')
            return
        commands = history.export_commands()
        text = format_output(commands, terminate=False)
        self.event_bus.emit(EVENT_COMMANDS_EXPORTED, text=text, commands=commands, terminated=False)
        self.event_bus.emit(EVENT_NOTIFY, message="Commands have been copied to clipboard.", level='info')

    def on_save(self, sender, **kwargs):
        if not is_level_loaded(self.world):
            return
        commands = get_history(self.world).export_commands()
        text = format_output(commands, terminate=True)
        path = kwargs.get('path')
        if path is None:
            path = self.output_dir / output_filename(get_level(self.world).filename)
        path = Path(path)
        try:
            with path.open("w", encoding="utf-8", newline="\n") as handle:
                handle.write(text)
        except OSError:
            logger.exception("Failed to write output file %s", path)
            self.event_bus.emit(EVENT_NOTIFY, message="Failed to save output file.", level='error')
            return
        logger.info("Saved %d command(s) to %s", len(commands), path)
        self.event_bus.emit(EVENT_COMMANDS_EXPORTED, text=text, commands=commands, terminated=True)
        self.event_bus.emit(EVENT_OUTPUT_SAVED, path=path, text=text)
        self.event_bus.emit(EVENT_NOTIFY, message="Output file has been saved.", level='info')
