# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Rich consoles for report output and user-facing messages."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from functools import lru_cache

from rich.console import Console


def detect_tty(*, stderr: bool = False) -> bool:
    """Return ``True`` when stdout (or stderr when *stderr* is set) is a terminal."""

    stream = sys.stderr if stderr else sys.stdout
    isatty = getattr(stream, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except ValueError:
        # Closed streams raise instead of answering.
        return False


@dataclass(frozen=True, slots=True)
class ConsoleKey:
    """Presentation settings identifying one cached console."""

    color: bool
    emoji: bool
    stderr: bool
    terminal: bool


class RichConsoleManager:
    """Hand out one Rich :class:`Console` per stream and presentation setting.

    Report listings go to stdout. Status messages (``info``, ``warn`` and
    friends) ask for the stderr console so ``--format raw`` and
    ``--format json`` output stays parseable.
    """

    def __init__(self) -> None:
        self._consoles: dict[ConsoleKey, Console] = {}

    def get(self, *, color: bool, emoji: bool, stderr: bool = False) -> Console:
        """Return the console for the given colour, emoji and stream choice.

        Colour is only enabled when requested and the target stream is a
        terminal.
        """

        terminal = detect_tty(stderr=stderr)
        key = ConsoleKey(color=color and terminal, emoji=emoji, stderr=stderr, terminal=terminal)
        console = self._consoles.get(key)
        if console is None:
            console = Console(
                stderr=stderr,
                color_system="auto" if key.color else None,
                force_terminal=terminal,
                no_color=not key.color,
                emoji=emoji,
                highlight=False,
                soft_wrap=True,
            )
            self._consoles[key] = console
        return console

    def messages(self, *, color: bool, emoji: bool) -> Console:
        """Return the stderr console used for user-facing messages."""

        return self.get(color=color, emoji=emoji, stderr=True)


@lru_cache(maxsize=1)
def get_console_manager() -> RichConsoleManager:
    """Return the process-wide :class:`RichConsoleManager`."""

    return RichConsoleManager()


__all__ = ["ConsoleKey", "RichConsoleManager", "detect_tty", "get_console_manager"]
