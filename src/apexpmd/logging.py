# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing output helpers with optional colour and emoji support.

Messages (:func:`info`, :func:`ok`, :func:`warn`, :func:`fail`) are written to
stderr. Report framing (:func:`section`) and the issue counter
(:func:`status`) belong to the report and are written to stdout.
"""

from __future__ import annotations

from enum import Enum
from typing import Final, NamedTuple

from rich.rule import Rule
from rich.text import Text

from .console import detect_tty, get_console_manager

STATUS_STYLE: Final[str] = "bold red"


class MessageKind(str, Enum):
    """Kinds of user-facing message."""

    INFO = "info"
    OK = "ok"
    WARN = "warn"
    FAIL = "fail"


class Decoration(NamedTuple):
    symbol: str
    style: str


_DECORATIONS: Final[dict[MessageKind, Decoration]] = {
    MessageKind.INFO: Decoration("ℹ️ ", "cyan"),
    MessageKind.OK: Decoration("✅ ", "green"),
    MessageKind.WARN: Decoration("⚠️ ", "yellow"),
    MessageKind.FAIL: Decoration("❌ ", "red"),
}


def message(kind: MessageKind, msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Write *msg* to stderr decorated for *kind*.

    Args:
        kind: Message kind selecting the emoji prefix and colour.
        msg: Message text.
        use_emoji: Prefix the message with the kind's emoji.
        use_color: Explicit colour flag; ``None`` follows stderr TTY detection.
    """

    color = detect_tty(stderr=True) if use_color is None else use_color
    decoration = _DECORATIONS[kind]
    text = Text(f"{decoration.symbol}{msg}" if use_emoji else msg)
    if color:
        text.stylize(decoration.style)
    get_console_manager().messages(color=color, emoji=use_emoji).print(text)


def info(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    message(MessageKind.INFO, msg, use_emoji=use_emoji, use_color=use_color)


def ok(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    message(MessageKind.OK, msg, use_emoji=use_emoji, use_color=use_color)


def warn(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    message(MessageKind.WARN, msg, use_emoji=use_emoji, use_color=use_color)


def fail(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    message(MessageKind.FAIL, msg, use_emoji=use_emoji, use_color=use_color)


def section(title: str, *, use_color: bool) -> None:
    """Print a report heading on stdout, as a rule when colour is enabled."""

    console = get_console_manager().get(color=use_color, emoji=False)
    console.print()
    console.print(Rule(title) if use_color else f"--- {title} ---", markup=False)


def status(text: str, *, use_color: bool, use_emoji: bool = True) -> None:
    """Print the issue counter text on stdout."""

    console = get_console_manager().get(color=use_color, emoji=use_emoji)
    console.print(Text(text, style=STATUS_STYLE if use_color else ""))


__all__ = ["MessageKind", "STATUS_STYLE", "fail", "info", "message", "ok", "section", "status", "warn"]
