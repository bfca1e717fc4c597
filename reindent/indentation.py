"""Indentation styles and the per-line operations built on them.

A style is one unit of leading whitespace: a single tab, or a fixed run of
spaces. Every operation here dispatches explicitly on the two cases so the
callers in :mod:`reindent.reindenter` stay pure and easy to test.
"""
from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

TAB_TOKENS = frozenset({"tab", "tabs"})
SPACE_COUNT_RE = re.compile(r"-?[0-9]+")


class IndentationParseError(ValueError):
    """Raised when a textual style specification cannot be parsed."""


@dataclass(frozen=True)
class Tab:
    def __str__(self) -> str:
        return "tab"


@dataclass(frozen=True)
class Spaces:
    count: int

    def __post_init__(self) -> None:
        # Stripping a zero-width unit never consumes anything.
        if self.count < 1:
            raise ValueError(f"Spaces needs a count of at least 1, got {self.count}")

    def __str__(self) -> str:
        return "1 space" if self.count == 1 else f"{self.count} spaces"


IndentationStyle = Tab | Spaces

TAB = Tab()


def unit(style: IndentationStyle) -> str:
    """Return the literal text of one indentation level."""
    if isinstance(style, Tab):
        return "\t"
    return " " * style.count


def style_of_line(line: str) -> IndentationStyle | None:
    if line.startswith("\t"):
        return TAB
    spaces = len(line) - len(line.lstrip(" "))
    if spaces > 0:
        return Spaces(spaces)
    return None


def detect(lines: Iterable[str]) -> IndentationStyle | None:
    """Return the style of the first indented line, or ``None``.

    Only that one line is consulted: its leading whitespace fixes the assumed
    width of a level for the whole text. Later lines are never compared
    against it.
    """
    for line in lines:
        style = style_of_line(line)
        if style is not None:
            return style
    return None


def strip_one(style: IndentationStyle, line: str) -> str | None:
    """Remove exactly one level from the start of ``line``.

    Returns ``None`` when the line does not start with a full unit. A run of
    fewer than ``count`` spaces is not a match.
    """
    if isinstance(style, Tab):
        if line.startswith("\t"):
            return line[1:]
        return None
    prefix = " " * style.count
    if line.startswith(prefix):
        return line[style.count :]
    return None


def strip_all(style: IndentationStyle, line: str) -> tuple[str, int]:
    """Strip as many whole levels as possible, returning ``(rest, levels)``."""
    levels = 0
    while True:
        stripped = strip_one(style, line)
        if stripped is None:
            return line, levels
        line = stripped
        levels += 1


def render(style: IndentationStyle, count: int, buffer: list[str]) -> None:
    """Append ``count`` levels of ``style`` to ``buffer``."""
    if count <= 0:
        return
    if isinstance(style, Tab):
        buffer.append("\t" * count)
    else:
        buffer.append(" " * (style.count * count))


def render_text(style: IndentationStyle, count: int) -> str:
    buffer: list[str] = []
    render(style, count, buffer)
    return "".join(buffer)


def parse_indentation(value: str) -> IndentationStyle:
    """Parse ``tab``/``tabs`` or a positive space count."""
    token = value.strip()
    if token.lower() in TAB_TOKENS:
        return TAB
    # Plain ASCII decimal only: int() would also take "+4", "1_0" and "٤".
    if not SPACE_COUNT_RE.fullmatch(token):
        raise IndentationParseError(
            f"invalid indentation {value!r}: expected 'tab', 'tabs' or a number of spaces"
        )
    count = int(token)
    if count < 1:
        raise IndentationParseError(
            f"invalid indentation {value!r}: the number of spaces must be at least 1"
        )
    return Spaces(count)


__all__ = [
    "IndentationParseError",
    "IndentationStyle",
    "Spaces",
    "TAB",
    "Tab",
    "detect",
    "parse_indentation",
    "render",
    "render_text",
    "strip_all",
    "strip_one",
    "style_of_line",
    "unit",
]
