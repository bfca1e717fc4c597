"""Rewrite the indentation of a text from one style to another.

These are pure functions: no I/O, no logging. Callers learn what happened
from the returned :class:`Reindented`.
"""
from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from reindent.indentation import IndentationStyle, detect, render, strip_all

LINE_TERMINATOR = "\n"


@dataclass(frozen=True)
class Reindented:
    text: str
    source: IndentationStyle | None
    target: IndentationStyle

    @property
    def changed_indentation(self) -> bool:
        """False when no source style resolved and ``text`` is the input as-is."""
        return self.source is not None


def split_lines(text: str) -> list[str]:
    """Split on ``\\n``, dropping a ``\\r`` before it and any final empty line."""
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def reindent_line(line: str, source: IndentationStyle, target: IndentationStyle) -> str:
    body, levels = strip_all(source, line)
    buffer: list[str] = []
    render(target, levels, buffer)
    buffer.append(body)
    return "".join(buffer)


def reindent_lines(
    lines: Iterable[str], source: IndentationStyle, target: IndentationStyle
) -> Iterator[str]:
    for line in lines:
        yield reindent_line(line, source, target)


def reindent(
    text: str,
    target: IndentationStyle,
    source: IndentationStyle | None = None,
) -> Reindented:
    """Reindent ``text`` from ``source`` (detected if omitted) to ``target``.

    Leading whitespace that does not make up a whole level of ``source`` is
    left in the line body untouched. Every output line ends with
    :data:`LINE_TERMINATOR`. A text without any indented line is returned
    unchanged, terminators included.
    """
    lines = split_lines(text)
    if source is None:
        source = detect(lines)
    if source is None:
        return Reindented(text=text, source=None, target=target)

    output = "".join(
        f"{line}{LINE_TERMINATOR}" for line in reindent_lines(lines, source, target)
    )
    return Reindented(text=output, source=source, target=target)


__all__ = [
    "LINE_TERMINATOR",
    "Reindented",
    "reindent",
    "reindent_line",
    "reindent_lines",
    "split_lines",
]
