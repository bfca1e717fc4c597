"""Read a file, reindent it, and deliver the result to a sink."""
from __future__ import annotations

import enum
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path

from reindent.indentation import IndentationStyle
from reindent.reindenter import Reindented, reindent

logger = logging.getLogger(__name__)

Emit = Callable[[str], None]


class OutputMode(enum.Enum):
    STDOUT = "stdout"
    IN_PLACE = "in-place"


@dataclass(frozen=True)
class FileFailure:
    path: Path
    error: Exception


def read_text(path: Path) -> str:
    # newline="" keeps CR/LF as-is so untouched files round-trip byte for byte.
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def write_text(path: Path, text: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)


def _log_outcome(result: Reindented, explicit: bool, where: str) -> None:
    if not explicit:
        logger.debug("%s: detected indentation: %s", where, result.source)
    if result.changed_indentation:
        logger.info("%s: reindented from %s to %s", where, result.source, result.target)
    else:
        logger.info("%s: file is not indented, leaving as is", where)


def reindent_stream(
    text: str, source: IndentationStyle | None, target: IndentationStyle
) -> Reindented:
    result = reindent(text, target, source)
    _log_outcome(result, source is not None, "<stdin>")
    return result


def reindent_file(
    path: Path,
    source: IndentationStyle | None,
    target: IndentationStyle,
    output_mode: OutputMode,
    emit: Emit,
) -> Reindented:
    """Reindent one file, then emit it or overwrite it according to ``output_mode``.

    ``OSError`` and ``UnicodeDecodeError`` propagate to the caller.
    """
    path = Path(path)
    result = reindent(read_text(path), target, source)
    _log_outcome(result, source is not None, str(path))

    if output_mode is OutputMode.IN_PLACE:
        write_text(path, result.text)
    else:
        emit(result.text)
    return result


def reindent_files(
    paths: Iterable[Path],
    source: IndentationStyle | None,
    target: IndentationStyle,
    output_mode: OutputMode,
    emit: Emit,
) -> list[FileFailure]:
    """Reindent every path; a failing path is logged and skipped."""
    failures: list[FileFailure] = []
    for path in paths:
        path = Path(path)
        try:
            reindent_file(path, source, target, output_mode, emit)
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("%s: cannot reindent file: %s", path, exc)
            failures.append(FileFailure(path=path, error=exc))
    return failures


__all__ = [
    "Emit",
    "FileFailure",
    "OutputMode",
    "read_text",
    "reindent_file",
    "reindent_files",
    "reindent_stream",
    "write_text",
]
