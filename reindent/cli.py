"""Command-line entry point: ``reindent -T tab src/*.py``."""
from __future__ import annotations

import logging
from pathlib import Path

import click

from reindent import config
from reindent.files import OutputMode, reindent_files, reindent_stream
from reindent.indentation import IndentationParseError, IndentationStyle, parse_indentation
from reindent.logging_setup import setup_logging

logger = logging.getLogger(__name__)


class IndentationParam(click.ParamType):
    name = "STYLE"

    def convert(self, value, param, ctx) -> IndentationStyle:
        if not isinstance(value, str):
            return value
        try:
            return parse_indentation(value)
        except IndentationParseError as exc:
            self.fail(str(exc), param, ctx)


INDENTATION = IndentationParam()


def read_stdin() -> str:
    # Binary read: text mode would turn CRLF into LF before reindenting.
    return click.get_binary_stream("stdin").read().decode("utf-8")


def emit(text: str) -> None:
    """Write ``text`` to stdout unchanged.

    ``click.echo`` strips ANSI escapes when stdout is not a terminal, and
    those bytes are file content here.
    """
    stdout = click.get_binary_stream("stdout")
    stdout.write(text.encode("utf-8"))
    stdout.flush()


def _save_defaults(
    cfg: dict, source: IndentationStyle | None, target: IndentationStyle | None
) -> None:
    if source is not None:
        cfg["from"] = config.style_token(source)
    if target is not None:
        cfg["to"] = config.style_token(target)
    try:
        config.save_config(cfg)
    except config.ConfigSaveError as exc:
        raise click.ClickException(str(exc)) from exc
    logger.info("saved defaults to %s", config.CONFIG_PATH)


@click.command(name="reindent")
@click.argument("files", nargs=-1, type=click.Path(path_type=Path))
@click.option(
    "-F",
    "--from",
    "source",
    type=INDENTATION,
    help="Assume this indentation when reindenting. Auto-detected if omitted.",
)
@click.option(
    "-T",
    "--to",
    "target",
    type=INDENTATION,
    help="Indentation the output should have: 'tab' or a number of spaces.",
)
@click.option(
    "-i",
    "--in-place",
    is_flag=True,
    help="Reindent the files in place rather than printing them to stdout.",
)
@click.option(
    "--save-defaults",
    is_flag=True,
    help="Store the given --from/--to in the config file and exit.",
)
@click.pass_context
def main(
    ctx: click.Context,
    files: tuple[Path, ...],
    source: IndentationStyle | None,
    target: IndentationStyle | None,
    in_place: bool,
    save_defaults: bool,
) -> None:
    """Quickly reindent FILES, without altering other aspects of formatting.

    Reads stdin when no FILES are given.
    """
    cfg = config.load_config()
    setup_logging(cfg.get("log_level"))

    if save_defaults:
        _save_defaults(cfg, source, target)
        return

    try:
        source = config.resolve_style(source, cfg, "from")
        target = config.resolve_style(target, cfg, "to")
    except IndentationParseError as exc:
        raise click.UsageError(str(exc), ctx) from exc
    if target is None:
        raise click.UsageError("Missing option '-T' / '--to'.", ctx)

    if not files:
        logger.info("reindenting from stdin")
        if in_place:
            logger.warning("--in-place has no effect when reading stdin")
        try:
            text = read_stdin()
        except UnicodeDecodeError as exc:
            logger.error("<stdin>: cannot reindent input: %s", exc)
            ctx.exit(1)
        emit(reindent_stream(text, source, target).text)
        return

    logger.info("reindenting from list of files")
    output_mode = OutputMode.IN_PLACE if in_place else OutputMode.STDOUT
    failures = reindent_files(files, source, target, output_mode, emit)
    if failures:
        logger.error("%d of %d files could not be reindented", len(failures), len(files))
        ctx.exit(1)


if __name__ == "__main__":
    main()
