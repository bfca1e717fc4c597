from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
from click.testing import CliRunner

from reindent import config
from reindent.cli import main
from reindent.logging_setup import LOG_ENV_VAR


@pytest.fixture(autouse=True)
def _isolated(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    app_dir = tmp_path / "confdir"
    monkeypatch.setattr(config, "APP_DIR", str(app_dir))
    monkeypatch.setattr(config, "CONFIG_PATH", str(app_dir / "config.json"))
    # Keep stderr quiet so ``result.output`` holds only reindented text.
    monkeypatch.setenv(LOG_ENV_VAR, "CRITICAL")
    yield
    logger = logging.getLogger("reindent")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


def _write_config(data: dict) -> None:
    Path(config.APP_DIR).mkdir(parents=True, exist_ok=True)
    Path(config.CONFIG_PATH).write_text(json.dumps(data), encoding="utf-8")


def test_prints_reindented_files_in_order(tmp_path: Path):
    first = tmp_path / "first.txt"
    first.write_text("a\n    b\n", encoding="utf-8")
    second = tmp_path / "second.txt"
    second.write_text("\tc\n", encoding="utf-8")

    result = CliRunner().invoke(main, ["-T", "tab", str(first), str(second)])

    assert result.exit_code == 0, result.output
    assert result.output == "a\n\tb\n\tc\n"
    assert first.read_text(encoding="utf-8") == "a\n    b\n"


def test_in_place_overwrites_files(tmp_path: Path):
    target = tmp_path / "code.py"
    target.write_text("def f():\n\treturn 1\n", encoding="utf-8")

    result = CliRunner().invoke(main, ["--to", "4", "--in-place", str(target)])

    assert result.exit_code == 0, result.output
    assert result.output == ""
    assert target.read_text(encoding="utf-8") == "def f():\n    return 1\n"


def test_explicit_from_keeps_partial_levels(tmp_path: Path):
    target = tmp_path / "partial.txt"
    target.write_text("      x\n", encoding="utf-8")

    result = CliRunner().invoke(main, ["-F", "4", "-T", "tabs", str(target)])

    assert result.exit_code == 0, result.output
    assert result.output == "\t  x\n"


def test_reads_stdin_when_no_files():
    result = CliRunner().invoke(main, ["-T", "2"], input="x\n\ty\n")

    assert result.exit_code == 0, result.output
    assert result.output == "x\n  y\n"


@pytest.mark.parametrize("value", ["0", "-4", "wide"])
def test_rejects_invalid_styles_before_touching_files(tmp_path: Path, value: str):
    target = tmp_path / "keep.txt"
    target.write_text("\tkeep\n", encoding="utf-8")

    result = CliRunner().invoke(main, ["-T", value, "-i", str(target)])

    assert result.exit_code == 2
    assert "invalid indentation" in result.output
    assert target.read_text(encoding="utf-8") == "\tkeep\n"


def test_missing_target_is_a_usage_error():
    result = CliRunner().invoke(main, [], input="\tx\n")

    assert result.exit_code == 2
    assert "--to" in result.output


def test_target_can_come_from_config(tmp_path: Path):
    _write_config({"to": 2})
    target = tmp_path / "a.txt"
    target.write_text("\tx\n", encoding="utf-8")

    result = CliRunner().invoke(main, [str(target)])

    assert result.exit_code == 0, result.output
    assert result.output == "  x\n"


def test_invalid_configured_style_is_a_usage_error(tmp_path: Path):
    _write_config({"to": "0"})

    result = CliRunner().invoke(main, [str(tmp_path / "a.txt")])

    assert result.exit_code == 2
    assert "'to'" in result.output


def test_save_defaults_persists_styles():
    result = CliRunner().invoke(main, ["-F", "tab", "-T", "4", "--save-defaults"])

    assert result.exit_code == 0, result.output
    with open(config.CONFIG_PATH, encoding="utf-8") as f:
        saved = json.load(f)
    assert saved["from"] == "tab"
    assert saved["to"] == "4"
    assert saved["log_level"] == config.DEFAULT_LOG_LEVEL


def test_failed_file_does_not_stop_the_rest(tmp_path: Path):
    good = tmp_path / "good.txt"
    good.write_text("  x\n", encoding="utf-8")

    result = CliRunner().invoke(main, ["-T", "tab", str(tmp_path / "missing.txt"), str(good)])

    assert result.exit_code == 1
    assert result.output == "\tx\n"


def test_stdout_keeps_escape_sequences(tmp_path: Path):
    target = tmp_path / "colored.log"
    target.write_bytes(b"a\n    \x1b[31mred\x1b[0m\n")

    result = CliRunner().invoke(main, ["-T", "tab", str(target)])

    assert result.exit_code == 0, result.output
    assert result.stdout_bytes == b"a\n\t\x1b[31mred\x1b[0m\n"


def test_unindented_stdin_keeps_crlf():
    result = CliRunner().invoke(main, ["-T", "tab"], input=b"one\r\ntwo\r\n")

    assert result.exit_code == 0, result.output
    assert result.stdout_bytes == b"one\r\ntwo\r\n"


def test_indented_stdin_is_normalized_to_lf():
    result = CliRunner().invoke(main, ["-T", "2"], input=b"one\r\n\ttwo\r\n")

    assert result.exit_code == 0, result.output
    assert result.stdout_bytes == b"one\n  two\n"


def test_non_utf8_stdin_fails_without_output():
    result = CliRunner().invoke(main, ["-T", "tab"], input=b"\xff\xfe\tbad\n")

    assert result.exit_code == 1
    assert result.stdout_bytes == b""
