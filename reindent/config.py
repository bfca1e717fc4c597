# reindent/config.py
from __future__ import annotations

import contextlib
import json
import os
import tempfile
from datetime import datetime

from reindent.indentation import (
    IndentationParseError,
    IndentationStyle,
    Spaces,
    parse_indentation,
)

APP_DIR = os.path.expanduser("~/.reindent")
CONFIG_PATH = os.path.join(APP_DIR, "config.json")

DEFAULT_LOG_LEVEL = "DEBUG"

DEFAULTS = {
    # Style tokens, written the same way as on the command line: "tab" or "4".
    "from": None,
    "to": None,
    "log_level": DEFAULT_LOG_LEVEL,
}


class ConfigSaveError(Exception):
    """Raised when the configuration cannot be written to disk."""


def _backup_corrupt_config() -> None:
    stamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    with contextlib.suppress(OSError):
        os.replace(CONFIG_PATH, f"{CONFIG_PATH}.corrupt-{stamp}")


def load_config() -> dict:
    if not os.path.exists(CONFIG_PATH):
        return DEFAULTS.copy()
    try:
        with open(CONFIG_PATH, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        data = None
    if not isinstance(data, dict):
        _backup_corrupt_config()
        with contextlib.suppress(ConfigSaveError):
            save_config(DEFAULTS)
        return DEFAULTS.copy()
    for k, v in DEFAULTS.items():
        data.setdefault(k, v)
    return data


def save_config(cfg: dict) -> None:
    """Write the defaults next to the old file, then swap it in."""
    try:
        payload = json.dumps(cfg, indent=2, sort_keys=True) + "\n"
        os.makedirs(APP_DIR, exist_ok=True)
    except (OSError, TypeError, ValueError) as exc:
        raise ConfigSaveError(f"cannot save reindent defaults to {CONFIG_PATH}: {exc}") from exc

    fd, pending = tempfile.mkstemp(prefix=".config-", suffix=".json", dir=APP_DIR)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        os.replace(pending, CONFIG_PATH)
    except OSError as exc:
        with contextlib.suppress(OSError):
            os.unlink(pending)
        raise ConfigSaveError(f"cannot save reindent defaults to {CONFIG_PATH}: {exc}") from exc


def resolve_style(
    cli_value: IndentationStyle | None, cfg: dict, key: str
) -> IndentationStyle | None:
    """Prefer the command-line style, else parse the configured token."""
    if cli_value is not None:
        return cli_value
    token = cfg.get(key)
    if token is None:
        return None
    try:
        return parse_indentation(str(token))
    except IndentationParseError as exc:
        raise IndentationParseError(f"{CONFIG_PATH}: key {key!r}: {exc}") from exc


def style_token(style: IndentationStyle | None) -> str | None:
    """Inverse of :func:`parse_indentation`, for persisting a style."""
    if style is None:
        return None
    if isinstance(style, Spaces):
        return str(style.count)
    return "tab"
