"""Read and write a single sysctl key.

The low-level functions (`read_values`, `write_value`, `parse_setting`) raise
SysctlError. The `*_setting` functions print values to stdout and errors to
stderr, and return the status the key contributes to the exit code.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from pysysctl.core.config import Display, log_event
from pysysctl.core.errors import (
    InvalidKey,
    MalformedSetting,
    NoEquals,
    SysctlError,
    error_for_os_error,
)
from pysysctl.core.keys import key_to_path, path_to_key


@dataclass(frozen=True)
class Setting:
    """A name=value pair to write."""

    name: str
    value: str

    def __str__(self) -> str:
        return f"{self.name}={self.value}"


def parse_setting(text: str) -> Setting:
    """Split `name=value` at the first `=`. Raises NoEquals or MalformedSetting."""
    name, equals, value = text.partition("=")
    if not equals:
        raise NoEquals(text)
    if not name or not value:
        raise MalformedSetting(text)
    return Setting(name, value)


def resolve(key: str, root: Path) -> Path:
    """Path of key under root.

    A leading slash is dropped so the key is always joined onto root.
    `..` segments are left alone, as the kernel's own tree has none.
    """
    return root / key_to_path(key).lstrip("/")


def _existing_only(path: str, flags: int) -> int:
    # Keys are never created, only rewritten
    return os.open(path, flags & ~os.O_CREAT)


def read_values(key: str, root: Path) -> list[str]:
    """Return every line of key's file, terminators included."""
    display_key = path_to_key(key)
    if not key:
        raise InvalidKey(display_key)
    try:
        with open(resolve(key, root), errors="replace") as f:
            return f.readlines()
    except OSError as e:
        raise error_for_os_error(e, display_key, "reading") from e


def write_value(setting: Setting, root: Path) -> None:
    """Replace key's value. The kernel may reject the value on write or close."""
    try:
        with open(resolve(setting.name, root), "w", opener=_existing_only) as f:
            f.write(f"{setting.value}\n")
    except OSError as e:
        raise error_for_os_error(e, path_to_key(setting.name), "setting") from e


def format_value(name: str, lines: list[str], display: Display) -> str:
    """Render a value's lines the way they are printed."""
    if display.print_name:
        return "".join(f"{name} = {line}" for line in lines)
    text = "".join(lines)
    if not display.print_newline and text.endswith("\n"):
        text = text[:-1]
    return text


def report(error: SysctlError) -> int:
    """Print error to stderr and return its status code."""
    print(error.message, file=sys.stderr)
    return error.returncode


def read_setting(key: str, root: Path, display: Display) -> int:
    """Print the value of key. Returns 0 on success, nonzero on failure."""
    try:
        lines = read_values(key, root)
    except SysctlError as e:
        log_event("warning", "read_failed", key=key, error=e.message)
        return report(e)
    sys.stdout.write(format_value(path_to_key(key), lines, display))
    return 0


def write_setting(text: str, root: Path, display: Display) -> int:
    """Apply a `name=value` string and echo the new setting on success."""
    try:
        setting = parse_setting(text)
        write_value(setting, root)
    except SysctlError as e:
        log_event("warning", "write_failed", setting=text, error=e.message)
        return report(e)
    log_event("info", "write_ok", key=setting.name, value=setting.value)
    sys.stdout.write(
        format_value(path_to_key(setting.name), [f"{setting.value}\n"], display)
    )
    return 0
