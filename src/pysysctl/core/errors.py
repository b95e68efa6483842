"""Error kinds reported by pysysctl.

Every failure a single key can hit is a SysctlError subclass carrying the
stderr message and the status code it contributes to the exit status.
OS errors are folded into three kinds by errno so the mapping can be
checked without a real /proc.
"""

from __future__ import annotations

import errno
from enum import Enum
from typing import Literal


class ErrnoKind(Enum):
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    OTHER = "other"


def classify_errno(code: int | None) -> ErrnoKind:
    """Fold a raw errno into the kinds pysysctl reports differently."""
    if code == errno.ENOENT:
        return ErrnoKind.NOT_FOUND
    if code in (errno.EACCES, errno.EPERM):
        return ErrnoKind.PERMISSION_DENIED
    return ErrnoKind.OTHER


class SysctlError(Exception):
    """Base class for per-key failures."""

    returncode = -1

    @property
    def message(self) -> str:
        return str(self)


class InvalidKey(SysctlError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(f"error: '{key}' is an unknown key")


class PermissionDenied(SysctlError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(f"error: permission denied on key '{key}'")


class UnknownIO(SysctlError):
    def __init__(self, key: str, code: int | None, action: Literal["reading", "setting"]):
        self.key = key
        self.code = code
        self.action = action
        super().__init__(f"error: unknown error {code} {action} key '{key}'")


class MalformedSetting(SysctlError):
    """A write argument with an empty name or an empty value."""

    returncode = -2

    def __init__(self, setting: str, message: str | None = None):
        self.setting = setting
        super().__init__(message or f"error: Malformed setting '{setting}'")


class NoEquals(MalformedSetting):
    """A write argument with no `=` at all."""

    returncode = -1

    def __init__(self, setting: str):
        super().__init__(setting, f"error: '{setting}' must be of the form name=value")


class DirOpenFailure(SysctlError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"error: unable to open directory '{path}'")


class PreloadFileFailure(SysctlError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"error: unable to open preload file '{path}'")


def bad_line_warning(source: str, lineno: int) -> str:
    """Warning for a preload line that is not name=value. Never fatal."""
    return f"warning: {source}({lineno}): invalid syntax, continuing..."


def error_for_os_error(
    exc: OSError, key: str, action: Literal["reading", "setting"]
) -> SysctlError:
    """Build the SysctlError matching an OSError raised while touching key."""
    kind = classify_errno(exc.errno)
    if kind is ErrnoKind.NOT_FOUND:
        return InvalidKey(key)
    if kind is ErrnoKind.PERMISSION_DENIED:
        return PermissionDenied(key)
    return UnknownIO(key, exc.errno, action)
