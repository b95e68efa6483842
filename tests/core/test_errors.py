"""Tests for error kinds and errno classification."""

import errno

import pytest

from pysysctl.core.errors import (
    ErrnoKind,
    InvalidKey,
    MalformedSetting,
    NoEquals,
    PermissionDenied,
    UnknownIO,
    bad_line_warning,
    classify_errno,
    error_for_os_error,
)


class TestClassifyErrno:
    """Tests for folding errno values into kinds."""

    def test_not_found(self):
        assert classify_errno(errno.ENOENT) is ErrnoKind.NOT_FOUND

    @pytest.mark.parametrize("code", [errno.EACCES, errno.EPERM])
    def test_permission(self, code):
        assert classify_errno(code) is ErrnoKind.PERMISSION_DENIED

    @pytest.mark.parametrize("code", [errno.EINVAL, errno.EIO, errno.EISDIR, None])
    def test_other(self, code):
        assert classify_errno(code) is ErrnoKind.OTHER


class TestErrorForOSError:
    """Tests for building SysctlError from OSError."""

    def test_enoent_is_invalid_key(self):
        err = error_for_os_error(FileNotFoundError(errno.ENOENT, "x"), "a.b", "reading")
        assert isinstance(err, InvalidKey)
        assert err.message == "error: 'a.b' is an unknown key"
        assert err.returncode == -1

    def test_eacces_is_permission_denied(self):
        err = error_for_os_error(PermissionError(errno.EACCES, "x"), "a.b", "setting")
        assert isinstance(err, PermissionDenied)
        assert err.message == "error: permission denied on key 'a.b'"

    def test_other_carries_errno(self):
        """Unknown errors name the raw errno and what was being done."""
        err = error_for_os_error(OSError(errno.EINVAL, "x"), "a.b", "setting")
        assert isinstance(err, UnknownIO)
        assert err.code == errno.EINVAL
        assert err.message == f"error: unknown error {errno.EINVAL} setting key 'a.b'"


class TestMessages:
    """Tests for fixed message templates."""

    def test_malformed(self):
        err = MalformedSetting("=1")
        assert err.message == "error: Malformed setting '=1'"
        assert err.returncode == -2

    def test_no_equals(self):
        """NoEquals is a MalformedSetting with its own message and code."""
        err = NoEquals("noequals")
        assert isinstance(err, MalformedSetting)
        assert err.message == "error: 'noequals' must be of the form name=value"
        assert err.returncode == -1

    def test_bad_line(self):
        assert bad_line_warning("/etc/sysctl.conf", 4) == (
            "warning: /etc/sysctl.conf(4): invalid syntax, continuing..."
        )
