"""
Shared test fixtures for pysysctl tests.
"""

from pathlib import Path

import pytest
import structlog

from pysysctl.core import config as config_module
from pysysctl.core.config import Config, Display


@pytest.fixture(autouse=True)
def isolate_config(monkeypatch, tmp_path):
    """Keep the real ~/.pysysctl/config and audit log out of tests."""
    monkeypatch.setattr(config_module, "USER_CONFIG", tmp_path / "no-user-config")
    monkeypatch.delenv(config_module.ENV_CONFIG, raising=False)
    yield
    config_module.configure_logging(Config())
    structlog.reset_defaults()


@pytest.fixture
def sysroot(tmp_path):
    """Factory for a fake /proc/sys tree.

    Takes {"net/ipv4/ip_forward": "1\\n", ...} and returns the root directory.
    """

    def _make(files: dict[str, str]) -> Path:
        root = tmp_path / "proc-sys"
        root.mkdir(exist_ok=True)
        for rel, content in files.items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
        return root

    return _make


@pytest.fixture
def display():
    """Default display: name-prefixed, newline-terminated."""
    return Display()


@pytest.fixture
def fail_open(monkeypatch):
    """Make opening selected paths in the accessor raise an OSError.

    Returns a dict {path: exception}; every attempted path is recorded in
    the `opened` list attribute of the returned object.
    """
    from pysysctl.core import accessor

    class Failures(dict):
        opened: list[Path]

    failures = Failures()
    failures.opened = []
    real_open = open

    def _open(file, *args, **kwargs):
        failures.opened.append(Path(file))
        exc = failures.get(Path(file))
        if exc is not None:
            raise exc
        return real_open(file, *args, **kwargs)

    monkeypatch.setattr(accessor, "open", _open, raising=False)
    return failures
