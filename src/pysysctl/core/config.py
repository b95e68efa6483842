"""pysysctl configuration: display options, tool settings, audit logging."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TextIO

import structlog

DEFAULT_ROOT = Path("/proc/sys")
DEFAULT_PRELOAD = Path("/etc/sysctl.conf")

USER_CONFIG = Path.home() / ".pysysctl" / "config"
ENV_CONFIG = "PYSYSCTL_CONFIG"


@dataclass(frozen=True)
class Display:
    """How values are printed. Set while parsing switches, read everywhere else."""

    print_name: bool = True  # prefix values with "key = "
    print_newline: bool = True  # terminate the last line of a value


@dataclass
class Config:
    """Tool settings."""

    root: Path = DEFAULT_ROOT
    """Directory the dotted keys are resolved under."""

    preload: Path = DEFAULT_PRELOAD
    """File applied by -p when no file is given."""

    log: Path | None = None  # None = no logging

    explicit: frozenset[str] = field(default_factory=frozenset, compare=False, repr=False)
    """Names of the settings given by the file this config came from."""


# === Config Loading ===


def _merge_configs(base: Config, overlay: Config) -> Config:
    """Merge overlay config into base. Settings the overlay names win."""

    def pick(name: str):
        source = overlay if name in overlay.explicit else base
        return getattr(source, name)

    return replace(
        base,
        root=pick("root"),
        preload=pick("preload"),
        log=pick("log"),
        explicit=base.explicit | overlay.explicit,
    )


def _load_file(config: Config, path: Path) -> Config:
    try:
        overlay = parse_config(path.read_text())
    except (OSError, ValueError) as e:
        print(f"warning: failed to load {path}: {e}", file=sys.stderr)
        return config
    return _merge_configs(config, overlay)


def load_config() -> Config:
    """Load config from ~/.pysysctl/config, then $PYSYSCTL_CONFIG. Last setting wins."""
    config = Config()

    if USER_CONFIG.is_file():
        config = _load_file(config, USER_CONFIG)

    env_path = os.environ.get(ENV_CONFIG)
    if env_path:
        env_config_path = Path(env_path).expanduser()
        if env_config_path.is_file():
            config = _load_file(config, env_config_path)

    return config


def parse_config(text: str) -> Config:
    """Parse config text into Config object. Raises ValueError on syntax errors."""
    settings: dict[str, Path] = {}

    for lineno, raw_line in enumerate(text.splitlines(), 1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        parts = line.split(None, 1)
        directive = parts[0].lower()
        rest = parts[1].strip() if len(parts) > 1 else ""

        try:
            if directive == "set":
                _apply_setting(settings, rest)
            else:
                raise ValueError(f"unknown directive '{directive}'")
        except ValueError as e:
            raise ValueError(f"line {lineno}: {e}") from None

    return Config(
        root=settings.get("root", DEFAULT_ROOT),
        preload=settings.get("preload", DEFAULT_PRELOAD),
        log=settings.get("log"),
        explicit=frozenset(settings),
    )


def _apply_setting(settings: dict[str, Path], rest: str) -> None:
    """Parse and apply a 'set' directive. Raises ValueError on invalid setting."""
    if not rest:
        raise ValueError("'set' requires a setting name")

    parts = rest.split(None, 1)
    key = parts[0].lower()
    value = parts[1].strip() if len(parts) > 1 else None

    # All settings are paths
    if key not in ("root", "preload", "log"):
        raise ValueError(f"unknown setting '{key}'")
    if value is None:
        raise ValueError(f"'{key}' requires a path")
    settings[key] = Path(value).expanduser()


# === Logging ===

_logger: structlog.typing.FilteringBoundLogger | None = None
_log_stream: TextIO | None = None


def configure_logging(config: Config) -> None:
    """Configure the audit log based on config settings. Call once at startup."""
    global _logger, _log_stream
    if _log_stream is not None:
        _log_stream.close()
        _log_stream = None
    if config.log is None:
        _logger = None
        return

    try:
        config.log.parent.mkdir(parents=True, exist_ok=True)
        _log_stream = open(config.log, "a")
    except OSError as e:
        print(f"warning: cannot open log {config.log}: {e}", file=sys.stderr)
        _logger = None
        return

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso", key="ts"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.INFO),
        logger_factory=structlog.PrintLoggerFactory(file=_log_stream),
        cache_logger_on_first_use=False,
    )
    _logger = structlog.get_logger()


def log_event(level: str, event: str, **kwargs) -> None:
    """Log an event. No-op if logging not configured."""
    if _logger is None:
        return
    try:
        getattr(_logger, level)(event, **kwargs)
    except Exception:
        pass  # Logging is optional - don't fail the command
