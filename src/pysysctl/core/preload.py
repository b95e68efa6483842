"""Apply a sysctl.conf-style file of name=value lines."""

from __future__ import annotations

import sys
from collections.abc import Iterable, Iterator
from pathlib import Path

from pysysctl.core.accessor import Setting, report, write_setting
from pysysctl.core.config import Display, log_event
from pysysctl.core.errors import PreloadFileFailure, bad_line_warning

COMMENT_PREFIXES = ("#", ";")


def parse_preload(lines: Iterable[str]) -> Iterator[tuple[int, Setting | None]]:
    """Yield (lineno, setting) for each line that is not blank or a comment.

    Line numbers are 1-based over every physical line. `setting` is None
    when the line is not name=value.
    """
    for lineno, raw_line in enumerate(lines, 1):
        line = raw_line.strip(" \t\r\n")
        if len(line) < 2 or line.startswith(COMMENT_PREFIXES):
            continue
        name, _, value = line.partition("=")
        name = name.strip(" \t")
        value = value.lstrip(" \t")
        if not name or not value:
            yield lineno, None
        else:
            yield lineno, Setting(name, value)


def preload(source: Path, root: Path, display: Display) -> int:
    """Write every setting in source. Bad lines warn; they never stop the run."""
    try:
        f = open(source, errors="replace")
    except OSError as e:
        log_event("error", "preload_open_failed", source=str(source), error=str(e))
        return report(PreloadFileFailure(str(source)))

    rc = 0
    with f:
        for lineno, setting in parse_preload(f):
            if setting is None:
                log_event("warning", "preload_bad_line", source=str(source), lineno=lineno)
                print(bad_line_warning(str(source), lineno), file=sys.stderr)
                continue
            rc |= write_setting(str(setting), root, display)
    return rc
