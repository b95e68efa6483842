"""Read every key under the root, depth first."""

from __future__ import annotations

import os
import stat
import sys
from pathlib import Path

from pysysctl.core.accessor import read_setting, report
from pysysctl.core.config import Display, log_event
from pysysctl.core.errors import DirOpenFailure


def display_all(root: Path, display: Display, path: Path | None = None) -> int:
    """Print every key below path (default: root).

    Keeps going past failures; the result is the OR of every read's status,
    so any failure in the tree makes it nonzero.
    """
    if path is None:
        path = root
    try:
        names = sorted(os.listdir(path))
    except OSError as e:
        log_event("error", "walk_failed", path=str(path), error=str(e))
        return report(DirOpenFailure(str(path)))

    rc = 0
    for name in names:
        entry = path / name
        try:
            mode = os.stat(entry).st_mode
        except OSError as e:
            log_event("warning", "walk_failed", path=str(entry), error=str(e))
            print(f"{entry}: {e.strerror}", file=sys.stderr)
            continue
        if stat.S_ISDIR(mode):
            rc |= display_all(root, display, entry)
        else:
            # read_setting puts the root back in front
            rc |= read_setting(entry.relative_to(root).as_posix(), root, display)
    return rc
