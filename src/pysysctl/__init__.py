"""
pysysctl - read and write kernel parameters under /proc/sys.

Maps dotted keys like net.ipv4.ip_forward onto files and reads,
writes, preloads or lists them.
"""

from __future__ import annotations

__version__ = "1.1.0"

from pysysctl.sysctl import main, run

__all__ = ["main", "run", "__version__"]
