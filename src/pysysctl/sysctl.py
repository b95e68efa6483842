"""Read and write kernel parameters under /proc/sys.

    pysysctl [-n] variable ...            print values
    pysysctl [-n] -w variable=value ...   set values
    pysysctl [-n] -a                      print every value
    pysysctl [-n] -p [file]               apply a sysctl.conf file

Variables are dotted (`net.ipv4.ip_forward`) or slashed (`net/ipv4/ip_forward`).
`-b` prints bare values without a trailing newline.

Exit codes:
- 0: Success, or read mode (read failures are reported but not counted).
- 255: Usage error, a failed write, or a failed read during -a.
"""

from __future__ import annotations

import os
import sys
from dataclasses import replace
from pathlib import Path

from pysysctl.core.accessor import read_setting, write_setting
from pysysctl.core.config import Config, Display, configure_logging, load_config
from pysysctl.core.preload import preload
from pysysctl.core.walker import display_all


def usage(prog: str) -> int:
    print(
        f"usage:  {prog} [-n] variable ... \n"
        f"        {prog} [-n] -w variable=value ... \n"
        f"        {prog} [-n] -a \n"
        f"        {prog} [-n] -p <file>   (default /etc/sysctl.conf) \n"
        f"        {prog} [-n] -A"
    )
    return -1


def run(args: list[str], config: Config, prog: str = "pysysctl") -> int:
    """Process the argument vector left to right. Returns the exit status."""
    if not args:
        return usage(prog)

    display = Display()
    switches_allowed = True
    write_mode = False
    rc = 0

    i = 0
    # An empty argument ends processing
    while i < len(args) and args[i]:
        arg = args[i]
        i += 1

        if not (switches_allowed and arg.startswith("-")):
            switches_allowed = False
            if write_mode:
                rc |= write_setting(arg, config.root, display)
            else:
                read_setting(arg, config.root, display)
            continue

        # Only the letter right after the dash counts
        switch = arg[1:2]
        if switch == "b":
            display = replace(display, print_name=False, print_newline=False)
        elif switch == "n":
            display = replace(display, print_name=False)
        elif switch == "w":
            switches_allowed = False
            write_mode = True
        elif switch == "p":
            source = config.preload
            if i < len(args) and args[i]:
                source = Path(args[i])
            preload(source, config.root, display)
            return 0
        elif switch in ("a", "A", "X"):
            return display_all(config.root, display)
        elif switch in ("h", "?"):
            return usage(prog)
        else:
            print(f"error: Unknown parameter '{arg}'", file=sys.stderr)
            return usage(prog)

    return rc


# === Entry point ===


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv
    prog = os.path.basename(argv[0]) if argv else "pysysctl"
    config = load_config()
    configure_logging(config)
    return run(list(argv[1:]), config, prog)


if __name__ == "__main__":
    sys.exit(main())
