#!/usr/bin/env python3
"""Check for banned Python constructions in pysysctl source.

Banned constructions:

    Construction          Reason                            Use instead
    --------------------  --------------------------------  --------------------------
    import subprocess     pysysctl talks to /proc/sys       open() on the key's file
    from subprocess ...   directly, never via sysctl(8)
    os.system(...)        shells out                        open() on the key's file
    os.popen(...)         shells out                        open() on the key's file
"""

import ast
import sys
from pathlib import Path

BANNED_MODULES = frozenset({"subprocess"})
BANNED_OS_CALLS = frozenset({"system", "popen"})


def find_python_files(directory):
    """Sorted .py files under directory."""
    return sorted(str(p) for p in Path(directory).rglob("*.py"))


def check_file(filepath):
    with open(filepath) as f:
        source = f.read()

    tree = ast.parse(source, filepath)
    errors = []

    for node in ast.walk(tree):
        lineno = getattr(node, "lineno", 0)

        # import subprocess
        if isinstance(node, ast.Import):
            for alias in node.names:
                if alias.name in BANNED_MODULES:
                    errors.append(
                        (lineno, f"import {alias.name}: banned, open the key's file instead")
                    )

        # from subprocess import ...
        if isinstance(node, ast.ImportFrom):
            if node.module in BANNED_MODULES:
                errors.append(
                    (lineno, f"from {node.module} import: banned, open the key's file instead")
                )

        # os.system(...) / os.popen(...)
        if (
            isinstance(node, ast.Attribute)
            and isinstance(node.value, ast.Name)
            and node.value.id == "os"
            and node.attr in BANNED_OS_CALLS
        ):
            errors.append((lineno, f"os.{node.attr}: banned, open the key's file instead"))

    return errors


def main():
    src_dir = sys.argv[1] if len(sys.argv) > 1 else "src"
    all_errors = [
        (filepath, lineno, description)
        for filepath in find_python_files(src_dir)
        for lineno, description in check_file(filepath)
    ]
    for filepath, lineno, description in all_errors:
        print(f"{filepath}:{lineno}: {description}")
    sys.exit(1 if all_errors else 0)


if __name__ == "__main__":
    main()
