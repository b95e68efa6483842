"""Translation between dotted sysctl keys and slash-separated paths."""

from __future__ import annotations

DELIMITERS = "./"


def _swap(text: str, old: str, new: str) -> str:
    """Swap every old/new delimiter pair in text.

    Leaves text alone when its first delimiter is already `new`, so a key
    typed in path form (or a path in key form) passes through untouched.
    """
    first = next((c for c in text if c in DELIMITERS), None)
    if first is None or first == new:
        return text
    swapped = []
    for c in text:
        if c == old:
            c = new
        elif c == new:
            c = old
        swapped.append(c)
    return "".join(swapped)


def key_to_path(key: str) -> str:
    """Turn `net.ipv4.ip_forward` into `net/ipv4/ip_forward`.

    A literal `/` in a key survives as a `.` in the path, which is how
    interface names like `eth0.100` are addressed: `net.ipv4.conf.eth0/100.rp_filter`.
    """
    return _swap(key, ".", "/")


def path_to_key(path: str) -> str:
    """Turn a root-relative path back into the dotted key shown to users."""
    return _swap(path, "/", ".")
