from __future__ import annotations

from typing import List

from bouncefields.common.text_tools import parse_int

_SPLIT_CHARS = ("(", ")", "[", "]", ",")


def is_ipv4_address(addr: str) -> bool:
    if not addr or len(addr) < 7 or addr.count(".") != 3:
        return False

    for octet in addr.split("."):
        v = parse_int(octet)
        if v is None or v < 0 or v > 255:
            return False
    return True


def find_ipv4_address(text: str) -> List[str]:
    """
    Return every dotted-quad token in ``text``, in order of appearance.

    "mx.example.jp[192.0.2.1]" is read as "mx.example.jp 192.0.2.1".
    """
    if not text or len(text) < 7:
        return []

    for ch in _SPLIT_CHARS:
        text = text.replace(ch, " ")
    return [e for e in text.split(" ") if is_ipv4_address(e)]
