from __future__ import annotations

from typing import Iterable, Optional, Sequence

import regex as re

# An optional sign followed by ASCII digits only; int() alone would also take
# "1_000", " 7" and non-ASCII digits.
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")

# Sentinels for select(): prepend LHS to select from the beginning of a string,
# append RHS to select through its end.
LHS = "<@>"
RHS = "<$>"


def squeeze(text: str, char: str = " ") -> str:
    if not text or char not in text:
        return text or ""

    out = []
    ap = out.append
    prev = ""
    for ch in text:
        if ch != char or ch != prev:
            ap(ch)
            prev = ch
    return "".join(out)


def sweep(text: str) -> str:
    """Tabs to spaces, trim, squeeze spaces, drop a trailing " --boundary" tail."""
    if not text:
        return ""

    text = squeeze(text.replace("\t", " ").strip(), " ")
    if " --" in text and "-- " not in text:
        text = select(LHS + text, "", " --", 0)
    return text


def contains_only_numbers(text: str) -> bool:
    if not text:
        return False
    for ch in text:
        if ch < "0" or ch > "9":
            return False
    return True


def parse_int(text: str) -> Optional[int]:
    if not text or not _INTEGER_RE.fullmatch(text):
        return None
    return int(text)


def contains_any(text: str, items: Iterable[str]) -> bool:
    """True if any element of ``items`` is a substring of ``text``."""
    if not text:
        return False
    for e in items:
        if e in text:
            return True
    return False


def has_prefix_any(text: str, items: Iterable[str]) -> bool:
    if not text:
        return False
    for e in items:
        if text.startswith(e):
            return True
    return False


def is_contained(text: str, items: Iterable[str]) -> bool:
    """True if ``text`` is a substring of any element of ``items``."""
    if not text:
        return False
    for e in items:
        if text in e:
            return True
    return False


def aligned(text: str, parts: Sequence[str]) -> bool:
    """
    True if every element of ``parts`` appears in ``text`` in the given order.

    The search window only moves forward when the end offset of the previous
    match is positive, so a one-character match at offset 0 does not advance it.
    """
    if not text or not parts:
        return False

    align = -1
    right = 0
    for e in parts:
        if align > 0:
            text = text[align + 1:]
        p = text.find(e)
        if p < 0:
            break
        align = len(e) + p - 1
        right += 1
    return right == len(parts)


def aligned_any(text: str, table: Iterable[Sequence[str]]) -> bool:
    if not text:
        return False
    for e in table:
        if aligned(text, e):
            return True
    return False


def index_on_the_way(whole: str, part: str, start: int) -> int:
    if start < 0 or start >= len(whole):
        return -1
    return whole.find(part, start)


def select(whole: str, begin: str, until: str, start: int = 0) -> str:
    """
    Return the text between ``begin`` and ``until`` in ``whole[start:]``.

    ``until`` is searched from one character after the end of ``begin``, so the
    selected text is never empty when both delimiters are found next to each
    other. Empty delimiters are replaced with LHS / RHS.
    """
    if not whole or start < 0:
        return ""
    if start > len(whole) - 2:
        return ""
    begin = begin or LHS
    until = until or RHS

    cv = whole[start:]
    if len(cv) < 3 or len(cv) <= len(begin) + len(until):
        return ""

    p1 = cv.find(begin)
    if p1 < 0:
        return ""
    p2 = cv.find(until, p1 + len(begin) + 1)
    if p2 < 0:
        return ""
    return cv[p1 + len(begin):p2]
