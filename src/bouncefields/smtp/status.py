"""
Enhanced mail system status codes (RFC 3463).

    status-code = class "." subject "." detail
    class       = "2" / "4" / "5"
    subject     = 1*3digit
    detail      = 1*3digit

Only subjects 0 through 7 are defined, so "5.12.0" is rejected.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Tuple

from bouncefields.common.ipv4 import find_ipv4_address
from bouncefields.common.text_tools import index_on_the_way, parse_int

logger = logging.getLogger(__name__)

_CLASSES = ("5.", "4.", "2.")
_IPV4_MASK = "***.***.***.***"

# Codes that say little on their own; kept only when nothing better shows up
_DEFERRED = ("4.4.7",)

# (weaker, stronger): a code starting with the first prefix loses to one
# starting with the second, regardless of position.
_PREFERENCE: Tuple[Tuple[str, str], ...] = (
    ("5.5.", "5.1.1"),  # 550 5.5.0 vs 5.1.1 user unknown
    ("5.5.", "5.2.2"),  # mailbox full
    ("5.1.3", "5.7."),  # bad destination syntax vs policy rejection
    ("5.3.0", "5.7."),
)


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _char_at(text: str, i: int) -> str:
    # "" past the end, so every comparison below fails safely
    return text[i] if 0 <= i < len(text) else ""


def is_ambiguous(code: str) -> bool:
    """
    True for the class-only codes "2.0.0", "4.0.0" and "5.0.0".

    An empty code is ambiguous as well: nothing was found to prefer.
    """
    if not code:
        return True
    return code[1:] == ".0.0"


def test(code: str) -> bool:
    if not code or len(code) < 5 or len(code) > 7:
        return False

    token: List[int] = []
    for e in code.split("."):
        digit = parse_int(e)
        if digit is not None:
            token.append(digit)
    if len(token) != 3:
        return False

    if token[0] not in (2, 4, 5):
        return False
    if token[1] < 0 or token[1] > 7 or token[2] < 0:
        return False
    return True


def _reply_class(hint: str) -> str:
    if hint and hint[0] in "245":
        return hint[0]
    return ""


def prefer(lhs: str, rhs: str, hint: str = "") -> str:
    """
    Choose the more informative of two status codes.

    ``hint`` is an SMTP reply code such as "550"; when exactly one of the codes
    belongs to the same class, that one wins.
    """
    if not rhs or lhs == rhs:
        return lhs
    if not lhs:
        return rhs

    if not test(rhs):
        return lhs
    if not test(lhs):
        return rhs

    klass = _reply_class(hint)
    if klass and lhs[0] != rhs[0]:
        if lhs[0] == klass:
            return lhs
        if rhs[0] == klass:
            return rhs

    if is_ambiguous(rhs) or rhs in _DEFERRED:
        return lhs
    if is_ambiguous(lhs) or lhs in _DEFERRED:
        return rhs

    for weaker, stronger in _PREFERENCE:
        if lhs.startswith(weaker) and rhs.startswith(stronger):
            return rhs
        if rhs.startswith(weaker) and lhs.startswith(stronger):
            return lhs

    # "5.2.0" < "5.2.1"
    lzero = lhs.endswith(".0")
    rzero = rhs.endswith(".0")
    if rzero and not lzero:
        return lhs
    return rhs


def find(logs: str, hint: str = "") -> str:
    """
    Return the status code found in ``logs``, such as "5.1.1".

    ``hint`` is an SMTP reply code ("550") or its class ("5") and limits the
    search to that class; otherwise 5.x.x, 4.x.x and 2.x.x are all collected.
    When several codes appear they are folded together with prefer().
    """
    if not logs or len(logs) < 7:
        return ""
    hint = hint or " "

    klass = _reply_class(hint)
    markers = (klass + ".",) if klass else _CLASSES

    # The trailing spaces let a code at the very end be read to its last digit
    text = " " + logs + "   "
    for e in find_ipv4_address(text):
        text = text.replace(e, _IPV4_MASK)

    found: Dict[int, str] = {}
    for e in markers:
        p1 = 0
        while True:
            p0 = index_on_the_way(text, e, p1)
            if p0 < 0:
                break
            p1 = p0 + 5
            found[p0] = e
    if not found:
        return ""

    codes: List[str] = []
    ap = codes.append
    fallback = ""

    for ci in sorted(found):
        prev = _char_at(text, ci - 1)
        if "." <= prev <= "9" or prev in ("V", "v"):
            # A longer numeral or a version string like "v5.1.1"
            continue
        subject = _char_at(text, ci + 2)
        if not "0" <= subject <= "7":
            continue
        if _char_at(text, ci + 3) != ".":
            continue
        if not _is_digit(_char_at(text, ci + 4)):
            continue

        cv = text[ci:ci + 5]
        if is_ambiguous(cv) or cv in _DEFERRED:
            fallback = cv
            continue

        # Up to three digits of detail, never the head of a longer number
        if not _is_digit(_char_at(text, ci + 5)):
            ap(cv)
            continue
        cv = text[ci:ci + 6]
        if not _is_digit(_char_at(text, ci + 6)):
            ap(cv)
            continue
        cv = text[ci:ci + 7]
        if _is_digit(_char_at(text, ci + 7)):
            continue
        ap(cv)

    if fallback:
        logger.debug("Deferred status code %s kept as the last candidate", fallback)
        ap(fallback)
    if not codes:
        return ""

    cv = codes[0]
    for e in codes[1:]:
        cv = prefer(cv, e, hint)
    return cv
