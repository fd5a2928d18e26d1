"""
SMTP reply codes (RFC 5321 section 4.2 and extensions).

    2yz  Positive Completion reply
    3yz  Positive Intermediate reply
    4yz  Transient Negative Completion reply
    5yz  Permanent Negative Completion reply

Besides RFC 5321: 235/334/432/454/530/534/535/538 (RFC 4954, AUTH), 253/458/459
(RFC 1985, ETRN), 453 (RFC 2645, ATRN), 521/556 (RFC 7504), 422/430/523/524/525/533
(RFC 5248).
"""
from __future__ import annotations

from typing import Dict, Tuple

from bouncefields.common.text_tools import index_on_the_way, parse_int

# Within a class, codes are tried in this order
_REPLY_CODE_2 = ("211", "214", "220", "221", "235", "250", "251", "252", "253", "334", "354")
_REPLY_CODE_4 = ("421", "450", "451", "452", "422", "430", "432", "453", "454", "455", "458", "459")
_REPLY_CODE_5 = (
    "550", "552", "553", "551", "521", "525", "523", "524", "530", "533", "534", "535", "538", "555",
    "556", "554", "500", "501", "502", "503", "504",
)

CODE_OF_SMTP: Dict[str, Tuple[str, ...]] = {"2": _REPLY_CODE_2, "4": _REPLY_CODE_4, "5": _REPLY_CODE_5}

_SEARCH_ORDER = _REPLY_CODE_5 + _REPLY_CODE_4 + _REPLY_CODE_2


def _is_numeric_boundary(ch: str) -> bool:
    # "." through "9": a version number, a path or a longer numeral
    return "." <= ch <= "9"


def test(code: str) -> bool:
    if not code or len(code) < 3:
        return False

    reply = parse_int(code)
    if reply is None:
        return False
    if reply < 211 or reply > 556:
        return False
    if reply % 100 > 59:  # 499 is not a reply code
        return False

    first = reply // 100
    if first == 2:
        if reply == 235:  # AUTH success (RFC 4954)
            return True
        if reply > 253:
            return False
        if 221 < reply < 250:
            return False
        return True
    if first == 3 and reply != 334 and reply != 354:
        return False
    return True


def find(logs: str, hint: str = "") -> str:
    """
    Return the first SMTP reply code found in ``logs``.

    ``hint`` is a status code ("5.1.1") or its class ("2", "4", "5") and limits
    the search to that class; otherwise 5xx, 4xx and 2xx are tried in turn.
    """
    if not logs or len(logs) < 3 or "X-UNIX" in logs.upper():
        return ""

    padded = " " + logs + " "
    codes = CODE_OF_SMTP.get((hint or "0")[0], _SEARCH_ORDER)

    for e in codes:
        appearance = padded.count(e)
        if appearance == 0:
            continue

        starting_at = 1
        for _ in range(appearance):
            p = index_on_the_way(padded, e, starting_at)
            if p < 0:
                break
            if _is_numeric_boundary(padded[p - 1]) or _is_numeric_boundary(padded[p + 3]):
                starting_at += p + 3
                continue
            return e
    return ""
