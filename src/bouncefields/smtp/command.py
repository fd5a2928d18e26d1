from __future__ import annotations

from typing import List

from bouncefields.common.text_tools import contains_any, has_prefix_any

HELO = "HELO"
EHLO = "EHLO"
MAIL = "MAIL"
RCPT = "RCPT"
DATA = "DATA"
QUIT = "QUIT"
RSET = "RSET"
NOOP = "NOOP"
VRFY = "VRFY"
ETRN = "ETRN"
EXPN = "EXPN"
HELP = "HELP"
AUTH = "AUTH"
STARTTLS = "STARTTLS"
XFORWARD = "XFORWARD"

AVAILABLE = (
    HELO, EHLO, MAIL, RCPT, DATA, QUIT, RSET, NOOP, VRFY, ETRN, EXPN, HELP, AUTH, STARTTLS, XFORWARD,
)

# Commands that appear before DATA in a session
EXCEPT_DATA = (EHLO, HELO, MAIL, RCPT)

# Scan order matters: the last command collected is the one returned
_DETECTABLE = (
    HELO, EHLO, STARTTLS,
    AUTH + " PLAIN", AUTH + " LOGIN", AUTH + " CRAM-", AUTH + " DIGEST-",
    MAIL + " F", RCPT, RCPT + " T", DATA, QUIT, XFORWARD,
)

# First four letters -> full command name
_SHORT_NAMES = {"STAR": STARTTLS, "XFOR": XFORWARD}


def _is_word_char(ch: str) -> bool:
    # 0-9, @-Z, `-z
    return "0" <= ch <= "9" or "@" <= ch <= "Z" or "`" <= ch <= "z"


def test(text: str) -> bool:
    """True if ``text`` contains one of the SMTP commands."""
    if not text or len(text) < 4:
        return False
    return contains_any(text.upper(), AVAILABLE)


def find(text: str) -> str:
    """
    Return the SMTP command found in ``text``, such as "RCPT" or "STARTTLS".

    Single-word commands glued to letters or digits on either side are part of
    an address or a hostname (DATABASE@EXAMPLE.JP, EMAIL.EXAMPLE.COM) and are
    ignored.
    """
    if not test(text):
        return ""

    found: List[str] = []
    padded = " " + text + " "

    for e in _DETECTABLE:
        p0 = text.find(e)
        if p0 < 0:
            continue

        if " " not in e:
            before = padded[p0]
            after = padded[p0 + len(e) + 1]
            if _is_word_char(before) or _is_word_char(after):
                continue

        name = e[:4]
        if has_prefix_any(name, found):
            continue
        found.append(_SHORT_NAMES.get(name, name))

    if not found:
        return ""
    return found[-1]
