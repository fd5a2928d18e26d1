from __future__ import annotations

from bouncefields.common.text_tools import LHS, RHS, contains_any, select
from bouncefields.rfc.address_syntax import is_email_address, is_quoted_address

_DAEMON_NAMES = frozenset(("mailer-daemon", "postmaster"))
_DAEMON_MARKS = (
    "mailer-daemon@", "(mailer-daemon)", "<mailer-daemon>", "mailer-daemon ",
    "postmaster@", "(postmaster)", "<postmaster>",
)


def final(email: str) -> str:
    """Strip enclosing angle brackets (sendmail ruleset 4) when exactly one "@" is present."""
    if not email or email.count("@") != 1:
        return email or ""
    if email.startswith("<"):
        email = email.strip("<")
    if email.endswith(">"):
        email = email.strip(">")
    return email


def is_included(text: str) -> bool:
    """True if ``text`` holds an email address, bare or as "<...>"."""
    if not text or len(text) < 5 or "@" not in text:
        return False

    if text.startswith("<") and text.endswith(">"):
        return is_email_address(text.strip("<>"))

    # "nekochan (kijitora) neko@example.jp"
    for e in text.split(" "):
        if is_email_address(e.strip("<>")):
            return True
    return False


def is_mailer_daemon(email: str) -> bool:
    if not email:
        return False
    value = email.lower()
    return value in _DAEMON_NAMES or contains_any(value, _DAEMON_MARKS)


def expand_verp(email: str) -> str:
    """
    "bounce+neko=example.jp@example.org" -> "neko@example.jp"

    Returns "" when the address is not a VERP address.
    """
    if not email or "@" not in email:
        return ""
    # "neko+cat=example.jp"@example.org is a quoted local part, not VERP
    if is_quoted_address(email):
        return ""

    cv = select(email, "+", "@", 0)
    if not cv:
        return ""

    cw = cv.replace("=", "@", 1)
    if is_email_address(cw):
        return cw
    return ""


def expand_alias(email: str) -> str:
    """
    "neko+straycat@example.jp" -> "neko@example.jp"

    Returns "" when the address has no "+tag" in its local part.
    """
    if not email or email.find("+") < 1:
        return ""
    if not is_email_address(email):
        return ""
    if is_quoted_address(email):
        return ""

    return select(LHS + email, "", "+", 0) + "@" + select(email + RHS, "@", "", 1)
