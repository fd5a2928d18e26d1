"""
Internet hostname checks (RFC 1123) and a heuristic hostname finder for the
free text of bounce messages.
"""
from __future__ import annotations

import logging
from typing import Callable, List, Optional, Tuple

from bouncefields.common.ipv4 import is_ipv4_address
from bouncefields.common.text_tools import LHS, RHS, aligned, has_prefix_any, select

logger = logging.getLogger(__name__)

# Padded with a leading / trailing space so "mx.example.net[192.0.2.1]" splits cleanly
_PREFIX_CHARS = ("(", "[", "<")
_SUFFIX_CHARS = (")", "]", ">", ":", ";")

# A hostname sits between the two phrases
_SANDWICHED: Tuple[Tuple[str, str], ...] = (
    # Postfix: "host %s said: %s (in reply to %s)"
    ("host ", " said: "),
    ("host ", " talk to me: "),
    # Sendmail: ... while talking to mx.example.jp.:
    ("while talking to ", ":"),
    # Exim: host mx.example.jp [192.0.2.20]: 550 5.7.0
    ("host ", " ["),
    # Gmail: ...for the recipient domain example.jp by mx.example.jp. [192.0.2.1].
    (" by ", ". ["),
    # MailFoundry: Delivery failed for the following reason: Server mx22.example.org[192.0.2.222] failed with: 550
    ("delivery failed for the following reason: ", " with"),
    # MessagingServer: Remote system: dns;mx.example.net (mx. --
    ("remote system: ", "("),
    # X6: SMTP Server <smtpd.example.org> rejected recipient
    ("smtp server <", ">"),
    # MailMarshal: Reporting-MTA:      <rr1.example.com>
    ("-mta: ", ">"),
    # SendGrid: cat:000000:<cat@example.jp> : 192.0.2.1 : mx.example.jp:[192.0.2.2]
    (" : ", "["),
)

# A hostname follows the phrase
_STARTS_AFTER: Tuple[str, ...] = (
    "generating server: ",  # Exchange 2007
    "serveur de g",  # fr-FR "Serveur de génération"
    "server di generazione",  # it-CH
    "genererande server",  # sv-SE
)

# A hostname precedes the phrase
_ENDS_BEFORE: Tuple[str, ...] = (
    " did not like our ",  # mail-inbound.example.net [192.0.2.25] did not like our DATA: ...
)


def is_internet_host(host: str) -> bool:
    if not host or len(host) < 4 or len(host) > 255:
        return False

    if host == "localhost" or host == "localhost6":
        return True
    if "." not in host:
        return False
    if ".." in host:
        return False
    if has_prefix_any(host, (".", "-")):
        return False
    if host.endswith(("-", ".")):
        return False
    if not host.isascii():
        return False

    # "--" is only allowed in an IDN A-label
    if "--" in host and not host.startswith("xn--"):
        return False

    for ch in host.upper():
        o = ord(ch)
        if o < 45 or o == 47:  # before "-", or "/"
            return False
        if 57 < o < 65:  # ":" to "@"
            return False
        if o > 90:  # after "Z"
            return False

    tld = host[host.rfind(".") + 1:]
    if len(tld) > 63:
        return False
    for ch in tld:
        if "0" <= ch <= "9":
            return False
    return True


def is_domain_literal(email: str) -> bool:
    """True if the domain part is "[IPv4:...]" or "[IPv6:...]"."""
    email = (email or "").strip("<>")
    if len(email) < 16:  # e@[IPv4:0.0.0.0]
        return False
    if not email.endswith("]"):
        return False

    if "@[IPv4:" in email:
        return is_ipv4_address(select(email, "@[IPv4:", "]", 0))

    if "@[IPv6:" in email:
        # Shape check only: more than two colon-separated groups
        cv = select(email, "@[IPv6:", "]", 0)
        if len(cv) > 2 and cv.count(":") > 2:
            return True
    return False


def _between_phrases(text: str) -> Optional[List[str]]:
    for e in _SANDWICHED:
        if not aligned(text, e):
            continue
        p1 = text.find(e[0])
        p2 = text.find(e[1])
        cw = len(e[0])
        if p1 + cw >= p2:
            continue
        logger.debug("hostname between %r and %r", e[0], e[1])
        return text[p1 + cw:p2].split(" ")
    return None


def _after_phrase(text: str) -> Optional[List[str]]:
    for e in _STARTS_AFTER:
        if e not in text:
            continue
        logger.debug("hostname after %r", e)
        return select(text + RHS, e, "", 0).split(" ")
    return None


def _before_phrase(text: str) -> Optional[List[str]]:
    for e in _ENDS_BEFORE:
        if e not in text:
            continue
        logger.debug("hostname before %r", e)
        return select(LHS + text, "", e, 0).split(" ")
    return None


def _every_token(text: str) -> Optional[List[str]]:
    return text.split(" ")


_STRATEGIES: Tuple[Callable[[str], Optional[List[str]]], ...] = (
    _between_phrases,
    _after_phrase,
    _before_phrase,
    _every_token,
)


def find(text: str) -> str:
    """Return the longest valid hostname found in ``text``, or ""."""
    if not text:
        return ""

    source = text.lower()
    for ch in _PREFIX_CHARS:
        source = source.replace(ch, " " + ch)
    for ch in _SUFFIX_CHARS:
        source = source.replace(ch, ch + " ")

    tokens: List[str] = []
    for strategy in _STRATEGIES:
        found = strategy(source)
        if found:
            tokens = found
            break

    best = ""
    for e in tokens:
        for ch in _PREFIX_CHARS:
            e = e.replace(ch, "")
        for ch in _SUFFIX_CHARS:
            e = e.replace(ch, "")
        e = e.rstrip(".")

        if len(e) < 4 or "." not in e or not is_internet_host(e):
            continue
        if len(e) > len(best):
            best = e
    return best
