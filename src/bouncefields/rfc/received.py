"""
Received: header tokenizer (RFC 5322 section 3.6.7).

    received        = "Received:" *received-token ";" date-time CRLF
    received-token  = word / angle-addr / addr-spec / domain

    Received: from x.y.test
        by example.net
        via TCP
        with ESMTP
        id ABC12345
        for <mary@example.net>;  21 Nov 1997 10:05:43 -0600
"""
from __future__ import annotations

import logging
from typing import Dict, List, NamedTuple

from bouncefields.common.ipv4 import find_ipv4_address
from bouncefields.common.text_tools import contains_any

logger = logging.getLogger(__name__)

_LABELS = ("from", "by", "via", "with", "id", "for")

# Local injection traces carry no hop information
_DENY_MARKS = (" invoked by uid", " invoked from network", " invoked by alias")

_UNINFORMATIVE = frozenset(("unknown", "localhost", "[127.0.0.1]", "[IPv6:::1]"))
_LOCAL_NAMES = ("localhost", "localhost.localdomain")
_COMMENT_CHARS = ("(", ")", ";")


class ReceivedTokens(NamedTuple):
    from_: str = ""
    by: str = ""
    via: str = ""
    with_: str = ""
    id: str = ""
    for_: str = ""


def _strip_comment(value: str) -> str:
    for ch in _COMMENT_CHARS:
        value = value.replace(ch, "")
    return value


def _alternatives(candidates: List[str]) -> List[str]:
    out: List[str] = []
    for e in candidates:
        if len(e) < 4 or e in _UNINFORMATIVE:
            continue
        if "." not in e:
            continue
        if e.find("=") > 1:
            continue
        out.append(e)
    return out


def _needs_better_from(value: str) -> bool:
    if value in _LOCAL_NAMES:
        return True
    if "." not in value:
        return True
    return len(find_ipv4_address(value)) > 0


def parse_received(header: str) -> ReceivedTokens:
    """Return the from/by/via/with/id/for tokens of a Received: header."""
    if not header or " " not in header:
        return ReceivedTokens()
    if contains_any(header, _DENY_MARKS):
        logger.debug("Received header without hop data: %r", header[:64])
        return ReceivedTokens()

    words = header.split(" ")
    last = len(words) - 1
    token: Dict[str, str] = {}
    other: List[str] = []

    for j, e in enumerate(words):
        label = e.lower()
        if label not in _LABELS or j + 1 > last:
            continue

        token[label] = _strip_comment(words[j + 1].lower())

        if label != "from":
            continue
        if j + 2 > last:
            break
        if not words[j + 2].startswith("("):
            continue

        # from mx1.example.com (c213502.kyoto.example.ne.jp [192.0.2.135]) by mx.example.jp
        # The hostname in the comment may span one or two words.
        other.append(_strip_comment(words[j + 2]))
        if j + 3 > last:
            break
        other.append(_strip_comment(words[j + 3]))

    alter = _alternatives(other)

    for label in ("from", "by"):
        # "[192.0.2.25]" -> "192.0.2.25"
        value = token.get(label, "")
        if not value or not value.startswith("["):
            continue
        found = find_ipv4_address(value)
        token[label] = found[0] if found else ""

    sender = token.get("from", "")
    if alter and _needs_better_from(sender) and sender not in alter[0]:
        if "." not in sender:
            # "mail", "mx", "mbox"
            if alter[0].find(".") > 0:
                sender = alter[0]
        else:
            sender = alter[0]
    token["from"] = sender

    if token.get("for"):
        token["for"] = token["for"].strip("<>")

    values = []
    for label in _LABELS:
        value = token.get(label, "")
        if " " in value:
            value = ""
        value = value.replace("[", "", 1).replace("]", "", 1)
        values.append(value)
    return ReceivedTokens(*values)
