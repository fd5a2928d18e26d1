"""
RFC 5322 addr-spec checks.

    addr-spec       = local-part "@" domain
    local-part      = dot-atom / quoted-string / obs-local-part
    domain          = dot-atom / domain-literal / obs-domain
    domain-literal  = [CFWS] "[" *([FWS] dcontent) [FWS] "]" [CFWS]

Non-RFC compliant local parts (leading ".", "..", ".@") still circulate in real
bounces and are accepted on purpose.
"""
from __future__ import annotations

from bouncefields.rfc.hostname import is_domain_literal, is_internet_host

__all__ = ["is_email_address", "is_quoted_address", "is_comment", "is_domain_literal"]

_MAX_ADDRESS = 254
_MAX_LOCAL_PART = 64
_MAX_DOMAIN_PART = 252

# Not allowed in a local part unless the local part is quoted
_UNQUOTED_DENY = frozenset(',@:;()<>[]')


def is_quoted_address(email: str) -> bool:
    return bool(email) and email.startswith('"') and '"@' in email


def is_comment(text: str) -> bool:
    return bool(text) and text.startswith("(") and text.endswith(")")


def is_email_address(email: str) -> bool:
    if not email or len(email) < 5:  # n@e.e
        return False

    email = email.strip(" \t")
    lasta = email.rfind("@")

    if len(email) > _MAX_ADDRESS:
        return False
    if lasta < 1 or lasta > _MAX_LOCAL_PART:
        return False
    if len(email) - lasta > _MAX_DOMAIN_PART + 1:
        return False

    quoted = is_quoted_address(email)
    if not quoted:
        if email.count("@") > 1 or email.find(" ") > 0:
            return False

    literal = is_domain_literal(email)

    for j, ch in enumerate(email):
        o = ord(ch)
        if j < lasta:
            # Local part
            if o < 32 or o > 126:
                return False
            if j == 0:
                continue

            if quoted:
                if email[j - 1] == "\\":
                    # Only "\\" and '"' may follow a backslash
                    if ch != "\\" and ch != '"':
                        return False
                elif ch == '"' and j + 1 < lasta:
                    # An unescaped '"' only closes the quoted local part
                    return False
            elif ch in _UNQUOTED_DENY:
                return False
        else:
            # Domain part
            if ch == "@":
                continue
            if o < 45 or o == 47 or o == 92 or o > 122:  # before "-", "/", "\", after "z"
                return False

            if not literal:
                if 57 < o < 64 or 90 < o < 97:  # ":" to "?", "[" to "`"
                    return False
            else:
                if 59 < o < 64 or 93 < o < 97:  # "<" to "?", "^" to "`"
                    return False

    if literal:
        return True
    return is_internet_host(email[lasta + 1:])
