from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Union

from bouncefields.address.address_tools import expand_alias, expand_verp, final, is_mailer_daemon


@dataclass(frozen=True, slots=True)
class EmailAddress:
    address: str = ""
    user: str = ""  # local part
    host: str = ""  # domain part
    verp: str = ""  # recipient decoded from a VERP address
    alias: str = ""  # address without its "+tag"
    name: str = ""  # display name
    comment: str = ""  # (comment)


def rise(
        address: Union[str, Sequence[str]],
        name: str = "",
        comment: str = "",
) -> Optional[EmailAddress]:
    """
    Build an EmailAddress from the (address, name, comment) found by
    ``address_parser.find``. Accepts the triple itself or its three parts.

    Returns None when there is no usable address.
    """
    if not isinstance(address, str):
        address, name, comment = (tuple(address) + ("", "", ""))[:3]
    if not address:
        return None

    email = final(address)
    verp = ""
    alias = ""

    lasta = email.rfind("@")
    if lasta > 0:
        verp = expand_verp(email)
        if not verp:
            alias = expand_alias(email)

        user = email[:lasta].lstrip("<")
        host = email[lasta + 1:].rstrip(">,.;")
        email = user + "@" + host
    else:
        # Only a bare MAILER-DAEMON / postmaster is acceptable without "@"
        if not is_mailer_daemon(address) or " " in address:
            return None
        user = address
        host = ""
        email = address

    return EmailAddress(
        address=email,
        user=user,
        host=host,
        verp=verp,
        alias=alias,
        name=name or "",
        comment=comment or "",
    )
