"""
Splits an address header value such as

    "Neko, Nyaan" <neko@example.jp> (cat)

into its address, display name and comment with a single left-to-right scan.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Flag, IntEnum, auto
from typing import Callable, Dict, Iterable, List, NamedTuple

from bouncefields.address.address_tools import final, is_included, is_mailer_daemon
from bouncefields.common.text_tools import aligned, select, squeeze
from bouncefields.rfc.address_syntax import (
    is_comment,
    is_domain_literal,
    is_email_address,
    is_quoted_address,
)

_MIN_LENGTH = 5

_ADDRESS_TRIM = "[]{}()`';."
_TOKEN_TRIM = "{}()[]`';."


class AddressTriple(NamedTuple):
    address: str = ""
    name: str = ""
    comment: str = ""


class _Target(IntEnum):
    """Buffer that receives ordinary characters."""
    NONE = 0  # display name by default
    ADDRESS = 1
    NAME = 2  # inside a quoted display name
    COMMENT = 3


class _Open(Flag):
    NOTHING = 0
    ANGLE_ADDRESS = auto()  # <neko@example.org>
    QUOTED_STRING = auto()  # "Neko, Nyaan"
    COMMENT_BLOCK = auto()  # (nekochan)


@dataclass(slots=True)
class _ParseContext:
    address: str = ""
    name: str = ""
    comment: str = ""
    target: _Target = _Target.NONE
    opened: _Open = _Open.NOTHING

    def write(self, ch: str) -> None:
        if self.target is _Target.ADDRESS:
            self.address += ch
        elif self.target is _Target.COMMENT:
            self.comment += ch
        else:
            self.name += ch

    def write_outside(self, ch: str) -> None:
        # A delimiter that lost its meaning belongs to a finished comment or to the name
        if is_comment(self.comment):
            self.comment += ch
        else:
            self.name += ch

    def open_comment(self) -> None:
        self.opened |= _Open.COMMENT_BLOCK
        self.append_comment("(")
        self.target = _Target.COMMENT

    def append_comment(self, ch: str) -> None:
        # "(a)(b)" is kept as "(a) (b)"
        if ch == "(" and self.comment.endswith(")"):
            self.comment += " "
        self.comment += ch

    def close(self, context: _Open) -> None:
        self.opened &= ~context


def _on_comma(ctx: _ParseContext, ch: str) -> None:
    if not is_included(ctx.address):
        # "Neko, Nyaan" <neko@example.org> or <"neko,cat"@example.org>
        ctx.write(ch)
    elif _Open.COMMENT_BLOCK in ctx.opened:
        ctx.comment += ch
    elif _Open.QUOTED_STRING in ctx.opened:
        ctx.name += ch
    else:
        # Separator between addresses; the first address wins
        ctx.opened = _Open.NOTHING
        ctx.target = _Target.NONE


def _on_angle_open(ctx: _ParseContext, ch: str) -> None:
    if not ctx.address:
        ctx.opened |= _Open.ANGLE_ADDRESS
        ctx.address = ch
        ctx.target = _Target.ADDRESS
    elif is_included(ctx.address):
        ctx.write_outside(ch)


def _on_angle_close(ctx: _ParseContext, ch: str) -> None:
    if _Open.ANGLE_ADDRESS in ctx.opened:
        ctx.close(_Open.ANGLE_ADDRESS)
        ctx.address += ch
        ctx.target = _Target.NONE
    else:
        ctx.write_outside(ch)


def _on_paren_open(ctx: _ParseContext, ch: str) -> None:
    if _Open.ANGLE_ADDRESS in ctx.opened:
        if '"' in ctx.address:
            # <"neko(cat)"@example.org>
            ctx.address += ch
        else:
            # <neko(cat)@example.org>
            ctx.open_comment()
    elif _Open.COMMENT_BLOCK in ctx.opened:
        ctx.append_comment(ch)
    elif _Open.QUOTED_STRING in ctx.opened:
        # "Neko, Nyaan(cat)"
        ctx.name += ch
    else:
        ctx.open_comment()


def _on_paren_close(ctx: _ParseContext, ch: str) -> None:
    if _Open.ANGLE_ADDRESS in ctx.opened:
        if '"' in ctx.address:
            ctx.address += ch
        else:
            ctx.close(_Open.COMMENT_BLOCK)
            ctx.comment += ch
            ctx.target = _Target.ADDRESS
    elif _Open.COMMENT_BLOCK in ctx.opened:
        ctx.close(_Open.COMMENT_BLOCK)
        ctx.comment += ch
        ctx.target = _Target.NONE
    else:
        ctx.name += ch
        ctx.target = _Target.NONE


def _on_double_quote(ctx: _ParseContext, ch: str) -> None:
    if ctx.target is _Target.NONE:
        ctx.name += ch
        ctx.opened |= _Open.QUOTED_STRING
        ctx.target = _Target.NAME
    elif ctx.target is _Target.NAME:
        ctx.name += ch
        if ctx.name.endswith('\\"'):
            # "Neko, Nyaan \"...
            return
        ctx.close(_Open.QUOTED_STRING)
        ctx.target = _Target.NONE
    else:
        # Part of a quoted local part or of a comment
        ctx.write(ch)


_DELIMITERS: Dict[str, Callable[[_ParseContext, str], None]] = {
    ",": _on_comma,
    "<": _on_angle_open,
    ">": _on_angle_close,
    "(": _on_paren_open,
    ")": _on_paren_close,
    '"': _on_double_quote,
}


def _scan(text: str) -> _ParseContext:
    ctx = _ParseContext()
    delimiters = _DELIMITERS
    for ch in text:
        handler = delimiters.get(ch)
        if handler is None:
            ctx.write(ch)
        else:
            handler(ctx, ch)
    return ctx


def _without_trailing_dot(address: str) -> str:
    # "neko@example.jp." -> "neko@example.jp", "<neko@example.jp.>" -> "<neko@example.jp>"
    if address.endswith(">"):
        return address[:-1].rstrip(".") + ">"
    return address.rstrip(".")


def _address_from_name(name: str) -> str:
    cv = _without_trailing_dot(name.strip())
    if is_email_address(cv):
        # The display name is the address itself: "neko@example.jp"
        return "<" + cv + ">"

    if is_included(name):
        for e in name.split(" "):
            if is_email_address(e):
                return e
        return ""

    if is_mailer_daemon(name):
        return name.strip()
    return ""


def _address_from_tokens(*fields: str) -> str:
    for field in fields:
        for f in field.split(" "):
            if not f or f.find("@") < 1:
                continue
            f = f.strip(_TOKEN_TRIM)
            if len(f) < _MIN_LENGTH:
                continue
            f = final(f)
            if not is_quoted_address(f):
                f = f.strip('"')
            if is_email_address(f):
                return f
    return ""


def find(text: str) -> AddressTriple:
    """
    Return (address, name, comment) found in an address field.

    Never raises: a field without a recognisable address gives an empty triple
    or a triple with only the name and comment set.
    """
    if not text or len(text) < _MIN_LENGTH:
        return AddressTriple()

    ctx = _scan(text)
    address, name, comment = ctx.address, ctx.name, ctx.comment

    if not address:
        address = _address_from_name(name)

    while aligned(address, ("(", ")")):
        # (cat)nekochan@example.org, nekochan(cat)cat@example.org, nekochan(cat)@example.org
        ce = "(" + select(address, "(", ")", 0) + ")"
        address = address.replace(ce, "", 1)
        comment = ce if not comment else comment + " " + ce

    found = ""
    address = _without_trailing_dot(address)
    if is_included(address) or is_mailer_daemon(address):
        # Keep brackets of a domain-literal such as neko@[IPv4:192.0.2.222]
        if not is_domain_literal(address):
            address = address.strip(_ADDRESS_TRIM)
        address = final(address.strip("<>"))
        if not is_quoted_address(address):
            address = address.strip('"')
        # Only an address that is still valid after trimming is kept
        if is_email_address(address) or ("@" not in address and is_mailer_daemon(address)):
            found = address

    if name:
        name = name.strip()
        quoted_name = len(name) > 1 and name.startswith('"') and name.endswith('"')
        if not quoted_name:
            name = squeeze(name, " ")
            if not is_quoted_address(name):
                name = name.strip('"')

    if not found:
        found = _address_from_tokens(name, comment)

    comment = comment.strip() if is_comment(comment) else ""

    return AddressTriple(found, name, comment)


def find_batch(fields: Iterable[str]) -> List[AddressTriple]:
    out: List[AddressTriple] = []
    ap = out.append
    find_one = find
    for s in fields:
        ap(find_one(s))
    return out
