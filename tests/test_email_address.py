from __future__ import annotations

import dataclasses

import pytest

from bouncefields.address import AddressTriple, EmailAddress, find, rise
from bouncefields.rfc.address_syntax import is_email_address


def test_rise_plain():
    out = rise(("neko@example.jp", "Nyaan", "(cat)"))
    assert out == EmailAddress(
        address="neko@example.jp",
        user="neko",
        host="example.jp",
        name="Nyaan",
        comment="(cat)",
    )


def test_rise_from_parts():
    assert rise("<neko@example.jp>", "Nyaan") == rise(("neko@example.jp", "Nyaan", ""))


def test_rise_verp():
    out = rise("bounce+neko=example.jp@example.org")
    assert out.address == "bounce+neko=example.jp@example.org"
    assert out.verp == "neko@example.jp"
    assert out.alias == ""


def test_rise_alias():
    out = rise("neko+straycat@example.jp")
    assert out.user == "neko+straycat"
    assert out.host == "example.jp"
    assert out.alias == "neko@example.jp"
    assert out.verp == ""


@pytest.mark.parametrize("inp", ["MAILER-DAEMON", "postmaster"])
def test_rise_mailer_daemon(inp):
    out = rise(inp)
    assert out.address == inp
    assert out.user == inp
    assert out.host == ""


@pytest.mark.parametrize(
    "inp",
    ["", "nekochan", "Mailer Daemon", "mailer-daemon (Mail Delivery System)", AddressTriple()],
)
def test_rise_none(inp):
    assert rise(inp) is None


def test_rise_is_immutable():
    out = rise("neko@example.jp")
    with pytest.raises(dataclasses.FrozenInstanceError):
        out.address = "cat@example.jp"


@pytest.mark.parametrize(
    "inp",
    [
        '"Neko, Nyaan" <neko@example.jp> (cat)',
        "Nyaan <neko+straycat@example.jp>",
        "<bounce+neko=example.jp@example.org>",
        "<nekochan(cat)@example.org>",
        "Undelivered mail to kijitora@example.org.",
        "Nyaan <neko@example.jp.>",
        "<neko@example.jp.>",
    ],
)
def test_find_then_rise(inp):
    out = rise(find(inp))
    assert out is not None
    assert out.address == out.user + "@" + out.host
    assert is_email_address(out.address)
    assert not (out.verp and out.alias)


@pytest.mark.parametrize("inp", ["neko@example.", "<neko@example.>", "\tneko\\@example."])
def test_find_then_rise_without_a_domain(inp):
    assert rise(find(inp)) is None
