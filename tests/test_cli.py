from __future__ import annotations

import io
import json
import logging
from argparse import Namespace

import pytest

from bouncefields.cli import main, parse_arguments
from bouncefields.common.config import DEFAULT_MAX_LEN, Config


def _lines(capsys) -> list[dict]:
    return [json.loads(e) for e in capsys.readouterr().out.splitlines()]


def test_status(capsys):
    assert main(["status", "smtp; 550 5.1.1 Mailbox does not exist"]) == 0
    assert _lines(capsys) == [{"input": "smtp; 550 5.1.1 Mailbox does not exist", "status": "5.1.1"}]


def test_reply_with_hint(capsys):
    assert main(["reply", "421 4.4.2 connection timed out", "--hint", "4"]) == 0
    assert _lines(capsys)[0]["reply"] == "421"


def test_address(capsys):
    assert main(["address", '"Neko, Nyaan" <neko@example.jp> (cat)', "nekochan"]) == 0
    out = _lines(capsys)
    assert out[0]["address"]["address"] == "neko@example.jp"
    assert out[0]["address"]["name"] == '"Neko, Nyaan"'
    assert out[0]["address"]["comment"] == "(cat)"
    assert out[1]["address"] is None


def test_received_labels(capsys):
    assert main(["received", "from mx.example.jp by mx.example.org with ESMTP"]) == 0
    out = _lines(capsys)[0]["received"]
    assert out["from"] == "mx.example.jp"
    assert out["with"] == "esmtp"
    assert out["for"] == ""


def test_input_files(tmp_path, capsys):
    (tmp_path / "a.txt").write_text("Thu, 29 Feb 2024 09:05:01 +0900 (JST)\nneko\n", encoding="utf-8")
    assert main(["date", "-i", str(tmp_path / "*.txt")]) == 0
    out = _lines(capsys)
    assert [e["date"] for e in out] == ["Thu, 29 Feb 2024 09:05:01 +0900", ""]


def test_max_len(capsys):
    assert main(["command", "RCPT TO:<neko@example.jp>", "--max-len", "4"]) == 0
    assert _lines(capsys) == [{"input": "RCPT", "command": "RCPT"}]


def test_no_input(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    assert main(["host"]) == 1
    assert capsys.readouterr().out == ""


def test_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("Connection refused by mx1.example.org\n"))
    assert main(["host"]) == 0
    assert _lines(capsys)[0]["host"] == "mx1.example.org"


def test_unknown_kind():
    with pytest.raises(SystemExit) as e:
        parse_arguments(["neko"])
    assert e.value.code == 2


def test_config(tmp_path):
    (tmp_path / "a.txt").write_text("x", encoding="utf-8")
    (tmp_path / "b.txt").write_text("x", encoding="utf-8")
    args = Namespace(
        kind="status",
        hint=None,
        texts=None,
        input_files=[str(tmp_path / "*.txt"), str(tmp_path / "a.txt"), str(tmp_path / "missing.txt")],
        max_len=0,
        log_level="debug",
    )
    config = Config(args)
    assert config.hint == ""
    assert config.texts == []
    assert config.input_files == [str(tmp_path / "a.txt"), str(tmp_path / "b.txt")]
    assert config.max_len == DEFAULT_MAX_LEN
    assert config.log_level == logging.DEBUG

    args.log_level = "nope"
    assert Config(args).log_level == logging.WARNING
