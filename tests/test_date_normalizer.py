from __future__ import annotations

import pytest

from bouncefields.rfc.date_normalizer import normalize_date

TEST_SUITES = [
    (
        "RFC 5322 shapes",
        {
            "Thu, 29 Feb 2024 09:05:01 +0900 (JST)": "Thu, 29 Feb 2024 09:05:01 +0900",
            "Sat, 14 Jun 2025 05:53:47 +0900 (JST)": "Sat, 14 Jun 2025 05:53:47 +0900",
            "Wed, 7 Jan 2009 3:1:4 -0400": "Wed, 7 Jan 2009 03:01:04 -0400",
            "Fri, Feb 2 2018 2:2:2": "Fri, 2 Feb 2018 02:02:02 +0000",
            "Fri,2 Feb 2018 18:30:22": "Fri, 2 Feb 2018 18:30:22 +0000",
            "2 feb 2018 18:30:22": "Thu, 2 Feb 2018 18:30:22 +0000",
            "Fri, 02 Feb 2018 18:30:22 +0000": "Fri, 2 Feb 2018 18:30:22 +0000",
        },
    ),
    (
        "Two-digit years",
        {
            "Tue, 2 Feb 99 18:30:22 +0900": "Tue, 2 Feb 1999 18:30:22 +0900",
            "Thu, 2 Feb 82 18:30:22": "Thu, 2 Feb 1982 18:30:22 +0000",
            "Thu, 2 Feb 45 18:30:22": "Thu, 2 Feb 2045 18:30:22 +0000",
        },
    ),
    (
        "ISO 8601",
        {
            "2018-02-02T18:30:22 Fri": "Fri, 2 Feb 2018 18:30:22 +0000",
            "2018-02-02T18:30:22+09:00": "Thu, 2 Feb 2018 18:30:22 +0900",
            "2018-02-02 18:30:22Z": "Thu, 2 Feb 2018 18:30:22 +0000",
        },
    ),
    (
        "Unresolvable",
        {
            "": "",
            "neko": "",
            "2 Feb 2018": "",
            "Feb 2018 18:30:22": "",
            "xy Feb 2018 18:30:22": "",
            "2 Feb 2018 18:61:22": "",
            "2018-13-02T18:30:22": "",
        },
    ),
]


def _flatten_suites():
    """Yield (suite_name, input_text, expected_output) for parametrization."""
    for suite_name, cases in TEST_SUITES:
        for inp, expected in cases.items():
            yield suite_name, inp, expected


@pytest.mark.parametrize(
    "suite_name,inp,expected",
    list(_flatten_suites()),
    ids=lambda v: v if isinstance(v, str) else repr(v),
)
def test_normalize_date_cases(suite_name, inp, expected):
    out = normalize_date(inp)
    assert out == expected, f"[{suite_name}] input={inp!r} out={out!r}"


@pytest.mark.parametrize(
    "expected",
    [e for _, cases in TEST_SUITES for e in cases.values() if e],
)
def test_normalize_date_is_idempotent(expected):
    assert normalize_date(expected) == expected
