"""
Tolerant date normalizer (RFC 5322 section 3.3).

    date-time   = [ day-of-week "," ] date time [CFWS]
    date        = day month year
    time        = time-of-day zone

normalize_date("Fri, Feb 2 2018 2:2:2")   -> "Fri, 2 Feb 2018 02:02:02 +0000"
normalize_date("2018-02-02T18:30:22 Fri") -> "Fri, 2 Feb 2018 18:30:22 +0000"
"""
from __future__ import annotations

import logging

import regex as re

from bouncefields.common.text_tools import contains_only_numbers, has_prefix_any, squeeze

logger = logging.getLogger(__name__)

_MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
_DAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

_DEFAULT_DAY_NAME = "Thu"
_DEFAULT_OFFSET = "+0000"

# RFC 822 was published in August 1982
_CENTURY_CUTOFF = 81

_ISO8601_RE = re.compile(
    r"(?<![0-9])(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})"
    r"(?:[Tt ](?P<time>[0-9]{1,2}:[0-9]{1,2}:[0-9]{1,2})(?:[.,][0-9]+)?"
    r"(?P<zone>[Zz]|[+-][0-9]{2}:?[0-9]{2})?)?(?![0-9])"
)


def _uint(text: str) -> int | None:
    if not contains_only_numbers(text):
        return None
    return int(text)


def _rewrite_iso8601(match) -> str:
    month = int(match.group("month"))
    if month < 1 or month > 12:
        return match.group(0)

    parts = [match.group("day"), _MONTH_NAMES[month - 1], match.group("year")]
    if match.group("time"):
        parts.append(match.group("time"))
    zone = match.group("zone")
    if zone:
        parts.append(_DEFAULT_OFFSET if zone in ("Z", "z") else zone.replace(":", ""))
    return " ".join(parts)


def normalize_date(text: str) -> str:
    """Return "Www, D Mon YYYY HH:MM:SS +ZZZZ" or "" when the date cannot be resolved."""
    if not text:
        return ""

    source = _ISO8601_RE.sub(_rewrite_iso8601, text)
    source = squeeze(source.replace(",", ", "), " ")  # "Thu,22" -> "Thu, 22"

    year = ""
    month = ""
    day = ""
    day_name = ""
    clock = ""
    offset = ""
    two_digit_year = 0

    for e in source.split(" "):
        cw = len(e)
        if cw == 0:
            continue

        if cw < 3:
            # Day of month such as 1, 02, 31, or a 2-digit year
            cv = _uint(e)
            if cv is None:
                logger.debug("not a number where a day was expected: %r", e)
                return ""
            if cv > 31 or cv == 0:
                two_digit_year = cv
            else:
                day = str(cv)

        elif cw == 3 or (cw == 4 and e.endswith(",")):
            # "Feb", "Thu", "Thu," or a zero-padded day such as "029"
            if contains_only_numbers(e) and e.startswith("0"):
                day = str(int(e[1:]))
            else:
                name = e[0].upper() + e[1:3].lower()
                if name in _MONTH_NAMES:
                    month = name
                elif name in _DAY_NAMES:
                    day_name = name

        elif cw == 4:
            cv = _uint(e)
            if cv is not None:
                year = "%04d" % cv

        elif cw == 5 and has_prefix_any(e, ("+", "-")):
            # "+0900", "-0400"
            cv = _uint(e[1:5])
            if cv is not None:
                offset = "%s%04d" % (e[0], cv)

        elif cw > 4 and e.count(":") == 2:
            # "18:30:22", "3:1:4"
            hms = []
            for f in e.split(":"):
                cv = _uint(f)
                if cv is None or cv > 60:
                    logger.debug("malformed time of day: %r", e)
                    return ""
                hms.append(cv)
            clock = "%02d:%02d:%02d" % tuple(hms)

    if not year and two_digit_year > 0:
        century = "19" if two_digit_year > _CENTURY_CUTOFF else "20"
        year = "%s%02d" % (century, two_digit_year)

    if not year or not month or not day or not clock:
        return ""

    return "%s, %s %s %s %s %s" % (
        day_name or _DEFAULT_DAY_NAME,
        day,
        month,
        year,
        clock,
        offset or _DEFAULT_OFFSET,
    )
