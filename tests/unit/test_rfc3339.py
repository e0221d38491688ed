from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from jrdkit.core.time import format_rfc3339, normalize_utc, parse_rfc3339

pytestmark = [pytest.mark.unit]


@pytest.mark.parametrize(
    "text, expected",
    [
        ("2012-11-16T19:41:35Z", datetime(2012, 11, 16, 19, 41, 35, tzinfo=UTC)),
        ("2012-11-16t19:41:35z", datetime(2012, 11, 16, 19, 41, 35, tzinfo=UTC)),
        ("2012-11-16 19:41:35Z", datetime(2012, 11, 16, 19, 41, 35, tzinfo=UTC)),
        ("2012-11-16T19:41:35.5Z", datetime(2012, 11, 16, 19, 41, 35, 500_000, tzinfo=UTC)),
        ("2012-11-16T19:41:35.123456789Z", datetime(2012, 11, 16, 19, 41, 35, 123_456, tzinfo=UTC)),
        ("2012-11-16T21:41:35+02:00", datetime(2012, 11, 16, 19, 41, 35, tzinfo=UTC)),
        ("2012-11-16T14:11:35-05:30", datetime(2012, 11, 16, 19, 41, 35, tzinfo=UTC)),
        ("2012-11-16T19:41:35-00:00", datetime(2012, 11, 16, 19, 41, 35, tzinfo=UTC)),
        # leap second folds onto :59
        ("2016-12-31T23:59:60Z", datetime(2016, 12, 31, 23, 59, 59, tzinfo=UTC)),
        ("2012-11-16T19:41:60Z", datetime(2012, 11, 16, 19, 41, 59, tzinfo=UTC)),
    ],
)
def test_parse_accepts_rfc3339_variants(text, expected):
    assert parse_rfc3339(text) == expected


def test_parse_keeps_the_original_offset():
    dt = parse_rfc3339("2012-11-16T21:41:35+02:00")
    assert dt.utcoffset() == timedelta(hours=2)


@pytest.mark.parametrize(
    "text",
    [
        "",
        "tomorrow",
        "2012-11-16",
        "2012-11-16T19:41:35",
        "2012-11-16T19:41Z",
        "2012-11-16T19:41:35.Z",
        "2012-13-16T19:41:35Z",
        "2012-02-30T19:41:35Z",
        "2012-11-16T24:00:00Z",
        "2012-11-16T19:41:61Z",
        "2012-11-16T19:41:35Z\n",
        "\u0662\u0660\u0661\u0662-11-16T19:41:35Z",  # Arabic-Indic digits
        "2012-11-16T19:41:35+\uff10\uff12:00",  # full-width digits
        "2012-11-16T19:41:35+24:00",
        "2012-11-16T19:41:35+0200",
        " 2012-11-16T19:41:35Z",
    ],
)
def test_parse_rejects_invalid(text):
    with pytest.raises(ValueError):
        parse_rfc3339(text)


def test_format_is_strict_utc_without_fraction():
    plus_two = timezone(timedelta(hours=2))
    assert format_rfc3339(datetime(2012, 11, 16, 21, 41, 35, 987_000, tzinfo=plus_two)) == "2012-11-16T19:41:35Z"
    assert format_rfc3339(datetime(2012, 11, 16, 19, 41, 35)) == "2012-11-16T19:41:35Z"
    assert format_rfc3339(datetime(999, 1, 2, 3, 4, 5, tzinfo=UTC)) == "0999-01-02T03:04:05Z"


def test_lenient_parse_strict_format():
    assert format_rfc3339(parse_rfc3339("2012-11-16T14:41:35.75-05:00")) == "2012-11-16T19:41:35Z"


def test_normalize_utc():
    dt = normalize_utc(datetime(2012, 11, 16, 19, 41, 35, 1, tzinfo=timezone(timedelta(hours=-1))))
    assert dt == datetime(2012, 11, 16, 20, 41, 35, tzinfo=UTC)
    assert dt.microsecond == 0


@pytest.mark.parametrize("text", ["9999-12-31T23:59:59-01:00", "0001-01-01T00:00:00+01:00"])
def test_instant_outside_utc_range_is_a_value_error(text):
    dt = parse_rfc3339(text)
    with pytest.raises(ValueError):
        normalize_utc(dt)
    with pytest.raises(ValueError):
        format_rfc3339(dt)
