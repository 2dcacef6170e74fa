from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from pdf_date import PdfDateError, format_date, parse_date

JST = timezone(timedelta(hours=9))
IST = timezone(timedelta(hours=5, minutes=30))
NST = timezone(-timedelta(hours=3, minutes=30))


def test_format_date_with_positive_offset() -> None:
    t = datetime(2018, 8, 8, 12, 0, 0, tzinfo=JST)
    assert format_date(t) == "D:20180808120000+09'00'"


def test_format_date_with_negative_offset() -> None:
    t = datetime(2018, 12, 24, 23, 59, 58, tzinfo=NST)
    assert format_date(t) == "D:20181224235958-03'30'"


def test_format_date_utc_uses_z() -> None:
    t = datetime(2018, 8, 8, 12, 0, 0, tzinfo=timezone.utc)
    assert format_date(t) == "D:20180808120000Z"


def test_format_date_naive_is_local_time() -> None:
    t = datetime(2018, 8, 8, 12, 0, 0)
    assert format_date(t) == format_date(t.astimezone())


@pytest.mark.parametrize(
    "text, expected",
    [
        ("D:20180808120000+09'00'", datetime(2018, 8, 8, 12, 0, 0, tzinfo=JST)),
        ("20180808120000+09'00'", datetime(2018, 8, 8, 12, 0, 0, tzinfo=JST)),
        ("D:20180808120000+09'", datetime(2018, 8, 8, 12, 0, 0, tzinfo=JST)),
        ("D:20180808120000Z", datetime(2018, 8, 8, 12, 0, 0, tzinfo=timezone.utc)),
        ("D:20180808120000", datetime(2018, 8, 8, 12, 0, 0, tzinfo=timezone.utc)),
        ("D:201808081200", datetime(2018, 8, 8, 12, 0, 0, tzinfo=timezone.utc)),
        ("D:2018080812", datetime(2018, 8, 8, 12, 0, 0, tzinfo=timezone.utc)),
        ("D:20180808", datetime(2018, 8, 8, tzinfo=timezone.utc)),
        ("D:201808", datetime(2018, 8, 1, tzinfo=timezone.utc)),
        ("2018", datetime(2018, 1, 1, tzinfo=timezone.utc)),
    ],
)
def test_parse_date_accepts_truncated_forms(text: str, expected: datetime) -> None:
    parsed = parse_date(text)
    assert parsed == expected
    assert parsed.utcoffset() == expected.utcoffset()


@pytest.mark.parametrize(
    "text",
    [
        "",
        "D:",
        "D:201",
        "D:2018080812000",
        "D:20180808120000+09:00",
        "D:20180808120000+09-00'",
        "D:2018080812000X",
        "D:20181308120000Z",
        "snowman",
    ],
)
def test_parse_date_rejects_malformed(text: str) -> None:
    with pytest.raises(PdfDateError, match="invalid PDF date format"):
        parse_date(text)


def test_parse_date_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        parse_date("yesterday")


@pytest.mark.parametrize(
    "t",
    [
        datetime(2018, 8, 8, 12, 0, 0, tzinfo=JST),
        datetime(1999, 12, 31, 23, 59, 59, tzinfo=timezone.utc),
        datetime(2024, 2, 29, 6, 7, 8, tzinfo=IST),
        datetime(2030, 1, 1, 0, 0, 1, tzinfo=NST),
        datetime(999, 6, 1, 12, tzinfo=timezone.utc),
    ],
)
def test_round_trip(t: datetime) -> None:
    assert parse_date(format_date(t)) == t


def test_round_trip_now_at_second_granularity() -> None:
    now = datetime.now().astimezone()
    assert parse_date(format_date(now)) == now.replace(microsecond=0)


def test_format_date_pads_early_years() -> None:
    t = datetime(999, 6, 1, 12, tzinfo=timezone.utc)
    assert format_date(t) == "D:09990601120000Z"


def test_round_trip_naive_matches_local_time() -> None:
    t = datetime(2018, 8, 8, 12, 0, 0)
    parsed = parse_date(format_date(t))
    assert parsed.tzinfo is not None
    assert parsed == t.astimezone()
