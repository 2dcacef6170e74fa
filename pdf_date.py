"""
pdf_date.py — PDF date strings (D:YYYYMMDDHHmmSSOHH'mm') to and from datetime.
"""
from datetime import datetime, timedelta

# Right-padding source for truncated dates, indexed by input length.
_DATE_TEMPLATE = "00000101000000+00'00'"
_PADDABLE_LENGTHS = (4, 6, 8, 10, 12, 14, 18, 21)


class PdfDateError(ValueError):
    pass


def format_date(t: datetime) -> str:
    """
    Return t as a PDF date string.

    Naive datetimes are taken as local time, so parse_date() of the result
    equals t.astimezone() rather than t itself.
    """
    if t.tzinfo is None:
        t = t.astimezone()
    offset = t.utcoffset() or timedelta(0)
    # strftime("%Y") does not zero-pad years before 1000 on every platform.
    s = f"D:{t.year:04d}" + t.strftime("%m%d%H%M%S")
    if not offset:
        return s + "Z"
    sign = "+" if offset > timedelta(0) else "-"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{s}{sign}{minutes // 60:02d}'{minutes % 60:02d}'"


def parse_date(s: str) -> datetime:
    """
    Parse a PDF date string into an aware datetime.

    The "D:" prefix is optional. Truncated values (year only up to a full
    offset) are padded with January 1st, midnight, UTC.
    """
    b = s[2:] if s.startswith("D:") else s
    n = len(b)
    if n == 15:
        pass
    elif n in _PADDABLE_LENGTHS:
        b += _DATE_TEMPLATE[n:]
        if b[17] != "'" or b[20] != "'":
            raise PdfDateError(f"invalid PDF date format: {s!r}")
        b = b[:17] + ":" + b[18:20]
    else:
        raise PdfDateError(f"invalid PDF date format: {s!r}")

    if not b[:14].isdigit():
        raise PdfDateError(f"invalid PDF date format: {s!r}")
    try:
        return datetime.strptime(b, "%Y%m%d%H%M%S%z")
    except ValueError:
        raise PdfDateError(f"invalid PDF date format: {s!r}") from None
