# backend/app/utils/time_utils.py

from datetime import date, datetime, timedelta, timezone
from typing import List, Optional

import pytz

from app.models.plan_models import DayDate


SEOUL_TZ = pytz.timezone("Asia/Seoul")

_MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
               "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def parse_iso_date(text: Optional[str]) -> Optional[date]:
    """
    Accepts "2026-03-05" (a trailing time part is ignored).
    Returns None for blank or unparseable input.
    """
    if not text or not text.strip():
        return None
    try:
        return date.fromisoformat(text.strip()[:10])
    except ValueError:
        return None


def format_date_label(d: date) -> str:
    """Mar 5, 2026"""
    return f"{_MONTH_ABBR[d.month - 1]} {d.day}, {d.year}"


def get_day_dates(travel_start: Optional[str], travel_end: Optional[str]) -> List[DayDate]:
    """One entry per calendar day of the inclusive range; [] if the range is invalid."""
    start = parse_iso_date(travel_start)
    end = parse_iso_date(travel_end)
    if start is None or end is None or end < start:
        return []

    out = []
    for offset in range((end - start).days + 1):
        d = start + timedelta(days=offset)
        out.append(DayDate(
            day_label=f"Day {offset + 1}",
            date=d.isoformat(),
            date_label=format_date_label(d),
        ))
    return out


def utc_now_iso() -> str:
    """2026-03-05T09:12:33.120Z"""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def seoul_today() -> date:
    return datetime.now(SEOUL_TZ).date()
