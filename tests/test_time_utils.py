import re
from datetime import date

import pytest

from app.utils.clustering import SEOUL_CENTER, haversine_km, nearest_neighbor_order
from app.utils.time_utils import format_date_label, get_day_dates, parse_iso_date, utc_now_iso


@pytest.mark.parametrize("text,expected", [
    ("2026-03-05", date(2026, 3, 5)),
    ("2026-03-05T09:00:00", date(2026, 3, 5)),
    ("", None),
    ("   ", None),
    (None, None),
    ("03/05/2026", None),
])
def test_parse_iso_date(text, expected):
    assert parse_iso_date(text) == expected


def test_format_date_label():
    assert format_date_label(date(2026, 12, 31)) == "Dec 31, 2026"


def test_day_dates_cross_month():
    days = get_day_dates("2026-02-27", "2026-03-02")
    assert [d.date for d in days] == ["2026-02-27", "2026-02-28", "2026-03-01", "2026-03-02"]
    assert days[-1].day_label == "Day 4"


def test_day_dates_invalid_range():
    assert get_day_dates("2026-03-06", "2026-03-05") == []
    assert get_day_dates("", "2026-03-05") == []


def test_utc_now_iso_shape():
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", utc_now_iso())


def test_haversine():
    lat, lng = SEOUL_CENTER["lat"], SEOUL_CENTER["lng"]
    assert haversine_km(lat, lng, lat, lng) == 0
    # City Hall to Gangnam station is a little under 9 km
    assert 8.0 < haversine_km(lat, lng, 37.4979, 127.0276) < 9.5


def test_nearest_neighbor_tie_goes_to_earliest():
    start = (37.0, 127.0)
    east = {"name": "east", "lat": 37.0, "lng": 127.5}
    west = {"name": "west", "lat": 37.0, "lng": 126.5}
    assert [p["name"] for p in nearest_neighbor_order([east, west], start)] == ["east", "west"]
    assert [p["name"] for p in nearest_neighbor_order([west, east], start)] == ["west", "east"]
