import pytest

from app.services.directions_normalizer import (
    format_distance,
    format_duration,
    get_move_type,
    get_walk_time_text,
    highlight_keywords,
    normalize,
    round_half_up,
    translate_guide_to_english,
)

from conftest import directions_payload


def segments(text):
    return [(s.text, s.highlight) for s in highlight_keywords(text)]


# --------------------------
# display strings
# --------------------------
@pytest.mark.parametrize("value,expected", [(0.5, 1), (1.5, 2), (2.5, 3), (15.5, 16), (2.49, 2), (0.0, 0)])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


@pytest.mark.parametrize("seconds,text", [
    (0, "Under 1 min"),
    (59, "Under 1 min"),
    (60, "About 1 min"),
    (89, "About 1 min"),
    (90, "About 2 min"),
    (930, "About 16 min"),
    (3569, "About 59 min"),
    (3600, "About 1h"),
    (3690, "About 1h 2min"),
    (7200, "About 2h"),
    (9000, "About 2h 30min"),
])
def test_format_duration(seconds, text):
    assert format_duration(seconds) == text


@pytest.mark.parametrize("meters,text", [
    (0, "0 m"),
    (999, "999 m"),
    (1000, "1.0 km"),
    (3200, "3.2 km"),
    (12345, "12.3 km"),
])
def test_format_distance(meters, text):
    assert format_distance(meters) == text


@pytest.mark.parametrize("meters,text", [
    (0, ""),
    (-10, ""),
    (10, "~1 min walk"),
    (50, "~1 min walk"),
    (800, "~10 min walk"),
    (3200, "~38 min walk"),
    (5000, "~60 min walk"),
    (5001, ""),
])
def test_walk_time_text(meters, text):
    assert get_walk_time_text(meters) == text


# --------------------------
# translation + highlighting
# --------------------------
def test_bus_stop_instruction_is_numbered_and_highlighted():
    english = translate_guide_to_english("정류장 02123에서 버스 7016 탑승")
    assert english == "Bus Stop #02123에서 Bus #7016 탑승"
    assert segments(english) == [
        ("Bus Stop #02123", True),
        ("에서 ", False),
        ("Bus #7016", True),
        (" 탑승", False),
    ]


def test_exit_instruction():
    english = translate_guide_to_english("출구 8로 나와서 우회전")
    assert english == "Exit 8로 나와서 Turn right"
    assert segments(english) == [("Exit 8", True), ("로 나와서 Turn right", False)]


def test_station_glued_to_korean_name_is_highlighted():
    english = translate_guide_to_english("강남역 3번 출구 방향")
    assert english == "강남Station 3번 Exit 방향"
    assert segments(english) == [("강남", False), ("Station 3", True), ("번 Exit 방향", False)]


def test_numbers_glued_to_korean_text_are_highlighted():
    english = translate_guide_to_english("시청역에서 버스 472 탑승")
    assert english == "시청Station에서 Bus #472 탑승"
    assert segments(english) == [
        ("시청", False),
        ("Station", True),
        ("에서 ", False),
        ("Bus #472", True),
        (" 탑승", False),
    ]


def test_direction_phrases():
    assert translate_guide_to_english("좌회전") == "Turn left"
    assert translate_guide_to_english("직진 후 유턴") == "Go straight 후 Make a U-turn"


def test_latin_text_is_left_alone():
    text = "Take bus 7016 toward City Hall"
    assert translate_guide_to_english(text) == text
    assert segments(text) == [("Take ", False), ("bus 7016", True), (" toward City Hall", False)]


def test_empty_instruction_becomes_continue():
    assert translate_guide_to_english("") == "Continue."


def test_no_highlight_is_one_plain_segment():
    assert segments("Turn right") == [("Turn right", False)]


def test_station_highlight():
    assert segments("Seoul Station 2 then left") == [("Seoul ", False), ("Station 2", True), (" then left", False)]


@pytest.mark.parametrize("step,move", [
    ({"type": 1}, "walking"),
    ({"pathType": 1}, "walking"),
    ({"type": 2}, "driving"),
    ({"type": 2, "pathType": 1}, "driving"),
    ({}, "driving"),
])
def test_move_type(step, move):
    assert get_move_type(step) == move


# --------------------------
# normalize
# --------------------------
def test_normalize_summary():
    result = normalize(directions_payload(duration_ms=930000, distance_m=3200))
    assert result.duration == 930
    assert result.distance == 3200
    assert result.duration_text == "About 16 min"
    assert result.distance_text == "3.2 km"
    assert result.walk_time_text == "~38 min walk"
    assert result.guide is None


def test_normalize_long_route_has_no_walk_time():
    result = normalize(directions_payload(duration_ms=1800000, distance_m=14200))
    assert result.walk_time_text is None
    dumped = result.model_dump(by_alias=True, exclude_none=True)
    assert "walkTimeText" not in dumped
    assert dumped["distanceText"] == "14.2 km"


def test_normalize_guide_steps():
    result = normalize(directions_payload(guide=[
        {"instructions": "정류장 02123에서 버스 7016 탑승", "type": 2},
        {"instructions": "도보 이동", "type": 1},
        {"instructions": ""},
    ]))
    assert [g.instruction_en for g in result.guide] == [
        "Bus Stop #02123에서 Bus #7016 탑승",
        "Walk Go",
        "Continue.",
    ]
    assert [g.move_type for g in result.guide] == ["driving", "walking", "driving"]
    assert result.guide[0].segments[0].highlight is True

    dumped = result.model_dump(by_alias=True)
    assert dumped["guide"][0]["instructionEn"] == "Bus Stop #02123에서 Bus #7016 탑승"
    assert dumped["guide"][1]["moveType"] == "walking"


def test_normalize_optimal_route():
    data = {"route": {"optimal": [{"summary": {"duration": 60000, "distance": 500}}]}}
    result = normalize(data)
    assert result.duration == 60
    assert result.distance_text == "500 m"


def test_normalize_traoptimal_preferred_over_optimal():
    data = {"route": {
        "traoptimal": [{"summary": {"duration": 120000, "distance": 900}}],
        "optimal": [{"summary": {"duration": 60000, "distance": 500}}],
    }}
    assert normalize(data).duration == 120


def test_normalize_nested_result_route():
    data = {"result": {"route": {"traoptimal": [{"summary": {"duration": 300000, "distance": 2000}}]}}}
    result = normalize(data)
    assert result.duration == 300
    assert result.distance_text == "2.0 km"


def test_zero_summary_falls_back_to_top_level_fields():
    data = {
        "route": {"traoptimal": [{"summary": {"duration": 0, "distance": 0}}]},
        "duration": 120000,
        "distance": 800,
    }
    result = normalize(data)
    assert result.duration == 120
    assert result.duration_text == "About 2 min"
    assert result.distance_text == "800 m"
    assert result.walk_time_text == "~10 min walk"


def test_missing_route_falls_back_to_top_level_fields():
    result = normalize({"duration": 45000, "distance": 120})
    assert result.duration == 45
    assert result.duration_text == "Under 1 min"


def test_empty_response():
    result = normalize({})
    assert result.duration == 0
    assert result.distance == 0
    assert result.duration_text == "Under 1 min"
    assert result.distance_text == "0 m"
    assert result.walk_time_text is None
    assert result.guide is None


def test_section_guides_used_when_route_has_none():
    data = directions_payload()
    data["route"]["traoptimal"][0]["section"] = [
        {"guide": [{"instructions": "직진", "pathType": 1}]},
        {"guide": [{"instructions": "좌회전"}]},
    ]
    result = normalize(data)
    assert [g.instruction_en for g in result.guide] == ["Go straight", "Turn left"]
    # section guides carry no usable movement type
    assert [g.move_type for g in result.guide] == ["driving", "driving"]
