import json

import pytest

from minutes_engine.minutes import MinutesParseError, MinutesReport, parse_minutes, strip_code_fence


def test_parse_minutes_accepts_plain_json(sample_report_json):
    report = parse_minutes(json.dumps(sample_report_json, ensure_ascii=False))

    assert report.ko.title == "주간 영업 회의"
    assert report.en.action_items[0].assignee == "Jieun Lee"
    assert report.en.discussion[0].topic == "Sales targets"


def test_parse_minutes_strips_markdown_fence(sample_report_json):
    text = "```json\n" + json.dumps(sample_report_json) + "\n```"

    report = parse_minutes(text)

    assert report.en.title == "Weekly Sales Meeting"


def test_strip_code_fence_leaves_bare_json_untouched():
    assert strip_code_fence('  {"a": 1}\n') == '{"a": 1}'
    assert strip_code_fence('```\n{"a": 1}\n```') == '{"a": 1}'


def test_missing_and_null_fields_get_defaults():
    text = json.dumps({"ko": {"title": "회의", "participants": None}, "en": {"title": "Meeting"}})

    report = parse_minutes(text)

    assert report.ko.participants == []
    assert report.en.summary == ""
    assert report.en.action_items == []


def test_invalid_json_raises_with_raw_text():
    with pytest.raises(MinutesParseError) as excinfo:
        parse_minutes("Sorry, I could not listen to that.")

    assert excinfo.value.raw_text == "Sorry, I could not listen to that."


def test_missing_locale_is_a_parse_error():
    with pytest.raises(MinutesParseError):
        parse_minutes(json.dumps({"en": {"title": "Meeting"}}))


def test_to_json_uses_camel_case_action_items(sample_report_json):
    report = MinutesReport.model_validate(sample_report_json)

    data = report.to_json()

    assert "actionItems" in data["ko"]
    assert data["ko"]["actionItems"][0]["task"] == "계약서 초안 작성"


def test_for_locale_rejects_unknown_language(sample_report_json):
    report = MinutesReport.model_validate(sample_report_json)

    assert report.for_locale("en").title == "Weekly Sales Meeting"
    with pytest.raises(KeyError):
        report.for_locale("fr")


def test_numeric_fields_are_read_as_text():
    text = json.dumps({"ko": {"title": "회의", "date": 20250115}, "en": {"title": 2025, "date": 20250115}})

    report = parse_minutes(text)

    assert report.ko.date == "20250115"
    assert report.en.title == "2025"


def test_null_list_entries_are_dropped():
    text = json.dumps(
        {
            "ko": {"participants": ["a", None], "decisions": [None]},
            "en": {"actionItems": [None, {"task": "Draft", "assignee": None}]},
        }
    )

    report = parse_minutes(text)

    assert report.ko.participants == ["a"]
    assert report.ko.decisions == []
    assert report.en.action_items[0].task == "Draft"
    assert report.en.action_items[0].assignee == ""
