"""
Tests for the parse_date dispatcher.
"""

from datetime import datetime, timedelta

import pytest
from dateutil import tz

import datekompiler.date
from datekompiler import DateTextParser, ParsedDates, parse_date
from datekompiler.units import DateUnit

SEOUL = tz.gettz("Asia/Seoul")


@pytest.fixture
def base():
    return datetime(2024, 1, 1, 9, 0)


@pytest.fixture
def fake_search(monkeypatch):
    calls = []

    def install(found):
        def search_dates(text, languages=None, settings=None):
            calls.append({"text": text, "languages": languages, "settings": settings})
            return found

        monkeypatch.setattr(datekompiler.date, "search_dates", search_dates)
        return calls

    return install


class TestKoreanText:

    def test_event_with_time(self, base):
        parsed = parse_date("내일 3시 회의", base)
        assert parsed.start_date == datetime(2024, 1, 2, 15, 0, tzinfo=SEOUL)
        assert parsed.end_date == datetime(2024, 1, 2, 16, 0, tzinfo=SEOUL)
        assert parsed.unit is DateUnit.HOUR
        assert parsed.subject == "회의"
        assert parsed.date_text == "내일 3시"
        assert parsed.offset == 0

    def test_whole_day_lasts_a_day(self, base):
        parsed = parse_date("회의는 내일", base)
        assert parsed.start_date == datetime(2024, 1, 2, tzinfo=SEOUL)
        assert parsed.end_date == datetime(2024, 1, 3, tzinfo=SEOUL)
        assert parsed.offset == 4
        assert parsed.date_text == "내일"
        assert parsed.subject == "회의는"

    def test_minutes_last_an_hour(self, base):
        parsed = parse_date("8시 반 저녁", base)
        assert parsed.unit is DateUnit.MINUTE
        assert parsed.end_date - parsed.start_date == timedelta(hours=1)

    def test_range_uses_second_date_as_end(self, base):
        parsed = parse_date("내일부터 모레까지 휴가", base)
        assert parsed.start_date == datetime(2024, 1, 2, tzinfo=SEOUL)
        assert parsed.end_date == datetime(2024, 1, 3, tzinfo=SEOUL)
        assert parsed.subject == "휴가"

    def test_due(self, base):
        parsed = parse_date("다음주 월요일까지 보고서 제출", base)
        assert parsed.start_date == datetime(2024, 1, 8, tzinfo=SEOUL)
        assert parsed.subject == "보고서 제출"

    def test_naive_output(self, base):
        parsed = parse_date("내일 3시", base, settings={"RETURN_AS_TIMEZONE_AWARE": False})
        assert parsed.start_date == datetime(2024, 1, 2, 15, 0)
        assert parsed.start_date.tzinfo is None

    def test_aware_base_in_another_zone(self):
        base = datetime(2024, 1, 1, 0, 0, tzinfo=tz.UTC)
        parsed = parse_date("내일 3시", base, timezone="UTC")
        assert parsed.start_date == datetime(2024, 1, 2, 15, 0, tzinfo=tz.UTC)

    def test_nothing_found(self, base):
        assert parse_date("박진서", base) is None

    def test_bare_hour_with_marker(self, base):
        parsed = parse_date("오후 3 회의", base)
        assert parsed.start_date == datetime(2024, 1, 1, 15, 0, tzinfo=SEOUL)
        assert parsed.unit is DateUnit.HOUR
        assert parsed.subject == "회의"

    def test_first_year_does_not_fit_the_zone(self, base):
        assert parse_date("1년 1월 1일", base) is None

    def test_end_past_the_last_year(self, base):
        assert parse_date("9999년 12월 31일", base, settings={"RETURN_AS_TIMEZONE_AWARE": False}) is None

    def test_fold_past_the_last_year(self, base):
        assert parse_date("99999달 후", base) is None


class TestOtherLanguages:

    def test_delegates_to_dateparser(self, base, fake_search):
        calls = fake_search([("tomorrow at 3pm", datetime(2024, 1, 2, 15, 0))])
        parsed = parse_date("meeting tomorrow at 3pm", base, timezone="UTC",
                            settings={"RETURN_AS_TIMEZONE_AWARE": False})

        assert parsed.start_date == datetime(2024, 1, 2, 15, 0)
        assert parsed.end_date == datetime(2024, 1, 2, 16, 0)
        assert parsed.unit is DateUnit.HOUR
        assert parsed.subject == "meeting"
        assert parsed.date_text == "tomorrow at 3pm"
        assert parsed.offset == 8

        assert calls[0]["settings"]["RELATIVE_BASE"] == base
        assert calls[0]["settings"]["PREFER_DATES_FROM"] == "future"

    def test_midnight_is_a_day(self, base, fake_search):
        fake_search([("March 3", datetime(2024, 3, 3))])
        parsed = parse_date("trip on March 3", base, settings={"RETURN_AS_TIMEZONE_AWARE": False})
        assert parsed.unit is DateUnit.DAY
        assert parsed.end_date == datetime(2024, 3, 4)
        assert parsed.subject == "trip on"

    def test_aware_output(self, base, fake_search):
        fake_search([("tomorrow", datetime(2024, 1, 2))])
        parsed = parse_date("tomorrow", base)
        assert parsed.start_date == datetime(2024, 1, 2, tzinfo=SEOUL)

    def test_nothing_found(self, base, fake_search):
        fake_search(None)
        assert parse_date("hello world", base) is None

    def test_real_dateparser(self, base):
        parsed = parse_date("Lunch on March 3, 2024", base,
                            settings={"LANGUAGES": ["en"], "RETURN_AS_TIMEZONE_AWARE": False})
        assert parsed is not None
        assert (parsed.start_date.month, parsed.start_date.day) == (3, 3)


class TestParsedDates:

    def test_dict_access(self, base):
        parsed = parse_date("내일 3시 회의", base)
        assert parsed["subject"] == "회의"
        parsed["subject"] = "점심"
        assert parsed.subject == "점심"

    def test_unknown_key(self):
        parsed = ParsedDates()
        with pytest.raises(KeyError):
            parsed["nothing"]
        with pytest.raises(KeyError):
            parsed["nothing"] = 1

    def test_repr(self):
        assert repr(ParsedDates(subject="회의")).startswith("ParsedDates(start_date=None")


class TestDateTextParser:

    def test_rejects_non_string(self):
        with pytest.raises(TypeError):
            DateTextParser().get_date_data(42)

    def test_rejects_bad_timezone_type(self):
        with pytest.raises(TypeError):
            DateTextParser(timezone=9)

    def test_timezone_argument_wins_over_settings(self, base):
        parser = DateTextParser(timezone="UTC", settings={"TIMEZONE": "Asia/Seoul"})
        assert parser.timezone_name == "UTC"
