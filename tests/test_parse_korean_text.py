"""
End-to-end tests for parse_korean_text.
"""

import logging
from datetime import datetime, timedelta

import pytest
from dateutil import tz

from datekompiler import parse_korean_text
from datekompiler.units import DateUnit
from datekompiler.utils import TRACE


@pytest.fixture
def base():
    # Monday 09:00, naive wall clock
    return datetime(2024, 1, 1, 9, 0)


class TestScenarios:

    def test_tomorrow_at_three(self, base):
        result = parse_korean_text("내일 3시", base)
        assert result.dates == (datetime(2024, 1, 2, 15, 0),)
        assert result.unit is DateUnit.HOUR

    def test_meeting_in_three_days(self, base):
        result = parse_korean_text("3일후 회의", base)
        assert result.dates == (datetime(2024, 1, 4),)
        assert result.subject == "회의"

    def test_report_due_next_monday(self, base):
        result = parse_korean_text("다음주 월요일까지 보고서 제출", base)
        assert result.dates == (datetime(2024, 1, 8),)
        assert result.type == "due"
        assert result.subject == "보고서 제출"

    def test_this_week(self, base):
        assert parse_korean_text("이번주 금요일", base).dates == (datetime(2024, 1, 5),)

    def test_last_month(self, base):
        assert parse_korean_text("저번달 15일", base).dates == (datetime(2023, 12, 15),)

    def test_two_weeks_later(self, base):
        result = parse_korean_text("2주 후", base)
        assert result.dates == (datetime(2024, 1, 14),)
        assert result.unit is DateUnit.WEEK

    def test_task_clue(self, base):
        result = parse_korean_text("내일 장보기 하기", base)
        assert "task" in result.clues
        assert result.type == "event"


class TestProperties:

    @pytest.mark.parametrize("text", ["박진서", "  hello world ", "점심 뭐 먹지"])
    def test_text_without_dates(self, base, text):
        result = parse_korean_text(text, base)
        assert result.dates == ()
        assert result.subject == text.strip()

    def test_offsets_slice_the_original_text(self, base):
        text = "회의는 내일 오후 3시"
        result = parse_korean_text(text, base)
        assert result.date_text
        for word in result.date_text:
            assert text[word.start:word.end] == word.text
        assert result.subject == "회의는"

    def test_bare_hour_defaults_to_afternoon(self, base):
        assert parse_korean_text("3시", base).dates == (datetime(2024, 1, 1, 15),)
        assert parse_korean_text("10시", base).dates == (datetime(2024, 1, 1, 10),)

    def test_explicit_morning(self, base):
        assert parse_korean_text("오전 3시", base).dates == (datetime(2024, 1, 1, 3),)

    @pytest.mark.parametrize("text", ["오후 3 회의", "3PM 회의", "회의 오후 3"])
    def test_bare_hour_next_to_a_marker(self, base, text):
        result = parse_korean_text(text, base)
        assert result.dates == (datetime(2024, 1, 1, 15),)
        assert result.unit is DateUnit.HOUR
        assert result.subject == "회의"

    @pytest.mark.parametrize("text", ["99999달 후", "999999주 후", "1년 1월 1일 하루 전"])
    def test_out_of_calendar_produces_nothing(self, base, text):
        assert parse_korean_text(text, base).dates == ()

    def test_weekday_rolls_over_from_thursday(self):
        thursday = datetime(2024, 1, 4, 9, 0)
        assert parse_korean_text("월요일", thursday).dates == (datetime(2024, 1, 8),)
        assert parse_korean_text("금요일", thursday).dates == (datetime(2024, 1, 5),)


class TestTimezones:

    def test_aware_base_gives_aware_dates(self):
        base = datetime(2024, 1, 1, 0, 0, tzinfo=tz.UTC)
        result = parse_korean_text("내일 3시", base, timezone="Asia/Seoul")
        start = result.dates[0]
        assert start == datetime(2024, 1, 2, 6, 0, tzinfo=tz.UTC)
        assert start.utcoffset() == timedelta(hours=9)

    def test_base_is_read_in_the_zone(self):
        # 2024-01-01 20:00 UTC is already Jan 2nd in Seoul
        base = datetime(2024, 1, 1, 20, 0, tzinfo=tz.UTC)
        result = parse_korean_text("오늘", base, timezone="Asia/Seoul")
        assert result.dates[0] == datetime(2024, 1, 2, tzinfo=tz.gettz("Asia/Seoul"))

    def test_default_base_is_now(self):
        result = parse_korean_text("내일", timezone="UTC")
        assert result.dates[0].tzinfo is not None

    def test_first_year_does_not_fit_the_zone(self):
        base = datetime(2024, 1, 1, 0, 0, tzinfo=tz.UTC)
        assert parse_korean_text("1년 1월 1일", base, timezone="Asia/Seoul").dates == ()

    def test_unknown_timezone(self, base):
        with pytest.raises(ValueError):
            parse_korean_text("내일", base, timezone="Nowhere/Land")


class TestLogging:

    def test_trace_records(self, base, caplog):
        caplog.set_level(TRACE, logger="datekompiler")
        parse_korean_text("내일 3시", base)
        assert any(record.levelno == TRACE for record in caplog.records)

    def test_injected_logger(self, base, caplog):
        logger = logging.getLogger("tests.injected")
        caplog.set_level(TRACE, logger="tests.injected")
        parse_korean_text("내일 3시", base, logger=logger)
        assert any(record.name == "tests.injected" for record in caplog.records)

    def test_logging_does_not_change_output(self, base, caplog):
        quiet = parse_korean_text("다음주 월요일까지 보고서 제출", base)
        caplog.set_level(TRACE, logger="datekompiler")
        assert parse_korean_text("다음주 월요일까지 보고서 제출", base) == quiet
