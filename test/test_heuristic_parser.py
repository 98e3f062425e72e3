from datetime import datetime

import pytest

from extraction.heuristic_parser import (
    UNTITLED,
    parse_deadline,
    parse_duration,
    parse_priority,
    parse_task,
    parse_title,
)

NOW = datetime(2024, 1, 1, 10, 0)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("study for 1.5 hours", 90),
        ("review for 45 min", 45),
        ("work on it", 60),
        ("Read chapter 5 in 30 min", 30),
        ("quick call 5m", 15),
        ("thesis marathon 10 hours", 480),
        ("lab report 2hr", 120),
        ("Practice 90 MINUTES", 90),
        ("stretch 15.5 min", 16),
    ],
)
def test_duration(text, expected):
    assert parse_duration(text) == expected


def test_duration_first_match_wins():
    assert parse_duration("30 min now, 2 hours later") == 30


@pytest.mark.parametrize(
    "text,expected",
    [
        ("URGENT: call the bank", "high"),
        ("send it asap", "high"),
        ("critical bug fix", "high"),
        ("low priority: tidy desk", "low"),
        ("read whenever", "low"),
        ("flexible reading", "low"),
        ("water the plants", "medium"),
    ],
)
def test_priority(text, expected):
    assert parse_priority(text.lower()) == expected


def test_high_keyword_beats_low_keyword():
    assert parse_task("urgent, but do it whenever", now=NOW).priority == "high"


@pytest.mark.parametrize(
    "text,expected",
    [
        ("due tomorrow", datetime(2024, 1, 2, 18, 0)),
        ("in 3 days", datetime(2024, 1, 4, 18, 0)),
        ("IN 3 DAYS", datetime(2024, 1, 4, 18, 0)),
        ("no date phrase here", datetime(2024, 1, 2, 18, 0)),
        ("finish today", datetime(2024, 1, 1, 18, 0)),
        ("essay next week", datetime(2024, 1, 8, 18, 0)),
        ("project next month", datetime(2024, 1, 31, 18, 0)),
        ("today, not in 5 days", datetime(2024, 1, 1, 18, 0)),
        ("meeting in the holiday", datetime(2024, 1, 2, 18, 0)),
    ],
)
def test_deadline(text, expected):
    assert parse_deadline(text, NOW) == expected


def test_deadline_time_is_always_six_pm():
    now = datetime(2024, 3, 10, 23, 59, 59, 999)
    deadline = parse_deadline("tomorrow at 9am", now)
    assert (deadline.hour, deadline.minute, deadline.second, deadline.microsecond) == (18, 0, 0, 0)
    assert deadline.date() == datetime(2024, 3, 11).date()


def test_deadline_out_of_range_uses_default():
    assert parse_deadline("in 999999999 days", NOW) == datetime(2024, 1, 2, 18, 0)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("Finish essay, then relax", "Finish essay"),
        ("Buy milk. Then eggs", "Buy milk"),
        ("  Call mom!  ", "Call mom"),
        (", leading comma", ", leading comma"),
        ("", UNTITLED),
        ("   ", UNTITLED),
    ],
)
def test_title(text, expected):
    assert parse_title(text) == expected


def test_long_title_is_cut():
    text = "write the literature review section for the thesis draft and send it over"
    title = parse_title(text)
    assert len(title) <= 50
    assert text.startswith(title)


def test_report_example():
    task = parse_task("Finish urgent report in 2 hours", now=NOW)
    assert task.title == "Finish urgent report in 2 hours"
    assert task.priority == "high"
    assert task.duration == 120
    assert task.deadline == datetime(2024, 1, 2, 18, 0)
    assert task.description is None


@pytest.mark.parametrize("text", ["", "?!.,", "x" * 500, "in 0 days 0 min", "🙂 maybe"])
def test_always_valid_and_deterministic(text):
    first = parse_task(text, now=NOW)
    second = parse_task(text, now=NOW)
    assert first == second
    assert first.title
    assert 15 <= first.duration <= 480
    assert first.priority in {"low", "medium", "high"}


def test_absurd_duration_number_is_capped():
    assert parse_duration("1" + "0" * 400 + " hours") == 480


def test_deadline_day_count_too_long_for_int_uses_default():
    assert parse_deadline("in " + "9" * 5000 + " days", NOW) == datetime(2024, 1, 2, 18, 0)


def test_only_ascii_digits_are_numbers():
    # Arabic-Indic three
    assert parse_deadline("in ٣ days", NOW) == datetime(2024, 1, 2, 18, 0)
    assert parse_duration("٣ hours") == 60
