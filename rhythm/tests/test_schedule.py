"""Recurrence rules, streaks and expected occurrences (pure date math)."""

from datetime import date, timedelta

import pytest

pytestmark = pytest.mark.unit

from rhythm.domains.habits.schedule import (
    DAILY,
    SPECIFIC_DAYS,
    STREAK_SCAN_DAYS,
    WEEKDAYS,
    WEEKENDS,
    X_PER_WEEK,
    RecurrenceRule,
    current_streak,
    expected_occurrences,
    is_due,
    is_due_on,
    validate_rule,
    weeks_spanned,
)

# Monday 2026-10-12 .. Sunday 2026-10-18
MONDAY = date(2026, 10, 12)
WEEK = [MONDAY + timedelta(days=i) for i in range(7)]


def _due_weekdays(rule):
    return {d.strftime("%a") for d in WEEK if is_due_on(rule, d)}


@pytest.mark.parametrize(
    "rule, expected",
    [
        (RecurrenceRule(DAILY), {"Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"}),
        (RecurrenceRule(WEEKDAYS), {"Mon", "Tue", "Wed", "Thu", "Fri"}),
        (RecurrenceRule(WEEKENDS), {"Sat", "Sun"}),
        (RecurrenceRule(SPECIFIC_DAYS, frozenset({1, 3, 5})), {"Mon", "Wed", "Fri"}),
        (RecurrenceRule(SPECIFIC_DAYS, frozenset({0})), {"Sun"}),
    ],
)
def test_fixed_rules_mark_expected_weekdays(rule, expected):
    assert _due_weekdays(rule) == expected


def test_weekday_numbering_starts_on_sunday():
    assert is_due(RecurrenceRule(WEEKENDS), 0) is True
    assert is_due(RecurrenceRule(WEEKENDS), 6) is True
    assert is_due(RecurrenceRule(WEEKDAYS), 1) is True
    assert is_due(RecurrenceRule(WEEKDAYS), 0) is False


def test_x_per_week_due_until_target_met():
    rule = RecurrenceRule(X_PER_WEEK, target_per_week=3)
    assert is_due(rule, 2, 0) is True
    assert is_due(rule, 2, 2) is True
    assert is_due(rule, 2, 3) is False
    assert is_due(rule, 6, 4) is False


def test_x_per_week_not_due_for_rest_of_week_once_saturated():
    rule = RecurrenceRule(X_PER_WEEK, target_per_week=3)
    done = [WEEK[0], WEEK[1], WEEK[2]]
    assert is_due_on(rule, WEEK[2], done) is True  # the third completion day itself
    assert all(is_due_on(rule, d, done) is False for d in WEEK[3:])


def test_x_per_week_ignores_previous_week_completions():
    rule = RecurrenceRule(X_PER_WEEK, target_per_week=2)
    last_week = [MONDAY - timedelta(days=2), MONDAY - timedelta(days=1)]
    assert is_due_on(rule, MONDAY, last_week) is True


def test_x_per_week_without_target_is_always_due():
    assert is_due(RecurrenceRule(X_PER_WEEK, target_per_week=None), 3, 10) is True
    assert is_due(RecurrenceRule(X_PER_WEEK, target_per_week=0), 3, 10) is True


def test_streak_counts_unbroken_run():
    ref = date(2026, 10, 18)
    dates = [ref - timedelta(days=i) for i in range(10)]
    assert current_streak(RecurrenceRule(DAILY), dates, ref) == 10


def test_streak_is_zero_when_reference_day_open():
    ref = date(2026, 10, 18)
    dates = [ref - timedelta(days=i) for i in range(1, 6)]
    assert current_streak(RecurrenceRule(DAILY), dates, ref) == 0


def test_streak_skips_days_that_are_not_due():
    # Friday 2026-10-16 and Monday/Thursday before; weekend is skipped for WEEKDAYS
    ref = date(2026, 10, 19)  # Monday
    dates = [ref, date(2026, 10, 16), date(2026, 10, 15)]
    assert current_streak(RecurrenceRule(WEEKDAYS), dates, ref) == 3


def test_streak_stops_at_first_missed_due_day():
    ref = date(2026, 10, 18)
    dates = [ref, ref - timedelta(days=1), ref - timedelta(days=3)]
    assert current_streak(RecurrenceRule(DAILY), dates, ref) == 2


def test_streak_is_capped_by_scan_window():
    ref = date(2026, 10, 18)
    dates = [ref - timedelta(days=i) for i in range(500)]
    assert current_streak(RecurrenceRule(DAILY), dates, ref) == STREAK_SCAN_DAYS


def test_streak_for_x_per_week_is_always_zero():
    ref = date(2026, 10, 18)
    dates = [ref - timedelta(days=i) for i in range(5)]
    assert current_streak(RecurrenceRule(X_PER_WEEK, target_per_week=2), dates, ref) == 0


def test_completing_and_uncompleting_restores_streak():
    ref = date(2026, 10, 18)
    before = [ref - timedelta(days=i) for i in range(1, 4)]
    rule = RecurrenceRule(DAILY)
    original = current_streak(rule, before, ref - timedelta(days=1))
    toggled = before + [ref]
    assert current_streak(rule, toggled, ref) == original + 1
    assert current_streak(rule, before, ref - timedelta(days=1)) == original


def test_expected_occurrences_single_day_daily():
    for offset in range(10):
        day = date(2026, 1, 1) + timedelta(days=offset * 37)
        assert expected_occurrences(RecurrenceRule(DAILY), day, day) == 1


def test_expected_occurrences_weekdays_over_any_seven_days():
    for offset in range(7):
        start = MONDAY + timedelta(days=offset)
        assert expected_occurrences(RecurrenceRule(WEEKDAYS), start, start + timedelta(days=6)) == 5


def test_expected_occurrences_empty_range():
    assert expected_occurrences(RecurrenceRule(DAILY), WEEK[3], WEEK[2]) == 0


def test_expected_occurrences_x_per_week_counts_partial_weeks_in_full():
    rule = RecurrenceRule(X_PER_WEEK, target_per_week=3)
    assert expected_occurrences(rule, WEEK[2], WEEK[2]) == 3
    # Sunday to Monday touches two ISO weeks
    assert expected_occurrences(rule, WEEK[6], WEEK[6] + timedelta(days=1)) == 6


def test_weeks_spanned_uses_calendar_weeks():
    assert weeks_spanned(WEEK[0], WEEK[6]) == 1
    assert weeks_spanned(WEEK[3], WEEK[3] + timedelta(days=7)) == 2
    assert weeks_spanned(WEEK[6], WEEK[0]) == 0


@pytest.mark.parametrize(
    "frequency, days, target",
    [
        ("HOURLY", [], None),
        (SPECIFIC_DAYS, [], None),
        (SPECIFIC_DAYS, [7], None),
        (X_PER_WEEK, [], None),
        (X_PER_WEEK, [], 0),
    ],
)
def test_validate_rule_rejects_meaningless_rules(frequency, days, target):
    with pytest.raises(ValueError, match="invalid_recurrence"):
        validate_rule(frequency, days, target)


def test_validate_rule_accepts_complete_rules():
    validate_rule(DAILY, [], None)
    validate_rule(SPECIFIC_DAYS, [0, 6], None)
    validate_rule(X_PER_WEEK, [], 4)
