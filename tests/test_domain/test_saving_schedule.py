"""
Tests for the saving schedule generator
"""
from datetime import date
from itertools import islice

import pytest

from budgie.domain.errors import EmptyScheduleDefinition, InvalidCadence
from budgie.domain.saving_schedule import (
    SavingSchedule,
    ScheduleTick,
    accrued_through,
    add_months,
    monthly_saving_schedule,
    normalize_cadence,
    nth_deadline,
    round_half_up,
    weekly_saving_schedule,
    yearly_saving_schedule,
)


def d(value: str) -> date:
    return date.fromisoformat(value)


class TestHelpers:

    def test_round_half_up(self):
        assert round_half_up(5, 2) == 3
        assert round_half_up(-5, 2) == -2
        assert round_half_up(1001, 4) == 250
        assert round_half_up(1002, 4) == 251
        assert round_half_up(273, 7) == 39

    def test_add_months_clips_to_month_end(self):
        assert add_months(d("2021-01-31"), 1) == d("2021-02-28")
        assert add_months(d("2020-01-31"), 1) == d("2020-02-29")
        assert add_months(d("2020-11-15"), 2) == d("2021-01-15")
        assert add_months(d("2021-03-31"), -1) == d("2021-02-28")

    def test_monthly_deadlines_do_not_drift(self):
        anchor = d("2021-01-31")
        assert nth_deadline("MONTHLY", anchor, 1) == d("2021-02-28")
        assert nth_deadline("MONTHLY", anchor, 2) == d("2021-03-31")

    def test_yearly_leap_day_deadlines(self):
        anchor = d("2020-02-29")
        assert nth_deadline("YEARLY", anchor, 1) == d("2021-02-28")
        assert nth_deadline("YEARLY", anchor, 4) == d("2024-02-29")

    def test_normalize_cadence(self):
        assert normalize_cadence(" weekly ") == "WEEKLY"
        with pytest.raises(InvalidCadence):
            normalize_cadence("DAILY")


class TestWeeklySchedule:

    def test_one_tick_per_week(self):
        schedule = weekly_saving_schedule("groceries", [(d("2020-11-01"), 50)])

        ticks = list(islice(schedule, 3))

        assert ticks == [
            ScheduleTick("groceries", d("2020-11-01"), 50),
            ScheduleTick("groceries", d("2020-11-08"), 50),
            ScheduleTick("groceries", d("2020-11-15"), 50),
        ]

    def test_null_value_ends_schedule(self):
        schedule = weekly_saving_schedule(
            "savings",
            [(d("2020-11-01"), 654321), (d("2020-11-16"), None)],
        )

        ticks = list(schedule)

        assert len(ticks) == 3
        assert ticks[-1].date == d("2020-11-15")
        assert schedule.next_tick() is None
        assert schedule.terminal == ScheduleTick("savings", d("2020-11-22"), 0)


class TestMonthlySchedule:

    def test_four_ticks_end_on_each_deadline(self):
        schedule = monthly_saving_schedule("rent", [(d("2020-11-01"), 4000)])

        ticks = list(islice(schedule, 12))

        assert [t.date for t in ticks] == [
            d("2020-10-11"), d("2020-10-18"), d("2020-10-25"), d("2020-11-01"),
            d("2020-11-10"), d("2020-11-17"), d("2020-11-24"), d("2020-12-01"),
            d("2020-12-11"), d("2020-12-18"), d("2020-12-25"), d("2021-01-01"),
        ]
        assert all(t.amount == 1000 for t in ticks)

    def test_first_tick_absorbs_rounding(self):
        schedule = monthly_saving_schedule("phone", [(d("2020-11-01"), 1001)])

        amounts = [t.amount for t in islice(schedule, 4)]

        assert amounts == [251, 250, 250, 250]
        assert sum(amounts) == 1001

    def test_amendment_applies_from_its_date(self):
        schedule = monthly_saving_schedule(
            "rent",
            [(d("2021-01-31"), 400), (d("2021-03-01"), 800)],
        )

        ticks = list(islice(schedule, 12))

        assert ticks[3] == ScheduleTick("rent", d("2021-01-31"), 100)
        assert ticks[7] == ScheduleTick("rent", d("2021-02-28"), 100)
        assert ticks[11] == ScheduleTick("rent", d("2021-03-31"), 200)

    def test_same_day_amendment_later_entry_wins(self):
        schedule = monthly_saving_schedule(
            "rent",
            [(d("2020-11-01"), 400), (d("2020-11-01"), 800)],
        )

        assert schedule.amount_for(d("2020-11-01")) == 800


class TestYearlySchedule:

    def test_fifty_two_ticks_sum_to_value(self):
        schedule = yearly_saving_schedule("insurance", [(d("2020-11-01"), 654321)])

        ticks = list(islice(schedule, 52))

        assert ticks[0].date == d("2019-11-10")
        assert ticks[-1].date == d("2020-11-01")
        assert ticks[0].amount == 12588
        assert all(t.amount == 12583 for t in ticks[1:])
        assert sum(t.amount for t in ticks) == 654321


class TestCursor:

    def test_empty_history_raises(self):
        with pytest.raises(EmptyScheduleDefinition):
            SavingSchedule("rent", "MONTHLY", [])

    def test_invalid_cadence_raises(self):
        with pytest.raises(InvalidCadence):
            SavingSchedule("rent", "FORTNIGHTLY", [(d("2020-11-01"), 100)])

    def test_restart_gives_fresh_cursor(self):
        schedule = weekly_saving_schedule("groceries", [(d("2020-11-01"), 50)])
        first = schedule.next_tick()
        schedule.next_tick()

        assert schedule.restart().next_tick() == first

    def test_accrued_through_is_inclusive(self):
        schedule = weekly_saving_schedule("groceries", [(d("2020-11-01"), 50)])

        assert accrued_through(schedule, d("2020-11-08")) == 100

    def test_accrued_before_first_tick_is_zero(self):
        schedule = weekly_saving_schedule("groceries", [(d("2020-11-01"), 50)])

        assert accrued_through(schedule, d("2020-10-31")) == 0
