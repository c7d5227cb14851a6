"""
Unit tests for the recurrence calculator.
"""

from datetime import date
from decimal import Decimal

import pytest

from dispatch_wizard.application.services.recurrence_calculator import (
    RecurrenceCalculator,
    add_months,
    compute_visits,
)
from dispatch_wizard.domain.value_objects.date_window import DateWindow
from dispatch_wizard.domain.value_objects.frequency import (
    Frequency,
    FrequencySpec,
    SpecificDate,
    Weekday,
)


class TestRecurrenceCalculator:
    """Test cases for RecurrenceCalculator."""

    @pytest.fixture
    def calculator(self):
        return RecurrenceCalculator()

    @pytest.fixture
    def ten_days(self):
        return DateWindow(date(2025, 3, 1), date(2025, 3, 10))

    def test_one_time_is_a_single_visit_on_start(self, calculator, ten_days):
        schedule = calculator.compute_visits(ten_days, FrequencySpec.one_time())
        assert schedule.dates == [date(2025, 3, 1)]

    def test_daily_covers_every_day(self, calculator, ten_days):
        schedule = calculator.compute_visits(ten_days, FrequencySpec(frequency=Frequency.DAILY))
        assert schedule.visit_count == 10

    def test_daily_on_single_day_window(self, calculator):
        window = DateWindow.single_day(date(2025, 3, 1))
        schedule = calculator.compute_visits(window, FrequencySpec(frequency=Frequency.DAILY))
        assert schedule.visit_count == 1

    def test_weekly_steps_seven_days(self, calculator):
        window = DateWindow(date(2025, 3, 1), date(2025, 3, 22))
        schedule = calculator.compute_visits(window, FrequencySpec(frequency=Frequency.WEEKLY))
        assert schedule.dates == [
            date(2025, 3, 1),
            date(2025, 3, 8),
            date(2025, 3, 15),
            date(2025, 3, 22),
        ]

    def test_every_three_days_over_ten_days(self, calculator, ten_days):
        schedule = calculator.compute_visits(ten_days, FrequencySpec.every_n_days(3))
        assert schedule.dates == [
            date(2025, 3, 1),
            date(2025, 3, 4),
            date(2025, 3, 7),
            date(2025, 3, 10),
        ]

    def test_bare_custom_frequency_uses_interval(self, calculator, ten_days):
        spec = FrequencySpec(frequency=Frequency.CUSTOM, interval_days=5)
        schedule = calculator.compute_visits(ten_days, spec)
        assert schedule.dates == [date(2025, 3, 1), date(2025, 3, 6)]

    def test_interval_below_one_is_clamped(self, calculator, ten_days):
        schedule = calculator.compute_visits(ten_days, FrequencySpec.every_n_days(0))
        assert schedule.visit_count == 10

    def test_days_of_week_monday_thursday(self, calculator):
        window = DateWindow(date(2025, 3, 3), date(2025, 3, 17))
        spec = FrequencySpec.on_weekdays([Weekday.MONDAY, Weekday.THURSDAY])

        schedule = calculator.compute_visits(window, spec, per_visit_cost=Decimal("50"))

        assert schedule.dates == [
            date(2025, 3, 3),
            date(2025, 3, 6),
            date(2025, 3, 10),
            date(2025, 3, 13),
            date(2025, 3, 17),
        ]
        assert schedule.total_cost == Decimal("250.00")
        assert schedule.summary_text == "Every Mon, Thu: 5 visits, $250.00"

    def test_specific_dates_outside_window_are_reported(self, calculator, ten_days):
        spec = FrequencySpec.on_dates(
            [
                SpecificDate(date(2025, 3, 5), time="09:00"),
                SpecificDate(date(2025, 3, 20)),
                SpecificDate(date(2025, 2, 27)),
            ]
        )
        schedule = calculator.compute_visits(ten_days, spec)

        assert schedule.dates == [date(2025, 3, 5)]
        assert schedule.visits[0].time == "09:00"
        assert schedule.out_of_window_dates == (date(2025, 2, 27), date(2025, 3, 20))
        assert schedule.has_out_of_window_dates is True

    def test_empty_window_yields_no_visits(self, calculator):
        window = DateWindow(date(2025, 3, 10), date(2025, 3, 1))
        schedule = calculator.compute_visits(
            window, FrequencySpec(frequency=Frequency.DAILY), dropoff=True, pickup=True
        )
        assert schedule.visit_count == 0
        assert schedule.total_cost == Decimal("0.00")

    def test_dropoff_and_pickup_collapse_on_single_day(self, calculator):
        window = DateWindow.single_day(date(2025, 3, 1))
        schedule = calculator.compute_visits(
            window, FrequencySpec.one_time(), dropoff=True, pickup=True, per_visit_cost=40
        )
        assert schedule.visit_count == 1
        assert schedule.visits[0].kinds == ("scheduled", "dropoff", "pickup")
        assert schedule.total_cost == Decimal("40.00")

    def test_dropoff_and_pickup_add_boundary_visits(self, calculator):
        window = DateWindow(date(2025, 3, 1), date(2025, 3, 10))
        schedule = calculator.compute_visits(
            window, FrequencySpec.every_n_days(4), dropoff=True, pickup=True
        )
        # 1, 5, 9 from the interval plus the pickup on the 10th
        assert schedule.dates == [
            date(2025, 3, 1),
            date(2025, 3, 5),
            date(2025, 3, 9),
            date(2025, 3, 10),
        ]
        assert schedule.visits[-1].kinds == ("pickup",)

    def test_monthly_clamps_to_month_end(self, calculator):
        window = DateWindow(date(2025, 1, 31), date(2025, 4, 30))
        schedule = calculator.compute_visits(window, FrequencySpec(frequency=Frequency.MONTHLY))
        assert schedule.dates == [
            date(2025, 1, 31),
            date(2025, 2, 28),
            date(2025, 3, 31),
            date(2025, 4, 30),
        ]

    def test_visits_are_sorted_and_unique(self, calculator, ten_days):
        spec = FrequencySpec.on_dates(
            [SpecificDate(date(2025, 3, 8)), SpecificDate(date(2025, 3, 2)), SpecificDate(date(2025, 3, 8))]
        )
        schedule = calculator.compute_visits(ten_days, spec)
        assert schedule.dates == [date(2025, 3, 2), date(2025, 3, 8)]

    def test_result_is_deterministic(self, ten_days):
        spec = FrequencySpec.on_weekdays([Weekday.TUESDAY])
        assert compute_visits(ten_days, spec) == compute_visits(ten_days, spec)

    def test_no_visits_summary(self, calculator):
        window = DateWindow(date(2025, 3, 4), date(2025, 3, 5))
        spec = FrequencySpec.on_weekdays([Weekday.SUNDAY])
        schedule = calculator.compute_visits(window, spec)
        assert schedule.summary_text == "Every Sun: no visits in range"


class TestAddMonths:
    """Test month arithmetic helper."""

    def test_leap_year_february(self):
        assert add_months(date(2024, 1, 31), 1, 31) == date(2024, 2, 29)

    def test_year_rollover(self):
        assert add_months(date(2025, 11, 15), 3, 15) == date(2026, 2, 15)
