"""
Recurrence calculator expanding a service frequency into dated visits.
"""

import calendar
from datetime import date, timedelta
from decimal import Decimal
from typing import Dict, Iterable, List, Tuple, Union

from dispatch_wizard.config.logging import get_logger
from dispatch_wizard.domain.value_objects.date_window import DateWindow
from dispatch_wizard.domain.value_objects.frequency import (
    CustomFrequencyType,
    Frequency,
    FrequencySpec,
    Weekday,
)
from dispatch_wizard.domain.value_objects.pricing import to_money
from dispatch_wizard.domain.value_objects.visit import Visit, VisitSchedule

logger = get_logger(__name__)


def add_months(day: date, months: int, anchor_day: int) -> date:
    """Move ``day`` forward by whole months, clamping to the month's last day."""
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(anchor_day, last_day))


class RecurrenceCalculator:
    """Pure, synchronous expansion of service frequencies over a date window."""

    def compute_visits(
        self,
        window: DateWindow,
        frequency: FrequencySpec,
        dropoff: bool = False,
        pickup: bool = False,
        per_visit_cost: Union[Decimal, int, str] = 0,
    ) -> VisitSchedule:
        """
        Expand a frequency into an ordered, de-duplicated visit list.

        Args:
            window: Inclusive window the visits must fall in
            frequency: Recurrence rule
            dropoff: Add a visit pinned to the window start
            pickup: Add a visit pinned to the window end
            per_visit_cost: Price of one visit

        Returns:
            VisitSchedule with the uncapped computed total cost
        """
        per_visit = to_money(per_visit_cost)

        if window.is_empty:
            out_of_window = tuple(
                sorted({entry.date for entry in frequency.specific_dates})
            )
            return VisitSchedule(
                per_visit_cost=per_visit,
                summary_text="No visits scheduled",
                out_of_window_dates=out_of_window,
            )

        generated, out_of_window = self._expand(window, frequency)
        if dropoff:
            generated.append(Visit(date=window.start, kinds=("dropoff",)))
        if pickup:
            generated.append(Visit(date=window.end, kinds=("pickup",)))

        visits = self._collapse(generated)
        total_cost = to_money(per_visit * len(visits))

        return VisitSchedule(
            visits=visits,
            per_visit_cost=per_visit,
            total_cost=total_cost,
            summary_text=self.summarize(frequency, len(visits), total_cost),
            out_of_window_dates=out_of_window,
        )

    def _expand(
        self, window: DateWindow, frequency: FrequencySpec
    ) -> Tuple[List[Visit], Tuple[date, ...]]:
        custom_type = frequency.resolved_custom_type

        if frequency.frequency == Frequency.ONE_TIME:
            return [Visit(date=window.start)], ()
        if frequency.frequency == Frequency.DAILY:
            return self._every(window, 1), ()
        if frequency.frequency == Frequency.WEEKLY:
            return self._every(window, 7), ()
        if frequency.frequency == Frequency.MONTHLY:
            return self._monthly(window), ()

        if custom_type == CustomFrequencyType.DAYS_INTERVAL:
            interval = frequency.interval_days
            if interval < 1:
                logger.warning(
                    "Clamping service interval below one day",
                    interval_days=interval,
                )
                interval = 1
            return self._every(window, interval), ()

        if custom_type == CustomFrequencyType.DAYS_OF_WEEK:
            return self._on_weekdays(window, frequency.days_of_week), ()

        visits = []
        out_of_window = set()
        for entry in frequency.specific_dates:
            if window.contains(entry.date):
                visits.append(Visit(date=entry.date, time=entry.time, notes=entry.notes))
            else:
                out_of_window.add(entry.date)
        if out_of_window:
            logger.info(
                "Specific service dates fall outside the service window",
                window_start=window.start.isoformat(),
                window_end=window.end.isoformat(),
                out_of_window=[day.isoformat() for day in sorted(out_of_window)],
            )
        return visits, tuple(sorted(out_of_window))

    @staticmethod
    def _every(window: DateWindow, step_days: int) -> List[Visit]:
        visits = []
        current = window.start
        while current <= window.end:
            visits.append(Visit(date=current))
            current += timedelta(days=step_days)
        return visits

    @staticmethod
    def _monthly(window: DateWindow) -> List[Visit]:
        visits = []
        months = 0
        current = window.start
        while current <= window.end:
            visits.append(Visit(date=current))
            months += 1
            current = add_months(window.start, months, window.start.day)
        return visits

    @staticmethod
    def _on_weekdays(window: DateWindow, weekdays: Iterable[Weekday]) -> List[Visit]:
        selected = {day.index for day in weekdays}
        return [Visit(date=day) for day in window.days() if day.weekday() in selected]

    @staticmethod
    def _collapse(visits: List[Visit]) -> Tuple[Visit, ...]:
        by_date: Dict[date, Visit] = {}
        for visit in visits:
            existing = by_date.get(visit.date)
            by_date[visit.date] = existing.merge(visit) if existing else visit
        return tuple(by_date[day] for day in sorted(by_date))

    @staticmethod
    def summarize(frequency: FrequencySpec, visit_count: int, total_cost: Decimal) -> str:
        """Short description like ``Every Mon, Thu: 5 visits, $250.00``."""
        if visit_count == 0:
            return f"{frequency.describe()}: no visits in range"
        noun = "visit" if visit_count == 1 else "visits"
        return f"{frequency.describe()}: {visit_count} {noun}, ${total_cost:,.2f}"


_calculator = RecurrenceCalculator()


def compute_visits(
    window: DateWindow,
    frequency: FrequencySpec,
    dropoff: bool = False,
    pickup: bool = False,
    per_visit_cost: Union[Decimal, int, str] = 0,
) -> VisitSchedule:
    """Module-level shortcut for :meth:`RecurrenceCalculator.compute_visits`."""
    return _calculator.compute_visits(window, frequency, dropoff, pickup, per_visit_cost)
