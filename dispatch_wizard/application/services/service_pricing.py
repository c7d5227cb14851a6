"""
Service pricing: keeps a selected service's schedule and cost current.
"""

from typing import Optional

from dispatch_wizard.application.services.recurrence_calculator import (
    RecurrenceCalculator,
)
from dispatch_wizard.config.logging import get_logger
from dispatch_wizard.domain.entities.service_item import ServiceItem
from dispatch_wizard.domain.value_objects.date_window import DateWindow
from dispatch_wizard.domain.value_objects.visit import VisitSchedule

logger = get_logger(__name__)


class ServicePricingService:
    """Recalculates derived service fields after any schedule or price change."""

    def __init__(self, calculator: Optional[RecurrenceCalculator] = None):
        self.calculator = calculator or RecurrenceCalculator()

    def recalculate(self, service: ServiceItem, window: Optional[DateWindow]) -> ServiceItem:
        """Expand the service's frequency over ``window`` and reprice it."""
        if window is None:
            service.apply_schedule(VisitSchedule(summary_text="Set a date to schedule visits"))
            return service

        schedule = self.calculator.compute_visits(
            window,
            service.frequency,
            dropoff=service.include_dropoff_service,
            pickup=service.include_pickup_service,
            per_visit_cost=service.base_rate,
        )
        service.apply_schedule(schedule)
        service.summary_text = self.calculator.summarize(
            service.frequency, service.visit_count, service.calculated_cost
        )

        logger.debug(
            "Recalculated service schedule",
            service_id=service.id,
            visit_count=service.visit_count,
            computed_cost=str(service.computed_cost),
            calculated_cost=str(service.calculated_cost),
        )
        return service
