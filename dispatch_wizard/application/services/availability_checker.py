"""
Availability checker: read-only inventory and crew conflict detection.
"""

import asyncio
from typing import Optional

from dispatch_wizard.application.interfaces.queries import AvailabilityQueryInterface
from dispatch_wizard.application.interfaces.repositories import (
    DailyAssignmentRepositoryInterface,
)
from dispatch_wizard.config.logging import get_logger
from dispatch_wizard.domain.entities.job_document import InventoryLineRequest, JobDocument
from dispatch_wizard.domain.exceptions.availability_error import AvailabilityQueryError
from dispatch_wizard.domain.value_objects.availability_status import AvailabilityStatus
from dispatch_wizard.domain.value_objects.conflict_report import (
    ConflictReport,
    CrewAvailability,
    ItemAvailability,
)
from dispatch_wizard.domain.value_objects.date_window import DateWindow
from dispatch_wizard.infrastructure.monitoring.metrics import record_availability_check

logger = get_logger(__name__)


def _failure_reason(error: Exception) -> str:
    if isinstance(error, AvailabilityQueryError):
        return error.reason
    return str(error) or type(error).__name__


class AvailabilityChecker:
    """
    Checks requested inventory and crew against existing reservations.

    Every check runs independently: one failing query is reported as
    unverified without affecting the others, and a failure is never
    reported as "available".
    """

    def __init__(
        self,
        availability_query: AvailabilityQueryInterface,
        assignment_repo: DailyAssignmentRepositoryInterface,
    ):
        self.availability_query = availability_query
        self.assignment_repo = assignment_repo

    async def check(self, document: JobDocument) -> ConflictReport:
        """Build a conflict report for the document's current window."""
        window = document.reservation_window
        if window is None:
            return ConflictReport()

        item_checks = [self._check_item(item, window) for item in document.items]
        driver_check = self._check_crew(
            "driver", document.assignment.driver_id, window
        )
        vehicle_check = self._check_crew(
            "vehicle", document.assignment.vehicle_id, window
        )

        results = await asyncio.gather(*item_checks, driver_check, vehicle_check)
        items, driver, vehicle = results[:-2], results[-2], results[-1]

        report = ConflictReport(
            window=window,
            items=tuple(items),
            driver=driver,
            vehicle=vehicle,
        )
        logger.info(
            "Availability check completed",
            window_start=window.start.isoformat(),
            window_end=window.end.isoformat(),
            item_count=len(items),
            has_conflicts=report.has_conflicts,
            unverified=report.unverified_checks(),
        )
        return report

    async def _check_item(
        self, item: InventoryLineRequest, window: DateWindow
    ) -> ItemAvailability:
        try:
            if item.is_specific:
                result = await self._check_specific(item, window)
            else:
                result = await self._check_bulk(item, window)
        except Exception as e:
            logger.error(
                "Availability query failed",
                product_id=item.product_id,
                strategy=item.strategy.value,
                error=str(e),
                exc_info=True,
            )
            result = ItemAvailability(
                product_id=item.product_id,
                strategy=item.strategy,
                requested_quantity=item.quantity,
                status=AvailabilityStatus.UNVERIFIED,
                error=_failure_reason(e),
            )
        record_availability_check(f"{item.strategy.value}_item", result.status.value)
        return result

    async def _check_bulk(
        self, item: InventoryLineRequest, window: DateWindow
    ) -> ItemAvailability:
        available = await self.availability_query.get_available_quantity(
            item.product_id, window, item.attributes
        )
        shortfall = max(item.quantity - available, 0)
        return ItemAvailability(
            product_id=item.product_id,
            strategy=item.strategy,
            requested_quantity=item.quantity,
            status=AvailabilityStatus.CONFLICT if shortfall else AvailabilityStatus.AVAILABLE,
            available_quantity=available,
            shortfall=shortfall,
        )

    async def _check_specific(
        self, item: InventoryLineRequest, window: DateWindow
    ) -> ItemAvailability:
        available_ids = await self.availability_query.get_available_unit_ids(
            item.product_id, window, item.attributes
        )
        requested_ids = item.specific_item_ids or []
        missing = tuple(unit_id for unit_id in requested_ids if unit_id not in available_ids)
        # Units not yet picked still need free stock.
        shortfall = max(item.quantity - len(available_ids), 0) if not requested_ids else 0
        conflict = bool(missing) or bool(shortfall)
        return ItemAvailability(
            product_id=item.product_id,
            strategy=item.strategy,
            requested_quantity=item.quantity,
            status=AvailabilityStatus.CONFLICT if conflict else AvailabilityStatus.AVAILABLE,
            available_quantity=len(available_ids),
            shortfall=shortfall,
            missing_unit_ids=missing,
        )

    async def _check_crew(
        self, resource: str, resource_id: Optional[str], window: DateWindow
    ) -> Optional[CrewAvailability]:
        """
        Same-day exclusivity: any assignment for the resource on the job's
        date is a conflict, whatever the time of day.
        """
        if not resource_id:
            return None
        try:
            if resource == "driver":
                records = await self.assignment_repo.find_for_date(
                    window.start, driver_id=resource_id
                )
                clashes = [record for record in records if record.driver_id == resource_id]
            else:
                records = await self.assignment_repo.find_for_date(
                    window.start, vehicle_id=resource_id
                )
                clashes = [record for record in records if record.vehicle_id == resource_id]
        except Exception as e:
            logger.error(
                "Crew availability query failed",
                resource=resource,
                resource_id=resource_id,
                error=str(e),
                exc_info=True,
            )
            record_availability_check(resource, AvailabilityStatus.UNVERIFIED.value)
            return CrewAvailability(
                resource=resource,
                resource_id=resource_id,
                status=AvailabilityStatus.UNVERIFIED,
                error=_failure_reason(e),
            )

        status = AvailabilityStatus.CONFLICT if clashes else AvailabilityStatus.AVAILABLE
        record_availability_check(resource, status.value)
        return CrewAvailability(
            resource=resource,
            resource_id=resource_id,
            status=status,
            conflicting_assignment_ids=tuple(sorted(str(record.id) for record in clashes)),
        )
