"""Daily crew assignment repository implementation."""

from datetime import date
from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from dispatch_wizard.application.interfaces.repositories import (
    DailyAssignmentRepositoryInterface,
)
from dispatch_wizard.domain.entities.daily_assignment import DailyAssignment
from dispatch_wizard.infrastructure.database.models.daily_assignment import (
    DailyAssignmentModel,
)


class DailyAssignmentRepository(DailyAssignmentRepositoryInterface):
    """Daily crew assignment repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_for_date(
        self,
        assignment_date: date,
        driver_id: Optional[str] = None,
        vehicle_id: Optional[str] = None,
    ) -> List[DailyAssignment]:
        """Find assignments on a date booking the driver or the vehicle."""
        crew_filters = []
        if driver_id:
            crew_filters.append(DailyAssignmentModel.driver_id == driver_id)
        if vehicle_id:
            crew_filters.append(DailyAssignmentModel.vehicle_id == vehicle_id)
        if not crew_filters:
            return []

        stmt = (
            select(DailyAssignmentModel)
            .where(DailyAssignmentModel.assignment_date == assignment_date)
            .where(or_(*crew_filters))
            .order_by(DailyAssignmentModel.created_at)
        )
        result = await self.db.execute(stmt)
        return [self._model_to_entity(model) for model in result.scalars().all()]

    async def create(self, assignment: DailyAssignment) -> DailyAssignment:
        model = DailyAssignmentModel(
            id=assignment.id,
            assignment_date=assignment.assignment_date,
            driver_id=assignment.driver_id,
            vehicle_id=assignment.vehicle_id,
            job_id=assignment.job_id,
            notes=assignment.notes,
            created_at=assignment.created_at,
        )
        self.db.add(model)
        await self.db.flush()
        return assignment

    def _model_to_entity(self, model: DailyAssignmentModel) -> DailyAssignment:
        return DailyAssignment(
            id=model.id,
            assignment_date=model.assignment_date,
            driver_id=model.driver_id,
            vehicle_id=model.vehicle_id,
            job_id=model.job_id,
            notes=model.notes or "",
            created_at=model.created_at,
        )
