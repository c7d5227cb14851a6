"""Job repository implementation."""

from collections import OrderedDict
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from dispatch_wizard.application.interfaces.repositories import JobRepositoryInterface
from dispatch_wizard.config.logging import get_logger
from dispatch_wizard.domain.entities.job import Job
from dispatch_wizard.domain.entities.job_document import InventoryLineRequest
from dispatch_wizard.domain.value_objects.inventory_strategy import InventoryStrategy
from dispatch_wizard.domain.value_objects.location_selection import (
    InlineAddress,
    LocationSelection,
)
from dispatch_wizard.infrastructure.database.models.job import (
    EquipmentAssignmentModel,
    JobModel,
)

logger = get_logger(__name__)


class JobRepository(JobRepositoryInterface):
    """Job repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, job_id: UUID) -> Optional[Job]:
        """Get job by ID."""
        stmt = (
            select(JobModel)
            .options(selectinload(JobModel.equipment_assignments))
            .where(JobModel.id == job_id)
        )
        result = await self.db.execute(stmt)
        model = result.scalar_one_or_none()

        return self._model_to_entity(model, model.equipment_assignments) if model else None

    async def find_by_parent(self, parent_job_id: UUID) -> List[Job]:
        """Get the pickup jobs derived from a job."""
        stmt = (
            select(JobModel)
            .options(selectinload(JobModel.equipment_assignments))
            .where(JobModel.parent_job_id == parent_job_id)
            .order_by(JobModel.scheduled_date)
        )
        result = await self.db.execute(stmt)
        return [
            self._model_to_entity(model, model.equipment_assignments)
            for model in result.scalars().all()
        ]

    async def create(self, job: Job) -> Job:
        """Create a job and one equipment assignment per bulk line or specific unit."""
        location = job.location
        job_model = JobModel(
            id=job.id,
            job_number=job.job_number,
            job_type=job.job_type.value,
            status=job.status,
            customer_id=job.customer_id,
            contact_id=job.contact_id,
            scheduled_date=job.scheduled_date,
            scheduled_time=job.scheduled_time,
            timezone=job.timezone,
            return_date=job.return_date,
            driver_id=job.driver_id,
            vehicle_id=job.vehicle_id,
            service_location_id=location.saved_location_id if location else None,
            location_address=location.new_address.to_dict()
            if location and location.new_address
            else None,
            notes=job.notes,
            special_instructions=job.special_instructions,
            is_priority=job.is_priority,
            is_service_job=job.is_service_job,
            total_price=job.total_price,
            parent_job_id=job.parent_job_id,
            created_at=job.created_at,
            updated_at=job.updated_at,
        )
        self.db.add(job_model)

        assignments = self._equipment_rows(job)
        self.db.add_all(assignments)

        # Use flush instead of commit; the caller decides when to commit
        await self.db.flush()

        logger.debug(
            "Job persisted",
            job_id=str(job.id),
            job_number=job.job_number,
            equipment_rows=len(assignments),
        )
        return self._model_to_entity(job_model, assignments)

    @staticmethod
    def _equipment_rows(job: Job) -> List[EquipmentAssignmentModel]:
        window = job.reservation_window
        rows = []
        for item in job.items:
            if item.is_specific and item.specific_item_ids:
                for unit_id in item.specific_item_ids:
                    rows.append(
                        EquipmentAssignmentModel(
                            job_id=job.id,
                            product_id=item.product_id,
                            product_item_id=unit_id,
                            quantity=1,
                            strategy=InventoryStrategy.SPECIFIC.value,
                            assigned_date=window.start,
                            return_date=window.end,
                            attributes=item.attributes,
                        )
                    )
            else:
                rows.append(
                    EquipmentAssignmentModel(
                        job_id=job.id,
                        product_id=item.product_id,
                        quantity=item.quantity,
                        strategy=InventoryStrategy.BULK.value,
                        assigned_date=window.start,
                        return_date=window.end,
                        attributes=item.attributes,
                    )
                )
        return rows

    def _model_to_entity(
        self, model: JobModel, assignments: List[EquipmentAssignmentModel]
    ) -> Job:
        """Convert database model to domain entity."""
        location = None
        if model.service_location_id:
            location = LocationSelection.saved(model.service_location_id)
        elif model.location_address:
            location = LocationSelection.inline(InlineAddress.from_dict(model.location_address))

        return Job(
            id=model.id,
            job_number=model.job_number,
            customer_id=model.customer_id,
            contact_id=model.contact_id,
            job_type=model.job_type,
            scheduled_date=model.scheduled_date,
            scheduled_time=model.scheduled_time,
            timezone=model.timezone,
            return_date=model.return_date,
            status=model.status,
            driver_id=model.driver_id,
            vehicle_id=model.vehicle_id,
            location=location,
            items=self._items_from_rows(assignments),
            notes=model.notes or "",
            special_instructions=model.special_instructions or "",
            is_priority=model.is_priority,
            is_service_job=model.is_service_job,
            total_price=model.total_price,
            parent_job_id=model.parent_job_id,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def _items_from_rows(rows: List[EquipmentAssignmentModel]) -> List[InventoryLineRequest]:
        specific: "OrderedDict[str, List[str]]" = OrderedDict()
        items = []
        for row in rows:
            if row.strategy == InventoryStrategy.SPECIFIC.value and row.product_item_id:
                specific.setdefault(row.product_id, []).append(row.product_item_id)
            else:
                items.append(
                    InventoryLineRequest(
                        product_id=row.product_id,
                        quantity=row.quantity,
                        attributes=row.attributes,
                    )
                )
        for product_id, unit_ids in specific.items():
            items.append(
                InventoryLineRequest(
                    product_id=product_id,
                    quantity=len(unit_ids),
                    strategy=InventoryStrategy.SPECIFIC,
                    specific_item_ids=unit_ids,
                )
            )
        return items
