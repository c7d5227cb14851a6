"""Job service line item repository implementation."""

from datetime import date
from typing import List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dispatch_wizard.application.interfaces.repositories import (
    JobLineItemRepositoryInterface,
)
from dispatch_wizard.domain.entities.service_line_item import ServiceLineItem
from dispatch_wizard.infrastructure.database.models.service_item import JobServiceItemModel


class JobLineItemRepository(JobLineItemRepositoryInterface):
    """Job service line item repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, line_item: ServiceLineItem) -> ServiceLineItem:
        model = JobServiceItemModel(
            id=line_item.id,
            job_id=line_item.job_id,
            service_id=line_item.service_id,
            service_name=line_item.service_name,
            pricing_method=line_item.pricing_method,
            frequency_descriptor=line_item.frequency_descriptor,
            visit_dates=[day.isoformat() for day in line_item.visit_dates],
            visit_count=line_item.visit_count,
            unit_rate=line_item.unit_rate,
            computed_total=line_item.computed_total,
            total=line_item.total,
            created_at=line_item.created_at,
        )
        self.db.add(model)
        await self.db.flush()
        return line_item

    async def get_by_job_id(self, job_id: UUID) -> List[ServiceLineItem]:
        stmt = (
            select(JobServiceItemModel)
            .where(JobServiceItemModel.job_id == job_id)
            .order_by(JobServiceItemModel.created_at)
        )
        result = await self.db.execute(stmt)
        return [self._model_to_entity(model) for model in result.scalars().all()]

    def _model_to_entity(self, model: JobServiceItemModel) -> ServiceLineItem:
        return ServiceLineItem(
            id=model.id,
            job_id=model.job_id,
            service_id=model.service_id,
            service_name=model.service_name,
            pricing_method=model.pricing_method,
            frequency_descriptor=model.frequency_descriptor,
            visit_dates=[date.fromisoformat(day) for day in model.visit_dates],
            unit_rate=model.unit_rate,
            computed_total=model.computed_total,
            total=model.total,
            created_at=model.created_at,
        )
