"""Company settings repository implementation."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dispatch_wizard.application.interfaces.repositories import (
    CompanySettingsRepositoryInterface,
)
from dispatch_wizard.config.logging import get_logger
from dispatch_wizard.infrastructure.database.models.company_settings import (
    CompanySettingsModel,
)

logger = get_logger(__name__)

# counter name -> (prefix column, next number column)
COUNTER_COLUMNS = {
    "delivery": ("delivery_prefix", "next_delivery_number"),
    "pickup": ("pickup_prefix", "next_pickup_number"),
    "service": ("service_prefix", "next_service_number"),
    "on-site-survey": ("survey_prefix", "next_survey_number"),
    "quote": ("quote_prefix", "next_quote_number"),
}


class CompanySettingsRepository(CompanySettingsRepositoryInterface):
    """Company settings repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _settings_row(self, for_update: bool = False) -> CompanySettingsModel:
        stmt = select(CompanySettingsModel).order_by(CompanySettingsModel.created_at).limit(1)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.db.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            logger.info("Creating default company settings row")
            model = CompanySettingsModel(
                next_delivery_number=1,
                next_pickup_number=1,
                next_service_number=1,
                next_survey_number=1,
                next_quote_number=1,
            )
            self.db.add(model)
            await self.db.flush()
        return model

    async def reserve_number(self, counter: str) -> int:
        """Reserve and return the next value of a numbering counter."""
        if counter not in COUNTER_COLUMNS:
            raise ValueError(f"Unknown numbering counter '{counter}'")
        _, number_column = COUNTER_COLUMNS[counter]

        model = await self._settings_row(for_update=True)
        number = getattr(model, number_column) or 1
        setattr(model, number_column, number + 1)
        await self.db.flush()
        return number

    async def get_prefix(self, counter: str) -> Optional[str]:
        if counter not in COUNTER_COLUMNS:
            raise ValueError(f"Unknown numbering counter '{counter}'")
        prefix_column, _ = COUNTER_COLUMNS[counter]
        model = await self._settings_row()
        return getattr(model, prefix_column)
