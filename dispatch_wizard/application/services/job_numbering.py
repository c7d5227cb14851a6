"""
Job and quote number allocation.
"""

from dispatch_wizard.application.interfaces.repositories import (
    CompanySettingsRepositoryInterface,
)
from dispatch_wizard.config.logging import get_logger
from dispatch_wizard.config.settings import settings
from dispatch_wizard.domain.value_objects.job_type import JobType

logger = get_logger(__name__)

DEFAULT_PREFIXES = {
    JobType.DELIVERY: settings.DELIVERY_PREFIX,
    JobType.PICKUP: settings.PICKUP_PREFIX,
    JobType.SERVICE: settings.SERVICE_PREFIX,
    JobType.ON_SITE_SURVEY: settings.SURVEY_PREFIX,
}

QUOTE_COUNTER = "quote"


class JobNumberingService:
    """Formats numbers reserved from the company's counters."""

    def __init__(self, company_settings_repo: CompanySettingsRepositoryInterface):
        self.company_settings_repo = company_settings_repo

    async def next_job_number(self, job_type: JobType) -> str:
        """Reserve the next ``<PREFIX>-<NNN>`` number for a job type."""
        counter = JobType(job_type).value
        prefix = await self.company_settings_repo.get_prefix(counter) or DEFAULT_PREFIXES[job_type]
        number = await self.company_settings_repo.reserve_number(counter)
        job_number = f"{prefix}-{number:03d}"
        logger.debug("Reserved job number", job_type=counter, job_number=job_number)
        return job_number

    async def next_quote_number(self) -> str:
        """Reserve the next ``<PREFIX><NNNN>`` quote number."""
        prefix = await self.company_settings_repo.get_prefix(QUOTE_COUNTER) or settings.QUOTE_PREFIX
        number = await self.company_settings_repo.reserve_number(QUOTE_COUNTER)
        return f"{prefix}{number:04d}"
