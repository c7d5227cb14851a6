"""
Job type value object.
"""

from enum import Enum


class JobType(str, Enum):
    """Kind of work a job represents."""

    DELIVERY = "delivery"
    PICKUP = "pickup"
    SERVICE = "service"
    ON_SITE_SURVEY = "on-site-survey"

    def has_rental_window(self) -> bool:
        """Check if the job type carries a rental duration and return date."""
        return self == self.DELIVERY

    def is_dated_by_pickup(self) -> bool:
        """Check if the job's anchor date is its pickup date."""
        return self == self.PICKUP

    def supports_pickup_plan(self) -> bool:
        """Check if derived pickup jobs can be scheduled from this job."""
        return self == self.DELIVERY
