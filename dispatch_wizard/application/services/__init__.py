"""
Application services package.
"""

from .availability_checker import AvailabilityChecker
from .commit_saga import CommitSaga, SagaContext, SagaOutcome, SagaStep
from .job_numbering import JobNumberingService
from .quote_builder import QuoteBuilder
from .recurrence_calculator import RecurrenceCalculator, compute_visits
from .service_pricing import ServicePricingService
from .step_graph import step_for
from .wizard_state_machine import WizardStateMachine

__all__ = [
    "AvailabilityChecker",
    "CommitSaga",
    "SagaContext",
    "SagaOutcome",
    "SagaStep",
    "JobNumberingService",
    "QuoteBuilder",
    "RecurrenceCalculator",
    "compute_visits",
    "ServicePricingService",
    "step_for",
    "WizardStateMachine",
]
