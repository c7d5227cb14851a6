"""Wizard session domain entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Optional
from uuid import UUID, uuid4

from dispatch_wizard.domain.entities.job_document import JobDocument
from dispatch_wizard.domain.value_objects.conflict_report import ConflictReport
from dispatch_wizard.domain.value_objects.wizard_mode import WizardMode


@dataclass
class WizardSession:
    """Envelope around a job document while it is being edited."""

    data: JobDocument = field(default_factory=JobDocument)
    wizard_mode: WizardMode = WizardMode.JOB
    current_step: int = 1
    highest_step_reached: int = 1
    errors: Dict[str, str] = field(default_factory=dict)
    availability: Optional[ConflictReport] = None
    availability_generation: int = 0
    draft_id: Optional[str] = None
    id: UUID = field(default_factory=uuid4)
    created_at: Optional[datetime] = None

    def __post_init__(self):
        self.wizard_mode = WizardMode(self.wizard_mode)
        if not self.created_at:
            self.created_at = datetime.now(timezone.utc)

    @property
    def has_conflicts(self) -> bool:
        return self.availability is not None and self.availability.has_conflicts
