"""
Draft API schemas.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from dispatch_wizard.domain.entities.draft import Draft
from dispatch_wizard.domain.value_objects.wizard_mode import WizardMode


class DraftSummary(BaseModel):
    id: str
    name: str
    wizard_mode: WizardMode
    current_step: Optional[int] = None
    customer_id: Optional[str] = None
    job_type: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, draft: Draft) -> "DraftSummary":
        return cls(
            id=draft.id,
            name=draft.name,
            wizard_mode=draft.wizard_mode,
            current_step=draft.current_step,
            customer_id=draft.job_data.get("customer_id"),
            job_type=draft.job_data.get("job_type"),
            created_at=draft.created_at,
            updated_at=draft.updated_at,
        )


class DraftListResponse(BaseModel):
    drafts: List[DraftSummary]
    total: int
