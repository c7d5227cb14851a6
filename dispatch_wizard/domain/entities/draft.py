"""Draft domain entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import uuid4

from dispatch_wizard.domain.value_objects.wizard_mode import WizardMode


@dataclass
class Draft:
    """Named, timestamped snapshot of an in-progress job document."""

    name: str
    job_data: Dict[str, Any]
    wizard_mode: WizardMode = WizardMode.JOB
    current_step: Optional[int] = None
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate draft data."""
        if not self.name or not self.name.strip():
            raise ValueError("Draft name is required")
        self.wizard_mode = WizardMode(self.wizard_mode)
        if not self.created_at:
            self.created_at = datetime.now(timezone.utc)
        if not self.updated_at:
            self.updated_at = self.created_at

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "job_data": self.job_data,
            "wizard_mode": self.wizard_mode.value,
            "current_step": self.current_step,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Draft":
        """Build from dictionary."""
        return cls(
            id=data["id"],
            name=data["name"],
            job_data=data.get("job_data") or {},
            wizard_mode=WizardMode(data.get("wizard_mode", WizardMode.JOB.value)),
            current_step=data.get("current_step"),
            created_at=datetime.fromisoformat(data["created_at"]) if data.get("created_at") else None,
            updated_at=datetime.fromisoformat(data["updated_at"]) if data.get("updated_at") else None,
        )
