"""
In-process registry of open wizard sessions.

Sessions are not persisted; a saved draft is the way to keep work
across processes.
"""

from typing import Dict, Optional

from dispatch_wizard.application.services.wizard_state_machine import WizardStateMachine
from dispatch_wizard.config.logging import get_logger
from dispatch_wizard.config.settings import settings
from dispatch_wizard.domain.entities.job_document import JobDocument
from dispatch_wizard.domain.entities.wizard_session import WizardSession
from dispatch_wizard.domain.value_objects.wizard_mode import WizardMode

logger = get_logger(__name__)


class SessionRegistry:
    """Holds one state machine per open wizard session."""

    def __init__(self):
        self._machines: Dict[str, WizardStateMachine] = {}

    def open(self, wizard_mode: WizardMode = WizardMode.JOB) -> WizardStateMachine:
        session = WizardSession(
            wizard_mode=WizardMode(wizard_mode),
            data=JobDocument(timezone=settings.DEFAULT_TIMEZONE),
        )
        machine = WizardStateMachine(session)
        return self.add(machine)

    def add(self, machine: WizardStateMachine) -> WizardStateMachine:
        session_id = str(machine.session.id)
        self._machines[session_id] = machine
        logger.info(
            "Wizard session opened",
            session_id=session_id,
            mode=machine.session.wizard_mode.value,
            open_sessions=len(self._machines),
        )
        return machine

    def get(self, session_id: str) -> Optional[WizardStateMachine]:
        return self._machines.get(session_id)

    def discard(self, session_id: str) -> bool:
        removed = self._machines.pop(session_id, None) is not None
        if removed:
            logger.info("Wizard session closed", session_id=session_id)
        return removed

    def __len__(self) -> int:
        return len(self._machines)
