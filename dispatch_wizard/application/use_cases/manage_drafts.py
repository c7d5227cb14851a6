"""Draft save / list / delete / resume use cases."""

from datetime import datetime, timezone
from typing import List, Optional

from dispatch_wizard.application.interfaces.repositories import DraftStoreInterface
from dispatch_wizard.application.services.service_pricing import ServicePricingService
from dispatch_wizard.application.services.wizard_state_machine import WizardStateMachine
from dispatch_wizard.config.logging import get_logger
from dispatch_wizard.domain.entities.draft import Draft
from dispatch_wizard.domain.exceptions.draft_error import DraftNotFoundError
from dispatch_wizard.domain.exceptions.validation_error import RequiredFieldError

logger = get_logger(__name__)


class ManageDraftsUseCase:
    """Named snapshots of wizard sessions for save-and-resume."""

    def __init__(
        self,
        draft_store: DraftStoreInterface,
        pricing: Optional[ServicePricingService] = None,
    ):
        self.draft_store = draft_store
        self.pricing = pricing

    async def save(
        self, machine: WizardStateMachine, name: str, include_step: bool = True
    ) -> Draft:
        """
        Save the session's document under ``name``.

        Saving again from a session that was resumed from (or already saved
        as) a draft overwrites that draft.
        """
        if not name or not name.strip():
            raise RequiredFieldError("name")

        session = machine.session
        existing = await self.draft_store.get_draft(session.draft_id) if session.draft_id else None
        draft = Draft(
            name=name.strip(),
            job_data=machine.document.to_dict(),
            wizard_mode=session.wizard_mode,
            current_step=session.current_step if include_step else None,
        )
        if existing is not None:
            draft.id = existing.id
            draft.created_at = existing.created_at
            draft.updated_at = datetime.now(timezone.utc)

        draft_id = await self.draft_store.save_draft(draft)
        session.draft_id = draft_id
        logger.info(
            "Draft saved",
            session_id=str(session.id),
            draft_id=draft_id,
            step=draft.current_step,
        )
        return draft

    async def list(self) -> List[Draft]:
        return await self.draft_store.list_drafts()

    async def delete(self, draft_id: str) -> None:
        """Delete a draft; raises DraftNotFoundError for unknown ids."""
        deleted = await self.draft_store.delete_draft(draft_id)
        if not deleted:
            raise DraftNotFoundError(draft_id)
        logger.info("Draft deleted", draft_id=draft_id)

    async def resume(self, draft_id: str) -> WizardStateMachine:
        """Hydrate a fresh session from a draft."""
        draft = await self.draft_store.get_draft(draft_id)
        if draft is None:
            raise DraftNotFoundError(draft_id)
        return WizardStateMachine.from_draft(draft, self.pricing)
