"""
Ordered multi-entity commit expressed as a saga.

Each step is an ``(action, compensate)`` pair. Steps run strictly in order
and each is committed before the next starts, because later steps use ids
produced by earlier ones. Compensations are currently no-ops that report
"not undone", so a failure leaves earlier steps committed and the outcome
says so.
"""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional

from dispatch_wizard.config.logging import get_logger

logger = get_logger(__name__)


@dataclass
class SagaContext:
    """Values shared between steps of one commit."""

    values: Dict[str, Any] = field(default_factory=dict)
    committed_ids: Dict[str, List[str]] = field(default_factory=dict)
    pending_ids: Dict[str, List[str]] = field(default_factory=dict)

    def record(self, kind: str, entity_id: Any) -> None:
        """Remember an id created by the current step."""
        self.pending_ids.setdefault(kind, []).append(str(entity_id))

    def promote_pending(self) -> None:
        """Mark the current step's ids as committed."""
        for kind, ids in self.pending_ids.items():
            self.committed_ids.setdefault(kind, []).extend(ids)
        self.pending_ids = {}

    def discard_pending(self) -> None:
        self.pending_ids = {}


async def no_compensation(context: SagaContext) -> bool:
    """Placeholder compensation; nothing is undone."""
    return False


@dataclass
class SagaStep:
    name: str
    action: Callable[[SagaContext], Awaitable[Any]]
    compensate: Callable[[SagaContext], Awaitable[bool]] = no_compensation


@dataclass
class SagaOutcome:
    """What a saga run achieved."""

    completed_steps: List[str]
    committed_ids: Dict[str, List[str]]
    failed_step: Optional[str] = None
    error: Optional[str] = None
    rolled_back: bool = False

    @property
    def succeeded(self) -> bool:
        return self.failed_step is None


class CommitSaga:
    """Runs saga steps sequentially, committing after each one."""

    def __init__(
        self,
        commit: Callable[[], Awaitable[None]],
        rollback: Callable[[], Awaitable[None]],
    ):
        self.commit = commit
        self.rollback = rollback

    async def run(
        self, steps: List[SagaStep], context: Optional[SagaContext] = None
    ) -> SagaOutcome:
        context = context or SagaContext()
        completed: List[SagaStep] = []

        for step in steps:
            try:
                await step.action(context)
                await self.commit()
                context.promote_pending()
            except Exception as e:
                # Only the failing step's uncommitted work is discarded here.
                await self.rollback()
                context.discard_pending()
                logger.error(
                    "Commit step failed",
                    step=step.name,
                    completed_steps=[done.name for done in completed],
                    committed_ids=context.committed_ids,
                    error=str(e),
                    exc_info=True,
                )
                rolled_back = await self._compensate(completed, context)
                return SagaOutcome(
                    completed_steps=[done.name for done in completed],
                    committed_ids=context.committed_ids,
                    failed_step=step.name,
                    error=str(e) or type(e).__name__,
                    rolled_back=rolled_back,
                )
            completed.append(step)
            logger.debug("Commit step completed", step=step.name)

        return SagaOutcome(
            completed_steps=[done.name for done in completed],
            committed_ids=context.committed_ids,
        )

    async def _compensate(self, completed: List[SagaStep], context: SagaContext) -> bool:
        if not completed:
            return False
        undone = [await step.compensate(context) for step in reversed(completed)]
        rolled_back = all(undone)
        if not rolled_back:
            logger.warning(
                "Earlier commit steps were not rolled back",
                steps=[step.name for step in completed],
                committed_ids=context.committed_ids,
            )
        return rolled_back
