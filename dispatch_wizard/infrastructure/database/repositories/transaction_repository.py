"""
Per-request unit of work used by the commit saga and quote delivery.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from dispatch_wizard.config.logging import get_logger

logger = get_logger(__name__)


class TransactionService:
    """Commits or discards the session's pending writes.

    The commit saga calls ``commit`` once per step, so ``commits`` counts how
    many steps reached the database during the request.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.commits = 0

    async def commit(self) -> None:
        await self.session.commit()
        self.commits += 1
        logger.debug("Step writes committed", commits=self.commits)

    async def rollback(self) -> None:
        """Discard uncommitted writes; a no-op outside a transaction."""
        if not self.session.in_transaction():
            return
        await self.session.rollback()
        logger.debug("Uncommitted step writes discarded", commits=self.commits)
