"""
Redis-based draft store for wizard document snapshots.
"""

import json
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

import redis.asyncio as redis

from dispatch_wizard.application.interfaces.repositories import DraftStoreInterface
from dispatch_wizard.config.logging import get_logger
from dispatch_wizard.config.settings import settings
from dispatch_wizard.domain.entities.draft import Draft
from dispatch_wizard.domain.exceptions.draft_error import DraftError

logger = get_logger(__name__)


class RedisDraftStore(DraftStoreInterface):
    """
    One JSON key per draft plus a namespaced index set of draft ids.

    Keys expire after ``DRAFT_TTL_SECONDS``; ids whose key has expired are
    pruned from the index when drafts are listed.
    """

    def __init__(
        self,
        redis_url: Optional[str] = None,
        namespace: Optional[str] = None,
        ttl_seconds: Optional[int] = None,
        client: Optional[redis.Redis] = None,
    ):
        self.redis_url = redis_url or settings.REDIS_URL
        self.namespace = namespace or settings.DRAFT_NAMESPACE
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else settings.DRAFT_TTL_SECONDS
        self._client = client

    @asynccontextmanager
    async def _redis(self) -> AsyncIterator[redis.Redis]:
        """Yield the shared client, or a fresh one for the current event loop."""
        if self._client is not None:
            yield self._client
            return
        client = redis.from_url(self.redis_url)
        try:
            yield client
        finally:
            await client.aclose()

    def _key(self, key: str) -> str:
        """Get namespaced Redis key."""
        return f"{self.namespace}:{key}"

    @property
    def _index_key(self) -> str:
        return self._key("index")

    async def save_draft(self, draft: Draft) -> str:
        """Store a draft and return its id."""
        try:
            async with self._redis() as client:
                await client.set(
                    self._key(f"draft:{draft.id}"),
                    json.dumps(draft.to_dict()),
                    ex=self.ttl_seconds or None,
                )
                await client.sadd(self._index_key, draft.id)
        except redis.RedisError as e:
            logger.error("Failed to save draft", draft_id=draft.id, error=str(e), exc_info=True)
            raise DraftError(f"Failed to save draft: {e}") from e

        logger.info("Draft stored", draft_id=draft.id, name=draft.name)
        return draft.id

    async def get_draft(self, draft_id: str) -> Optional[Draft]:
        try:
            async with self._redis() as client:
                data = await client.get(self._key(f"draft:{draft_id}"))
        except redis.RedisError as e:
            logger.error("Failed to load draft", draft_id=draft_id, error=str(e), exc_info=True)
            raise DraftError(f"Failed to load draft: {e}") from e

        if not data:
            return None
        return Draft.from_dict(json.loads(data))

    async def list_drafts(self) -> List[Draft]:
        """List drafts, most recently updated first."""
        try:
            async with self._redis() as client:
                raw_ids = await client.smembers(self._index_key)
                draft_ids = sorted(
                    raw.decode() if isinstance(raw, bytes) else raw for raw in raw_ids
                )
                drafts = []
                expired = []
                for draft_id in draft_ids:
                    data = await client.get(self._key(f"draft:{draft_id}"))
                    if data:
                        drafts.append(Draft.from_dict(json.loads(data)))
                    else:
                        expired.append(draft_id)
                if expired:
                    await client.srem(self._index_key, *expired)
        except redis.RedisError as e:
            logger.error("Failed to list drafts", error=str(e), exc_info=True)
            raise DraftError(f"Failed to list drafts: {e}") from e

        if expired:
            logger.debug("Pruned expired drafts from index", draft_ids=expired)
        return sorted(drafts, key=lambda draft: draft.updated_at, reverse=True)

    async def delete_draft(self, draft_id: str) -> bool:
        try:
            async with self._redis() as client:
                deleted = await client.delete(self._key(f"draft:{draft_id}"))
                await client.srem(self._index_key, draft_id)
        except redis.RedisError as e:
            logger.error("Failed to delete draft", draft_id=draft_id, error=str(e), exc_info=True)
            raise DraftError(f"Failed to delete draft: {e}") from e
        return bool(deleted)

    async def ping(self) -> bool:
        """Check the Redis connection."""
        async with self._redis() as client:
            return bool(await client.ping())
