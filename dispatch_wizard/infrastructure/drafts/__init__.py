"""
Draft storage package.
"""

from .redis_draft_store import RedisDraftStore

__all__ = ["RedisDraftStore"]
