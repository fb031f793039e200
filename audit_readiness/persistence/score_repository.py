"""
Score Repository — the single cached-score slot per organization.
Writes are upserts keyed by organization id; there is no history.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from pydantic import ValidationError
from pymongo.errors import PyMongoError

from audit_readiness.config import Settings, get_settings
from audit_readiness.errors import CacheWriteFailure, StoreUnavailable
from audit_readiness.models.schemas import CachedScore
from audit_readiness.persistence.mongo_client import MongoClient

logger = logging.getLogger(__name__)


class ScoreRepository(ABC):

    @abstractmethod
    def load(self, organization_id: str) -> CachedScore | None:
        ...

    @abstractmethod
    def upsert(self, cached: CachedScore) -> None:
        """Replace the organization's slot. Raises CacheWriteFailure."""


class InMemoryScoreRepository(ScoreRepository):
    """
    Dict-backed slot store for mock mode and tests.
    Snapshots are deep-copied in and out so callers never share state.
    """

    def __init__(self):
        self._memory_store: dict[str, CachedScore] = {}

    def load(self, organization_id: str) -> CachedScore | None:
        cached = self._memory_store.get(organization_id)
        return cached.model_copy(deep=True) if cached else None

    def upsert(self, cached: CachedScore) -> None:
        self._memory_store[cached.organization_id] = cached.model_copy(deep=True)
        logger.debug(f"Cached score for {cached.organization_id} until {cached.expires_at}")

    def list_organizations(self) -> list[str]:
        return list(self._memory_store.keys())


class MongoScoreRepository(ScoreRepository):
    """Slot store backed by a MongoDB collection, one document per organization."""

    def __init__(self, client: MongoClient | None = None, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.client = client or MongoClient(self.settings)

    def _collection(self) -> Any:
        return self.client.collection(self.settings.score_cache_collection)

    def load(self, organization_id: str) -> CachedScore | None:
        try:
            doc = self._collection().find_one({"organization_id": organization_id}, {"_id": 0})
        except PyMongoError as exc:
            raise StoreUnavailable("score_cache", str(exc)) from exc
        if not doc:
            return None
        try:
            return CachedScore(**doc)
        except ValidationError as exc:
            raise StoreUnavailable("score_cache", f"unreadable slot for {organization_id}: {exc}") from exc

    def upsert(self, cached: CachedScore) -> None:
        payload = cached.model_dump(mode="json")
        payload["calculated_at"] = cached.calculated_at
        payload["expires_at"] = cached.expires_at
        try:
            self._collection().update_one(
                {"organization_id": cached.organization_id},
                {"$set": payload},
                upsert=True,
            )
        except PyMongoError as exc:
            raise CacheWriteFailure(cached.organization_id, str(exc)) from exc
        logger.info(f"Upserted cached score for {cached.organization_id}")
