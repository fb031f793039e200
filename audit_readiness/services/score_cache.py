"""
Score Cache — one cached OverallScore per organization, valid until the end
of the calendar day it was calculated on (in the clock's timezone).
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

from audit_readiness.errors import CacheWriteFailure, StoreUnavailable
from audit_readiness.locators.base import Clock, utc_now
from audit_readiness.models.schemas import CachedScore, OverallScore
from audit_readiness.persistence.score_repository import ScoreRepository
from audit_readiness.utils.dates import end_of_day

logger = logging.getLogger(__name__)


class ScoreCache:

    def __init__(self, store: ScoreRepository, clock: Clock | None = None):
        self.store = store
        self.clock = clock or utc_now

    def get(self, organization_id: str) -> OverallScore | None:
        """Cached score while still inside its calendar day, else None."""
        try:
            cached = self.store.load(organization_id)
        except StoreUnavailable as exc:
            logger.warning(f"Score cache read failed for {organization_id}, recalculating: {exc}")
            return None
        if cached is None:
            return None
        if self.clock() > cached.expires_at:
            logger.debug(f"Cached score for {organization_id} expired at {cached.expires_at}")
            return None
        return cached.score

    def save(self, organization_id: str, score: OverallScore) -> CachedScore:
        """Upsert the organization's slot. Raises CacheWriteFailure."""
        calculated_at = self.clock()
        cached = CachedScore(
            organization_id=organization_id,
            score=score,
            calculated_at=calculated_at,
            expires_at=end_of_day(calculated_at),
        )
        self.store.upsert(cached)
        return cached

    async def get_or_calculate(
        self,
        organization_id: str,
        calculate: Callable[[], Awaitable[OverallScore]],
        force_refresh: bool = False,
    ) -> OverallScore:
        if not force_refresh:
            cached = self.get(organization_id)
            if cached is not None:
                logger.debug(f"Score cache hit for {organization_id}")
                return cached

        score = await calculate()
        try:
            self.save(organization_id, score)
        except CacheWriteFailure as exc:
            logger.warning(f"Could not cache score for {organization_id}: {exc}")
        return score
