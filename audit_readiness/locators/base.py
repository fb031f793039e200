"""
Base evidence source that every locator inherits.

Design:
  - `_match()` is the single abstract hook: a synchronous query of one
    backing store for one requirement. It runs in a worker thread.
  - `locate_all()` fans out over an element's requirements, bounded by a
    semaphore, each call under a timeout with a bounded retry.
  - Store failures never propagate: a failed strategy contributes zero
    evidence, and a requirement whose retries are exhausted maps to an
    empty, `failed=True` match. The score can only go down, never up.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Callable

from audit_readiness.config import Settings, get_settings
from audit_readiness.errors import StoreUnavailable
from audit_readiness.locators.merge import merge_evidence
from audit_readiness.models.enums import SourceKind
from audit_readiness.models.schemas import Evidence, Requirement, RequirementMatch

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def keyword_relevance(text: str, keywords: tuple[str, ...] | list[str]) -> int:
    """Confidence in [70, 100] scaled by the share of keywords present in ``text``."""
    if not keywords:
        return 70
    lowered = (text or "").lower()
    matched = sum(1 for kw in keywords if kw.lower() in lowered)
    return int(70 + (matched / len(keywords)) * 30 + 0.5)


def has_any_keyword(text: str, keywords: tuple[str, ...] | list[str]) -> bool:
    lowered = (text or "").lower()
    return any(kw.lower() in lowered for kw in keywords)


class EvidenceSource(ABC):
    """Abstract base for the form, document and maintenance locators."""

    source: SourceKind  # set in each subclass

    def __init__(self, settings: Settings | None = None, clock: Clock | None = None):
        self.settings = settings or get_settings()
        self.clock = clock or utc_now

    # ── Public entry points ──────────────────────────────

    async def locate(
        self, organization_id: str, element_number: int, requirement: Requirement
    ) -> RequirementMatch:
        """Locate evidence for one requirement, retrying transient failures."""
        match = await self._retrying(
            requirement.id,
            lambda m: m is None or m.failed,
            self._match, organization_id, element_number, requirement, self.clock(),
        )
        return match or RequirementMatch(requirement_id=requirement.id, failed=True)

    async def locate_all(
        self, organization_id: str, element_number: int, requirements: list[Requirement]
    ) -> dict[str, RequirementMatch]:
        """Fan out over requirements; result keyed by requirement id, catalog order."""
        gate = asyncio.Semaphore(max(1, self.settings.locator_concurrency))

        async def bounded(requirement: Requirement) -> RequirementMatch:
            async with gate:
                return await self.locate(organization_id, element_number, requirement)

        matches = await asyncio.gather(*(bounded(r) for r in requirements))
        return {m.requirement_id: m for m in matches}

    async def locate_tagged(self, organization_id: str, element_number: int) -> list[Evidence]:
        """Evidence explicitly tagged with the element; empty on any failure."""
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(self._tagged, organization_id, element_number, self.clock()),
                timeout=self.settings.locator_timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning(f"[{self.source.value}] tag search for element {element_number} timed out")
        except StoreUnavailable as exc:
            logger.warning(f"[{self.source.value}] tag search for element {element_number} failed: {exc}")
        return []

    async def locate_for_element(
        self, organization_id: str, element_number: int, requirements: list[Requirement]
    ) -> list[Evidence]:
        """Union of tag and per-requirement evidence, deduplicated, most relevant first."""
        tagged, matches = await asyncio.gather(
            self.locate_tagged(organization_id, element_number),
            self.locate_all(organization_id, element_number, requirements),
        )
        return merge_evidence([tagged, *(m.evidence for m in matches.values())])

    # ── Subclass hooks ───────────────────────────────────

    @abstractmethod
    def _match(
        self,
        organization_id: str,
        element_number: int,
        requirement: Requirement,
        now: datetime,
    ) -> RequirementMatch:
        """
        Query the backing store for one requirement. Runs in a worker thread.
        Use `_query()` around each strategy so one failing strategy does not
        discard the others.
        """
        ...

    def _tagged(self, organization_id: str, element_number: int, now: datetime) -> list[Evidence]:
        return []

    # ── Helpers ──────────────────────────────────────────

    async def _retrying(
        self,
        label: str,
        is_failed: Callable[[Any], bool],
        fn: Callable[..., Any],
        *args: Any,
    ) -> Any | None:
        """
        Run a blocking store call in a worker thread under the locator timeout,
        retrying with exponential backoff while ``is_failed(result)`` holds.
        Returns the last result, or None when every attempt raised or timed out.
        """
        attempts = 1 + max(0, self.settings.locator_max_retries)
        backoff = self.settings.locator_retry_backoff_seconds
        result: Any | None = None

        for attempt in range(1, attempts + 1):
            try:
                result = await asyncio.wait_for(
                    asyncio.to_thread(fn, *args),
                    timeout=self.settings.locator_timeout_seconds,
                )
            except asyncio.TimeoutError:
                logger.warning(
                    f"[{self.source.value}] {label} timed out after "
                    f"{self.settings.locator_timeout_seconds}s (attempt {attempt}/{attempts})"
                )
                result = None
            except StoreUnavailable as exc:
                logger.warning(
                    f"[{self.source.value}] {label} store unavailable "
                    f"(attempt {attempt}/{attempts}): {exc}"
                )
                result = None

            if not is_failed(result):
                return result
            if attempt < attempts:
                await asyncio.sleep(backoff * (2 ** (attempt - 1)))

        logger.warning(
            f"[{self.source.value}] {label} degraded after {attempts} attempt(s); "
            "failed strategies count as no evidence"
        )
        return result

    def _query(self, label: str, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any | None:
        """Run one store query; StoreUnavailable becomes None and is logged."""
        try:
            return fn(*args, **kwargs)
        except StoreUnavailable as exc:
            logger.warning(f"[{self.source.value}] {label} failed, counting as no evidence: {exc}")
            return None

    def _evidence_id(self, record_id: str) -> str:
        return f"{self.source.value}:{record_id}"
