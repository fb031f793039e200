"""
Readiness Service — the single entry point used by the API and the CLI.

Scores all fourteen elements concurrently against one scoring profile,
aggregates them, projects a readiness date and keeps the result in the
per-organization score cache. Profiles:

  forms        form submissions (default; drives the cached OverallScore)
  documents    controlled documents in the registry
  maintenance  equipment inventory and service records (element 7)
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from zoneinfo import ZoneInfo

from audit_readiness.catalog.document_requirements import document_requirements_for
from audit_readiness.catalog.elements import ELEMENTS
from audit_readiness.catalog.maintenance_requirements import maintenance_requirements_for
from audit_readiness.catalog.requirements import requirements_for
from audit_readiness.config import Settings, get_settings
from audit_readiness.locators.base import Clock
from audit_readiness.locators.documents import DocumentLocator
from audit_readiness.locators.forms import FormSubmissionLocator
from audit_readiness.locators.maintenance import EquipmentRollup, MaintenanceLocator
from audit_readiness.models.enums import ExportFormat, ScoringProfileName
from audit_readiness.models.schemas import ElementScore, Evidence, OverallScore, QuickScore
from audit_readiness.persistence.demo_data import seed_demo_data
from audit_readiness.persistence.memory_stores import (
    InMemoryDocumentStore,
    InMemoryFormStore,
    InMemoryMaintenanceStore,
)
from audit_readiness.persistence.mongo_client import MongoClient
from audit_readiness.persistence.mongo_stores import (
    MongoDocumentStore,
    MongoFormStore,
    MongoMaintenanceStore,
)
from audit_readiness.persistence.score_repository import (
    InMemoryScoreRepository,
    MongoScoreRepository,
    ScoreRepository,
)
from audit_readiness.persistence.stores import DocumentStore, FormStore, MaintenanceStore
from audit_readiness.scoring.aggregate import AggregateScorer, all_gaps, weighted_percentage
from audit_readiness.scoring.effort import DocumentTypeEffort, EvidenceKindEffort, MaintenanceEffort
from audit_readiness.scoring.element_scorer import ElementScorer, ScoringProfile
from audit_readiness.scoring.readiness import ReadinessProjector
from audit_readiness.services.export_service import ExportService
from audit_readiness.services.score_cache import ScoreCache

logger = logging.getLogger(__name__)


@dataclass
class RecordStores:
    forms: FormStore
    documents: DocumentStore
    maintenance: MaintenanceStore
    scores: ScoreRepository


def build_stores(settings: Settings, clock: Clock) -> RecordStores:
    """In-memory stores seeded with demo data in mock mode, MongoDB otherwise."""
    if settings.mock_mode:
        forms = InMemoryFormStore()
        documents = InMemoryDocumentStore()
        maintenance = InMemoryMaintenanceStore()
        seed_demo_data(forms, documents, maintenance, clock())
        return RecordStores(forms, documents, maintenance, InMemoryScoreRepository())

    client = MongoClient(settings)
    client.connect()
    return RecordStores(
        forms=MongoFormStore(client, settings),
        documents=MongoDocumentStore(client, settings),
        maintenance=MongoMaintenanceStore(client, settings),
        scores=MongoScoreRepository(client, settings),
    )


class ReadinessService:

    def __init__(
        self,
        settings: Settings | None = None,
        stores: RecordStores | None = None,
        clock: Clock | None = None,
        profile: ScoringProfileName | str = ScoringProfileName.FORMS,
    ):
        self.settings = settings or get_settings()
        self.clock = clock or self._local_now
        self.stores = stores or build_stores(self.settings, self.clock)
        self.profile_name = ScoringProfileName(profile)
        self.profile = self._build_profile(self.profile_name)
        self.scorer = ElementScorer(self.profile, self.settings)
        self.aggregator = AggregateScorer(readiness_threshold=self.settings.readiness_threshold)
        self.projector = ReadinessProjector(self.settings.remediation_hours_per_week)
        self.exporter = ExportService()
        # only the default profile owns the organization's cache slot
        self.cache = (
            ScoreCache(self.stores.scores, self.clock)
            if self.profile_name == ScoringProfileName.FORMS else None
        )

    def _local_now(self) -> datetime:
        return datetime.now(ZoneInfo(self.settings.timezone))

    def _build_profile(self, name: ScoringProfileName) -> ScoringProfile:
        kwargs = {"settings": self.settings, "clock": self.clock}
        match name:
            case ScoringProfileName.DOCUMENTS:
                return ScoringProfile(
                    name=name.value,
                    catalog=document_requirements_for,
                    source=DocumentLocator(self.stores.documents, **kwargs),
                    effort=DocumentTypeEffort(),
                )
            case ScoringProfileName.MAINTENANCE:
                return ScoringProfile(
                    name=name.value,
                    catalog=maintenance_requirements_for,
                    source=MaintenanceLocator(self.stores.maintenance, **kwargs),
                    effort=MaintenanceEffort(),
                )
            case _:
                return ScoringProfile(
                    name=ScoringProfileName.FORMS.value,
                    catalog=requirements_for,
                    source=FormSubmissionLocator(self.stores.forms, **kwargs),
                    effort=EvidenceKindEffort(),
                )

    def for_profile(self, name: ScoringProfileName | str) -> "ReadinessService":
        """Same stores and clock, scored against another rubric."""
        if ScoringProfileName(name) == self.profile_name:
            return self
        return ReadinessService(self.settings, self.stores, self.clock, name)

    # ── Scoring ──────────────────────────────────────────

    async def score_element(self, organization_id: str, element_number: int) -> ElementScore:
        return await self.scorer.score(organization_id, element_number)

    async def calculate_overall(self, organization_id: str) -> OverallScore:
        logger.info(f"[{self.profile_name.value}] Scoring {organization_id} across {len(ELEMENTS)} elements")
        element_scores = list(await asyncio.gather(
            *(self.scorer.score(organization_id, number) for number in ELEMENTS)
        ))
        now = self.clock()
        projection = self.projector.project(
            all_gaps(element_scores),
            weighted_percentage(element_scores, self.aggregator.weights),
            now.date(),
        )
        return self.aggregator.aggregate(element_scores, projection, now)

    async def get_or_calculate(self, organization_id: str, force_refresh: bool = False) -> OverallScore:
        if self.cache is None:
            return await self.calculate_overall(organization_id)
        return await self.cache.get_or_calculate(
            organization_id,
            lambda: self.calculate_overall(organization_id),
            force_refresh=force_refresh,
        )

    async def get_score(
        self,
        organization_id: str,
        force_refresh: bool = False,
        element: int | None = None,
    ) -> OverallScore | ElementScore:
        if element is not None:
            return await self.score_element(organization_id, element)
        return await self.get_or_calculate(organization_id, force_refresh)

    async def quick_score(self, organization_id: str, force_refresh: bool = False) -> QuickScore:
        score = await self.get_or_calculate(organization_id, force_refresh)
        return QuickScore(
            overall_percentage=score.overall_percentage,
            overall_status=score.overall_status,
            ready_for_audit=score.ready_for_audit,
            critical_gaps=score.critical_gaps_count,
            projected_ready_date=score.projected_ready_date,
        )

    async def locate_element_evidence(self, organization_id: str, element_number: int) -> list[Evidence]:
        requirements = self.profile.catalog(element_number)
        return await self.profile.source.locate_for_element(organization_id, element_number, requirements)

    # ── Export ───────────────────────────────────────────

    async def equipment_rollups(self, organization_id: str) -> list[EquipmentRollup]:
        locator = MaintenanceLocator(self.stores.maintenance, settings=self.settings, clock=self.clock)
        rollups = await asyncio.to_thread(locator.rollups, organization_id, self.clock())
        return rollups or []

    async def export(self, organization_id: str, fmt: ExportFormat | str = ExportFormat.JSON) -> str:
        fmt = ExportFormat(fmt)
        if self.profile_name == ScoringProfileName.MAINTENANCE:
            rollups = await self.equipment_rollups(organization_id)
            if fmt == ExportFormat.CSV:
                return self.exporter.equipment_csv(rollups)
            return self.exporter.equipment_json(rollups, self.clock())

        score = await self.get_or_calculate(organization_id)
        return self.exporter.export(score, fmt)
