"""
API routes — thin HTTP layer that delegates to the ReadinessService.

Routes:
  GET /health                                            → API health check
  GET /api/readiness/catalog/{element_number}            → Rubric for one element
  GET /api/readiness/{org_id}                            → Overall (or one element's) score
  GET /api/readiness/{org_id}/quick                      → Dashboard summary
  GET /api/readiness/{org_id}/elements/{element_number}  → One element's score
  GET /api/readiness/{org_id}/elements/{element_number}/evidence → Located evidence
  GET /api/readiness/{org_id}/export?format=json|csv     → Audit package export
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from functools import lru_cache
from typing import Union

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse, Response
from pydantic import BaseModel

from audit_readiness.catalog.elements import element_definition, element_name, max_points_for
from audit_readiness.catalog.document_requirements import document_requirements_for
from audit_readiness.catalog.maintenance_requirements import maintenance_requirements_for
from audit_readiness.catalog.requirements import requirements_for
from audit_readiness.config import get_settings
from audit_readiness.models.enums import ExportFormat, ScoringProfileName
from audit_readiness.models.schemas import ElementScore, Evidence, OverallScore, QuickScore, Requirement
from audit_readiness.services.readiness_service import ReadinessService

logger = logging.getLogger(__name__)

# ── Routers ──────────────────────────────────────────────
health_router = APIRouter()
readiness_router = APIRouter()


# ── Response schemas ─────────────────────────────────────
class CatalogResponse(BaseModel):
    element_number: int
    element_name: str
    weight: float = 1.0
    max_points: int = 0
    requirements: list[Requirement] = []


class EvidenceResponse(BaseModel):
    organization_id: str
    element_number: int
    profile: str
    evidence: list[Evidence] = []


# ── Dependencies ─────────────────────────────────────────

@lru_cache()
def get_readiness_service() -> ReadinessService:
    """Process-wide service instance (stores and cache live as long as the app)."""
    return ReadinessService(get_settings())


# ── Health ───────────────────────────────────────────────

@health_router.get("/health")
async def health_check():
    settings = get_settings()
    return {
        "status": "ok",
        "mock_mode": settings.mock_mode,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# ── Catalog ──────────────────────────────────────────────

_CATALOGS = {
    ScoringProfileName.FORMS: requirements_for,
    ScoringProfileName.DOCUMENTS: document_requirements_for,
    ScoringProfileName.MAINTENANCE: maintenance_requirements_for,
}


@readiness_router.get("/catalog/{element_number}", response_model=CatalogResponse)
async def get_catalog(element_number: int, profile: ScoringProfileName = ScoringProfileName.FORMS):
    definition = element_definition(element_number)
    return CatalogResponse(
        element_number=element_number,
        element_name=element_name(element_number),
        weight=definition.weight if definition else 1.0,
        max_points=max_points_for(element_number),
        requirements=_CATALOGS[profile](element_number),
    )


# ── Scores ───────────────────────────────────────────────

@readiness_router.get("/{org_id}", response_model=Union[OverallScore, ElementScore])
async def get_readiness(
    org_id: str,
    force_refresh: bool = False,
    element: int | None = None,
    profile: ScoringProfileName = ScoringProfileName.FORMS,
    service: ReadinessService = Depends(get_readiness_service),
):
    logger.info(f"Readiness requested for {org_id} (profile={profile.value}, element={element})")
    return await service.for_profile(profile).get_score(org_id, force_refresh, element)


@readiness_router.get("/{org_id}/quick", response_model=QuickScore)
async def get_quick_score(
    org_id: str,
    force_refresh: bool = False,
    service: ReadinessService = Depends(get_readiness_service),
):
    return await service.quick_score(org_id, force_refresh)


@readiness_router.get("/{org_id}/elements/{element_number}", response_model=ElementScore)
async def get_element_score(
    org_id: str,
    element_number: int,
    profile: ScoringProfileName = ScoringProfileName.FORMS,
    service: ReadinessService = Depends(get_readiness_service),
):
    return await service.for_profile(profile).score_element(org_id, element_number)


@readiness_router.get("/{org_id}/elements/{element_number}/evidence", response_model=EvidenceResponse)
async def get_element_evidence(
    org_id: str,
    element_number: int,
    profile: ScoringProfileName = ScoringProfileName.FORMS,
    service: ReadinessService = Depends(get_readiness_service),
):
    evidence = await service.for_profile(profile).locate_element_evidence(org_id, element_number)
    return EvidenceResponse(
        organization_id=org_id,
        element_number=element_number,
        profile=profile.value,
        evidence=evidence,
    )


# ── Export ───────────────────────────────────────────────

@readiness_router.get("/{org_id}/export")
async def export_readiness(
    org_id: str,
    fmt: ExportFormat = Query(ExportFormat.JSON, alias="format"),
    profile: ScoringProfileName = ScoringProfileName.FORMS,
    service: ReadinessService = Depends(get_readiness_service),
):
    body = await service.for_profile(profile).export(org_id, fmt)
    filename = f"cor-readiness-{org_id}-{profile.value}.{fmt.value}"
    headers = {"Content-Disposition": f'attachment; filename="{filename}"'}
    if fmt == ExportFormat.CSV:
        return PlainTextResponse(body, media_type="text/csv", headers=headers)
    return Response(body, media_type="application/json", headers=headers)
