"""
Data schemas for the scoring pipeline.
Catalog entries are immutable; everything else is computed per invocation
and only the OverallScore is ever persisted (inside a CachedScore).
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, Field, model_validator

from .enums import (
    EvidenceKind,
    Frequency,
    MatchStrategy,
    MilestoneStatus,
    ScoreStatus,
    Severity,
    SourceKind,
    Timeframe,
)


# ── Catalog ──────────────────────────────────────────────


class MatcherCriteria(BaseModel):
    """How a locator recognises evidence for one requirement."""
    model_config = {"frozen": True}

    identifier_pattern: Optional[str] = None  # wildcard, e.g. "*-POL-001"
    type_codes: tuple[str, ...] = ()  # form codes or a document type code
    keywords: tuple[str, ...] = ()
    content_phrases: tuple[str, ...] = ()
    folder_code: Optional[str] = None
    tags: tuple[int, ...] = ()  # element numbers
    lookback_days: Optional[int] = None
    timeframe: Optional[Timeframe] = None

    @model_validator(mode="after")
    def _require_a_criterion(self) -> "MatcherCriteria":
        if not (
            self.identifier_pattern
            or self.type_codes
            or self.keywords
            or self.content_phrases
            or self.folder_code
            or self.tags
        ):
            raise ValueError("a requirement needs at least one matcher criterion")
        return self


class Requirement(BaseModel):
    """A single rubric line item within an element."""
    model_config = {"frozen": True}

    id: str
    description: str
    evidence_kind: EvidenceKind
    frequency: Frequency = Frequency.ANNUAL
    minimum_samples: int = Field(default=1, ge=0)
    point_value: int = Field(default=0, ge=0)
    matchers: MatcherCriteria
    recommended: bool = False  # 0-point line; unmet only yields an observation


class ElementDefinition(BaseModel):
    model_config = {"frozen": True}

    number: int
    name: str
    weight: float
    max_points: int
    lookback_days: int = 365


# ── Evidence ─────────────────────────────────────────────


class Evidence(BaseModel):
    """A normalized record believed to satisfy one or more requirements."""
    id: str  # source-qualified, e.g. "documents:doc-17"
    source: SourceKind
    date: Optional[datetime] = None
    description: str = ""
    reference: str = ""
    relevance: int = Field(default=0, ge=0, le=100)
    snippet: Optional[str] = None
    matched_by: MatchStrategy = MatchStrategy.TYPE
    satisfied_requirements: list[str] = []


class RequirementMatch(BaseModel):
    """What one locator call found for one requirement."""
    requirement_id: str
    evidence: list[Evidence] = []
    found: int = 0
    required: Optional[int] = None  # overrides Requirement.minimum_samples when set
    configured: bool = True
    failed: bool = False


# ── Scores & gaps ────────────────────────────────────────


class Gap(BaseModel):
    requirement_id: str
    element_number: int
    severity: Severity
    description: str
    action_required: str
    estimated_effort_hours: float = 0.0
    found_count: int = 0
    required_count: int = 0


class ElementScore(BaseModel):
    element_number: int
    element_name: str
    max_points: int = 0
    earned_points: int = 0
    percentage: float = 0.0
    status: ScoreStatus = ScoreStatus.CRITICAL
    requirements: list[Requirement] = []
    evidence: list[Evidence] = []
    gaps: list[Gap] = []


class Milestone(BaseModel):
    id: str
    name: str
    date: date
    threshold: float
    status: MilestoneStatus = MilestoneStatus.UPCOMING
    tasks: list[str] = []


class CriticalPathItem(BaseModel):
    id: str
    task: str
    duration_days: int = 2
    start_date: date
    end_date: date
    status: str = "pending"


class ReadinessProjection(BaseModel):
    total_hours: float = 0.0
    weeks_needed: int = 0
    projected_ready_date: date
    milestones: list[Milestone] = []
    critical_path: list[CriticalPathItem] = []


class OverallScore(BaseModel):
    overall_percentage: float = 0.0
    overall_status: ScoreStatus = ScoreStatus.CRITICAL
    element_scores: list[ElementScore] = []
    ready_for_audit: bool = False
    critical_gaps_count: int = 0
    major_gaps_count: int = 0
    minor_gaps_count: int = 0
    observation_gaps_count: int = 0
    total_gaps_count: int = 0
    estimated_hours_to_ready: int = 0
    projected_ready_date: date
    milestones: list[Milestone] = []
    critical_path: list[CriticalPathItem] = []
    last_calculated: datetime


class QuickScore(BaseModel):
    """Reduced projection consumed by the dashboard widget."""
    overall_percentage: float
    overall_status: ScoreStatus
    ready_for_audit: bool
    critical_gaps: int
    projected_ready_date: date


class CachedScore(BaseModel):
    organization_id: str
    score: OverallScore
    calculated_at: datetime
    expires_at: datetime
