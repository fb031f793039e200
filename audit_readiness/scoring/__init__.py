"""Scoring — element scorer, weighted aggregate, gaps, effort, readiness."""

from audit_readiness.scoring.aggregate import AggregateScorer, weighted_percentage
from audit_readiness.scoring.effort import (
    CONFIGURATION_EFFORT_HOURS,
    DocumentTypeEffort,
    EffortEstimator,
    EvidenceKindEffort,
    MaintenanceEffort,
)
from audit_readiness.scoring.element_scorer import ElementScorer, ScoringProfile, status_for
from audit_readiness.scoring.gaps import classify_shortfall, sort_gaps
from audit_readiness.scoring.readiness import ReadinessProjector

__all__ = [
    "AggregateScorer",
    "weighted_percentage",
    "CONFIGURATION_EFFORT_HOURS",
    "DocumentTypeEffort",
    "EffortEstimator",
    "EvidenceKindEffort",
    "MaintenanceEffort",
    "ElementScorer",
    "ScoringProfile",
    "status_for",
    "classify_shortfall",
    "sort_gaps",
    "ReadinessProjector",
]
