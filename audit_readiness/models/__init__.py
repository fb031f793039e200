"""Models — enums, scoring schemas, upstream record views."""

from audit_readiness.models.enums import (
    ElementNumber,
    EvidenceKind,
    Frequency,
    MatchStrategy,
    ScoreStatus,
    Severity,
    SourceKind,
)
from audit_readiness.models.schemas import (
    ElementScore,
    Evidence,
    Gap,
    OverallScore,
    Requirement,
)

__all__ = [
    "ElementNumber",
    "EvidenceKind",
    "Frequency",
    "MatchStrategy",
    "ScoreStatus",
    "Severity",
    "SourceKind",
    "ElementScore",
    "Evidence",
    "Gap",
    "OverallScore",
    "Requirement",
]
