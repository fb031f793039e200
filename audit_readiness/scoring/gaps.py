"""
Gap construction — severity, wording, ordering.
"""

from __future__ import annotations

from audit_readiness.models.enums import DocumentType, EvidenceKind, Severity, SourceKind
from audit_readiness.models.schemas import Gap, Requirement
from audit_readiness.scoring.effort import CONFIGURATION_EFFORT_HOURS

SEVERITY_ORDER = {
    Severity.CRITICAL: 0,
    Severity.MAJOR: 1,
    Severity.MINOR: 2,
    Severity.OBSERVATION: 3,
}

CRITICAL_SHORTFALL = 0.75
MAJOR_SHORTFALL = 0.5

_DOCUMENT_TYPE_CODES = {t.value for t in DocumentType}

_UNCONFIGURED_NOUN = {
    SourceKind.FORMS: "forms",
    SourceKind.DOCUMENTS: "document folders",
    SourceKind.MAINTENANCE: "equipment",
}


def classify_shortfall(found: int, required: int) -> Severity:
    """Severity from the missing share: critical at 75%+, major at 50%+, else minor."""
    if required <= 0:
        return Severity.MINOR
    ratio = (required - found) / required
    if ratio >= CRITICAL_SHORTFALL:
        return Severity.CRITICAL
    if ratio >= MAJOR_SHORTFALL:
        return Severity.MAJOR
    return Severity.MINOR


def sort_gaps(gaps: list[Gap]) -> list[Gap]:
    return sorted(gaps, key=lambda g: SEVERITY_ORDER[g.severity])


def _noun(requirement: Requirement) -> str:
    if requirement.evidence_kind == EvidenceKind.DOCUMENT:
        return "documents"
    return "submissions"


def _document_type(requirement: Requirement) -> str | None:
    if requirement.evidence_kind != EvidenceKind.DOCUMENT:
        return None
    codes = [c for c in requirement.matchers.type_codes if c in _DOCUMENT_TYPE_CODES]
    return codes[0] if codes else None


def action_text(requirement: Requirement, found: int, required: int) -> str:
    shortfall = max(0, required - found)
    doc_type = _document_type(requirement)
    if doc_type is None:
        if found == 0:
            return f"Complete {required} {_noun(requirement)} for: {requirement.description}"
        return f"Complete {shortfall} more {_noun(requirement)} for: {requirement.description}"

    matchers = requirement.matchers
    parts = [f"Create {doc_type} document covering: {requirement.description}"]
    if matchers.content_phrases:
        parts.append(f"Include: {', '.join(matchers.content_phrases)}")
    if matchers.folder_code:
        parts.append(f"Store in: {matchers.folder_code} folder")
    parts.append(f"Need at least {required} document{'s' if required != 1 else ''}")
    return ". ".join(parts)


def shortfall_gap(
    requirement: Requirement,
    element_number: int,
    found: int,
    required: int,
    effort_hours: float,
) -> Gap:
    """Gap for a configured requirement with too little evidence."""
    desc = requirement.description.lower()
    if found == 0:
        severity = Severity.CRITICAL
        description = f"No {desc} found"
    else:
        severity = classify_shortfall(found, required)
        description = f"Only {found}/{required} {desc} found"
    return Gap(
        requirement_id=requirement.id,
        element_number=element_number,
        severity=severity,
        description=description,
        action_required=action_text(requirement, found, required),
        estimated_effort_hours=effort_hours,
        found_count=found,
        required_count=required,
    )


def configuration_gap(requirement: Requirement, element_number: int, source: SourceKind) -> Gap:
    noun = _UNCONFIGURED_NOUN.get(source, "records")
    codes = ", ".join(requirement.matchers.type_codes) or requirement.description
    return Gap(
        requirement_id=requirement.id,
        element_number=element_number,
        severity=Severity.CRITICAL,
        description=f"No {noun} configured for: {requirement.description}",
        action_required=f"Create or configure {noun} for: {codes}",
        estimated_effort_hours=CONFIGURATION_EFFORT_HOURS,
        required_count=requirement.minimum_samples,
    )


def observation_gap(requirement: Requirement, element_number: int, found: int, required: int) -> Gap:
    """Unmet recommended item; informational only."""
    return Gap(
        requirement_id=requirement.id,
        element_number=element_number,
        severity=Severity.OBSERVATION,
        description=f"Recommended: {requirement.description}",
        action_required=action_text(requirement, found, required),
        estimated_effort_hours=0.0,
        found_count=found,
        required_count=required,
    )
