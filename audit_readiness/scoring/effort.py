"""
Remediation effort models.

Each scoring profile plugs in one estimator; all return hours for closing a
requirement's shortfall. Configuration gaps (nothing set up to collect the
evidence) cost a flat CONFIGURATION_EFFORT_HOURS regardless of profile.
"""

from __future__ import annotations

from typing import Protocol

from audit_readiness.catalog import maintenance_requirements as maintenance
from audit_readiness.models.enums import DocumentType, EvidenceKind
from audit_readiness.models.schemas import Requirement

CONFIGURATION_EFFORT_HOURS = 4.0


class EffortEstimator(Protocol):
    def estimate(self, requirement: Requirement, shortfall: int) -> float:
        ...


class EvidenceKindEffort:
    """Per-sample hours by evidence kind, floored at one sample's worth."""

    HOURS = {
        EvidenceKind.DOCUMENT: 4.0,
        EvidenceKind.FORM_SUBMISSION: 0.25,
        EvidenceKind.TRAINING: 2.0,
        EvidenceKind.INTERVIEW: 0.5,
        EvidenceKind.OBSERVATION: 0.5,
    }

    def estimate(self, requirement: Requirement, shortfall: int) -> float:
        base = self.HOURS.get(requirement.evidence_kind, 1.0)
        return max(base, shortfall * base)


class DocumentTypeEffort:
    """Authoring hours per missing document, by document type code."""

    HOURS = {
        DocumentType.POLICY.value: 8.0,
        DocumentType.PROCEDURE.value: 6.0,
        DocumentType.SAFE_WORK_PROCEDURE.value: 4.0,
        DocumentType.FORM.value: 2.0,
        DocumentType.TRAINING.value: 6.0,
        DocumentType.PLAN.value: 8.0,
        DocumentType.REPORT.value: 3.0,
        DocumentType.MINUTES.value: 1.0,
        DocumentType.CERTIFICATE.value: 2.0,
        DocumentType.MANUAL.value: 16.0,
    }
    DEFAULT_HOURS = 4.0

    def hours_for(self, type_code: str | None) -> float:
        return self.HOURS.get(type_code or "", self.DEFAULT_HOURS)

    def estimate(self, requirement: Requirement, shortfall: int) -> float:
        codes = requirement.matchers.type_codes
        return shortfall * self.hours_for(codes[0] if codes else None)


class MaintenanceEffort:
    """Per-unit hours keyed by maintenance requirement."""

    HOURS = {
        maintenance.SCHEDULES: 1.0,
        maintenance.PREVENTIVE: 2.5,
        maintenance.DOCUMENTATION: 0.5,
        maintenance.COMPLIANCE: 2.0,
        maintenance.CERTIFICATIONS: 8.0,
    }
    DEFAULT_HOURS = 1.0

    def estimate(self, requirement: Requirement, shortfall: int) -> float:
        base = self.HOURS.get(requirement.id, self.DEFAULT_HOURS)
        return max(base, shortfall * base)
