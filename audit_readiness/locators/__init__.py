"""Evidence locators — one per upstream record store."""

from audit_readiness.locators.base import EvidenceSource
from audit_readiness.locators.documents import DocumentLocator
from audit_readiness.locators.forms import FormSubmissionLocator
from audit_readiness.locators.maintenance import EquipmentRollup, MaintenanceLocator
from audit_readiness.locators.merge import TAG_MATCH_ID, merge_evidence

__all__ = [
    "EvidenceSource",
    "DocumentLocator",
    "FormSubmissionLocator",
    "EquipmentRollup",
    "MaintenanceLocator",
    "TAG_MATCH_ID",
    "merge_evidence",
]
