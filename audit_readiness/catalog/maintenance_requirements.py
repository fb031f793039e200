"""
Maintenance catalog — element 7 judged on the equipment/maintenance store.

Required counts scale with the active equipment inventory, so the locator
reports them alongside what it found instead of relying on minimum_samples.
"""

from __future__ import annotations

from audit_readiness.catalog.elements import to_element
from audit_readiness.models.enums import ElementNumber, EvidenceKind, Frequency
from audit_readiness.models.schemas import MatcherCriteria, Requirement

SCHEDULES = "elem7_schedules"
PREVENTIVE = "elem7_preventive"
DOCUMENTATION = "elem7_documentation"
COMPLIANCE = "elem7_compliance"
CERTIFICATIONS = "elem7_certifications"

PREVENTIVE_SERVICES_PER_UNIT = 4  # quarterly service over twelve months
RECEIPTS_PER_UNIT = 4

_ELEMENT = int(ElementNumber.PREVENTATIVE_MAINTENANCE)

_MAINTENANCE = (
    Requirement(
        id=SCHEDULES,
        description="All equipment has documented maintenance schedules",
        evidence_kind=EvidenceKind.DOCUMENT,
        frequency=Frequency.ANNUAL,
        minimum_samples=1,
        point_value=10,
        matchers=MatcherCriteria(type_codes=("maintenance_schedule",), tags=(_ELEMENT,)),
    ),
    Requirement(
        id=PREVENTIVE,
        description="Regular preventive maintenance is conducted as scheduled",
        evidence_kind=EvidenceKind.FORM_SUBMISSION,
        frequency=Frequency.QUARTERLY,
        minimum_samples=PREVENTIVE_SERVICES_PER_UNIT,
        point_value=10,
        matchers=MatcherCriteria(type_codes=("preventive",), tags=(_ELEMENT,), lookback_days=365),
    ),
    Requirement(
        id=DOCUMENTATION,
        description="Maintenance activities are documented with receipts/reports",
        evidence_kind=EvidenceKind.DOCUMENT,
        frequency=Frequency.AS_NEEDED,
        minimum_samples=RECEIPTS_PER_UNIT,
        point_value=10,
        matchers=MatcherCriteria(
            type_codes=("receipt", "invoice", "service_report"),
            tags=(_ELEMENT,),
            lookback_days=365,
        ),
    ),
    Requirement(
        id=COMPLIANCE,
        description="Maintenance is completed on time per schedules",
        evidence_kind=EvidenceKind.FORM_SUBMISSION,
        frequency=Frequency.MONTHLY,
        minimum_samples=1,
        point_value=10,
        matchers=MatcherCriteria(type_codes=("schedule_compliance",), tags=(_ELEMENT,)),
    ),
    Requirement(
        id=CERTIFICATIONS,
        description="Equipment certifications are current",
        evidence_kind=EvidenceKind.DOCUMENT,
        frequency=Frequency.ANNUAL,
        minimum_samples=1,
        point_value=5,
        matchers=MatcherCriteria(type_codes=("certification",), tags=(_ELEMENT,)),
    ),
)


def maintenance_requirements_for(element_number: int) -> list[Requirement]:
    match to_element(element_number):
        case ElementNumber.PREVENTATIVE_MAINTENANCE:
            return list(_MAINTENANCE)
        case _:
            return []
