"""
Document-registry catalog — the same 14 elements judged on controlled documents.

A document counts toward a requirement when it is active/approved, has the
requirement's type code, sits in the requirement's folder (when one is set),
has at least one title keyword (when any are set), and falls inside the
requirement's timeframe. Control-number patterns and full-text phrases widen
the search but never bypass that filter.
"""

from __future__ import annotations

from audit_readiness.catalog.elements import to_element
from audit_readiness.models.enums import (
    DocumentType,
    ElementNumber,
    EvidenceKind,
    Frequency,
    Timeframe,
)
from audit_readiness.models.schemas import MatcherCriteria, Requirement

LAST_12 = Timeframe.LAST_12_MONTHS


def _doc(
    element: ElementNumber,
    req_id: str,
    description: str,
    doc_type: DocumentType,
    points: int,
    *,
    keywords: tuple[str, ...] = (),
    pattern: str | None = None,
    folder: str | None = None,
    content: tuple[str, ...] = (),
    count: int = 1,
    timeframe: Timeframe | None = None,
    frequency: Frequency = Frequency.ANNUAL,
    recommended: bool = False,
) -> Requirement:
    return Requirement(
        id=req_id,
        description=description,
        evidence_kind=EvidenceKind.DOCUMENT,
        frequency=frequency,
        minimum_samples=count,
        point_value=0 if recommended else points,
        recommended=recommended,
        matchers=MatcherCriteria(
            identifier_pattern=pattern,
            type_codes=(doc_type.value,),
            keywords=keywords,
            content_phrases=content,
            folder_code=folder,
            tags=(int(element),),
            timeframe=timeframe,
        ),
    )


_E = ElementNumber.MANAGEMENT_SYSTEM
_MANAGEMENT_SYSTEM = (
    _doc(_E, "elem1_hs_policy", "Health & Safety Policy signed by top management",
         DocumentType.POLICY, 15, keywords=("health", "safety", "policy"),
         pattern="*-POL-001",
         content=("management commitment", "responsibilities", "signed")),
    _doc(_E, "elem1_org_chart", "Organizational chart with H&S responsibilities",
         DocumentType.POLICY, 10,
         keywords=("organizational", "chart", "structure", "responsibilities")),
    _doc(_E, "elem1_mgmt_review", "Quarterly management review meetings",
         DocumentType.MINUTES, 10, keywords=("management", "review", "h&s"),
         folder="MIN", count=4, timeframe=LAST_12, frequency=Frequency.QUARTERLY),
    _doc(_E, "elem1_committee_terms", "Joint H&S Committee terms of reference",
         DocumentType.POLICY, 5,
         keywords=("committee", "terms of reference", "safety committee")),
    _doc(_E, "elem1_hs_manual", "H&S program manual",
         DocumentType.MANUAL, 0, keywords=("manual", "program"), recommended=True),
)

_E = ElementNumber.HAZARD_IDENTIFICATION
_HAZARD_IDENTIFICATION = (
    _doc(_E, "elem2_hazard_procedure", "Hazard identification and assessment procedure",
         DocumentType.PROCEDURE, 15,
         keywords=("hazard", "identification", "assessment", "procedure"),
         content=("identify", "assess", "risk", "control")),
    _doc(_E, "elem2_jha_form", "Job Hazard Analysis (JHA) form template",
         DocumentType.FORM, 10, keywords=("job", "hazard", "analysis", "jha", "task"),
         folder="FRM"),
    _doc(_E, "elem2_risk_matrix", "Risk assessment matrix/scoring guide",
         DocumentType.FORM, 5, keywords=("risk", "matrix", "assessment", "scoring")),
    _doc(_E, "elem2_completed_jhas", "Completed JHAs for high-risk tasks",
         DocumentType.REPORT, 10, keywords=("jha", "hazard analysis", "assessment"),
         folder="RPT", count=10, frequency=Frequency.AS_NEEDED),
)

_E = ElementNumber.HAZARD_CONTROL
_HAZARD_CONTROL = (
    _doc(_E, "elem3_control_procedure", "Hazard control procedure with hierarchy of controls",
         DocumentType.PROCEDURE, 15, keywords=("hazard", "control", "hierarchy"),
         content=("elimination", "substitution", "engineering", "administrative", "PPE")),
    _doc(_E, "elem3_swps", "Safe Work Procedures for high-risk tasks",
         DocumentType.SAFE_WORK_PROCEDURE, 20, folder="SWP",
         content=("hazard", "control", "step"), count=15),
    _doc(_E, "elem3_permit_procedures", "Permit-to-work procedures (confined space, hot work, etc.)",
         DocumentType.PROCEDURE, 10,
         keywords=("permit", "work", "hot work", "confined space", "lockout"), count=3),
)

_E = ElementNumber.COMPETENCY_TRAINING
_COMPETENCY_TRAINING = (
    _doc(_E, "elem4_training_policy", "Training and competency policy",
         DocumentType.POLICY, 10, keywords=("training", "policy", "competency")),
    _doc(_E, "elem4_orientation", "New worker orientation program",
         DocumentType.PROCEDURE, 15, keywords=("orientation", "new worker", "induction"),
         folder="TRN"),
    _doc(_E, "elem4_training_matrix", "Training requirements matrix",
         DocumentType.FORM, 10, keywords=("training", "matrix", "requirements", "competency")),
    _doc(_E, "elem4_training_materials", "Training materials and presentations",
         DocumentType.TRAINING, 10, folder="TRN", count=5),
)

_E = ElementNumber.WORKPLACE_BEHAVIOR
_WORKPLACE_BEHAVIOR = (
    _doc(_E, "elem5_rules_policy", "Workplace safety rules and expectations",
         DocumentType.POLICY, 10, keywords=("safety", "rules", "expectations", "behavior")),
    _doc(_E, "elem5_discipline_procedure", "Progressive discipline procedure",
         DocumentType.PROCEDURE, 10, keywords=("discipline", "progressive", "enforcement")),
    _doc(_E, "elem5_positive_recognition", "Positive safety recognition program",
         DocumentType.PROCEDURE, 5, keywords=("recognition", "incentive", "positive")),
)

_E = ElementNumber.PPE
_PPE = (
    _doc(_E, "elem6_ppe_policy", "PPE policy covering all requirements",
         DocumentType.POLICY, 15, keywords=("PPE", "personal protective equipment"),
         content=("selection", "use", "maintenance", "training")),
    _doc(_E, "elem6_ppe_procedure", "PPE selection and assessment procedure",
         DocumentType.PROCEDURE, 10, keywords=("PPE", "selection", "assessment", "hazard")),
    _doc(_E, "elem6_ppe_form", "PPE issuance tracking form",
         DocumentType.FORM, 5, keywords=("PPE", "issuance", "tracking", "form"), folder="FRM"),
)

_E = ElementNumber.PREVENTATIVE_MAINTENANCE
_PREVENTATIVE_MAINTENANCE = (
    _doc(_E, "elem7_maintenance_procedure", "Preventive maintenance procedure",
         DocumentType.PROCEDURE, 15, keywords=("preventive", "maintenance", "equipment")),
    _doc(_E, "elem7_maintenance_schedule", "Equipment maintenance schedule template",
         DocumentType.FORM, 10, keywords=("maintenance", "schedule", "equipment")),
    _doc(_E, "elem7_inspection_form", "Equipment inspection checklists",
         DocumentType.FORM, 5, keywords=("equipment", "inspection", "checklist"), count=3),
)

_E = ElementNumber.TRAINING_COMMUNICATION
_TRAINING_COMMUNICATION = (
    _doc(_E, "elem8_communication_policy", "Safety communication policy",
         DocumentType.POLICY, 10, keywords=("communication", "safety", "information")),
    _doc(_E, "elem8_toolbox_talks", "Monthly toolbox talk records",
         DocumentType.TRAINING, 10, keywords=("toolbox", "talk", "safety", "meeting"),
         folder="TRN", count=12, timeframe=LAST_12, frequency=Frequency.MONTHLY),
    _doc(_E, "elem8_committee_minutes", "Monthly safety committee meeting minutes",
         DocumentType.MINUTES, 10, keywords=("committee", "minutes", "safety"),
         folder="MIN", count=12, timeframe=LAST_12, frequency=Frequency.MONTHLY),
)

_E = ElementNumber.WORKPLACE_INSPECTIONS
_WORKPLACE_INSPECTIONS = (
    _doc(_E, "elem9_inspection_procedure", "Workplace inspection procedure",
         DocumentType.PROCEDURE, 15, keywords=("inspection", "workplace", "procedure")),
    _doc(_E, "elem9_inspection_checklists", "Workplace inspection checklists",
         DocumentType.FORM, 10, keywords=("inspection", "checklist", "workplace"),
         folder="FRM", count=3),
    _doc(_E, "elem9_inspection_reports", "Monthly workplace inspection reports",
         DocumentType.REPORT, 10, keywords=("inspection", "report", "findings"),
         folder="RPT", count=12, timeframe=LAST_12, frequency=Frequency.MONTHLY),
)

_E = ElementNumber.INCIDENT_INVESTIGATION
_INCIDENT_INVESTIGATION = (
    _doc(_E, "elem10_investigation_procedure", "Incident investigation procedure",
         DocumentType.PROCEDURE, 15, keywords=("incident", "investigation", "procedure"),
         content=("root cause", "corrective action", "report")),
    _doc(_E, "elem10_investigation_form", "Incident investigation form template",
         DocumentType.FORM, 10, keywords=("incident", "investigation", "form", "report"),
         folder="FRM"),
    _doc(_E, "elem10_near_miss_form", "Near miss/hazard reporting form",
         DocumentType.FORM, 5, keywords=("near miss", "hazard", "reporting")),
)

_E = ElementNumber.EMERGENCY_PREPAREDNESS
_EMERGENCY_PREPAREDNESS = (
    _doc(_E, "elem11_erp", "Emergency Response Plan",
         DocumentType.PLAN, 20, keywords=("emergency", "response", "plan"), folder="EMR",
         content=("evacuation", "emergency", "contact", "assembly")),
    _doc(_E, "elem11_evacuation_procedure", "Evacuation procedure",
         DocumentType.PROCEDURE, 10, keywords=("evacuation", "fire", "emergency"),
         folder="EMR"),
    _doc(_E, "elem11_first_aid", "First aid procedure",
         DocumentType.PROCEDURE, 10, keywords=("first aid", "medical", "emergency"),
         folder="EMR"),
    _doc(_E, "elem11_drill_records", "Emergency drill records",
         DocumentType.REPORT, 5, keywords=("drill", "exercise", "evacuation"),
         count=2, timeframe=LAST_12),
    _doc(_E, "elem11_emergency_contacts", "Posted emergency contact list",
         DocumentType.FORM, 0, keywords=("emergency", "contact"), folder="EMR",
         recommended=True),
)

_E = ElementNumber.STATISTICS_RECORDS
_STATISTICS_RECORDS = (
    _doc(_E, "elem12_records_procedure", "Records management procedure",
         DocumentType.PROCEDURE, 10, keywords=("records", "documentation", "retention")),
    _doc(_E, "elem12_statistics_report", "Quarterly safety statistics reports",
         DocumentType.REPORT, 10, keywords=("statistics", "metrics", "performance", "kpi"),
         folder="RPT", count=4, timeframe=LAST_12, frequency=Frequency.QUARTERLY),
)

_E = ElementNumber.REGULATORY_AWARENESS
_REGULATORY_AWARENESS = (
    _doc(_E, "elem13_compliance_procedure", "Regulatory compliance procedure",
         DocumentType.PROCEDURE, 15, keywords=("compliance", "regulatory", "legal")),
    _doc(_E, "elem13_legislation_register", "Applicable legislation register",
         DocumentType.FORM, 10, keywords=("legislation", "register", "compliance", "legal")),
    _doc(_E, "elem13_certifications", "Required certifications and permits",
         DocumentType.CERTIFICATE, 5, folder="CRT"),
)

_E = ElementNumber.MANAGEMENT_REVIEW
_MANAGEMENT_REVIEW = (
    _doc(_E, "elem14_review_procedure", "Management review procedure",
         DocumentType.PROCEDURE, 10,
         keywords=("management", "review", "continuous improvement")),
    _doc(_E, "elem14_annual_review", "Annual H&S program review report",
         DocumentType.REPORT, 15, keywords=("annual", "review", "h&s", "performance"),
         folder="RPT", timeframe=LAST_12),
    _doc(_E, "elem14_improvement_plan", "Continuous improvement action plan",
         DocumentType.PLAN, 10, keywords=("improvement", "action", "plan")),
)

del _E


def document_requirements_for(element_number: int) -> list[Requirement]:
    """Ordered document requirements for one element ([] when undefined)."""
    match to_element(element_number):
        case ElementNumber.MANAGEMENT_SYSTEM:
            return list(_MANAGEMENT_SYSTEM)
        case ElementNumber.HAZARD_IDENTIFICATION:
            return list(_HAZARD_IDENTIFICATION)
        case ElementNumber.HAZARD_CONTROL:
            return list(_HAZARD_CONTROL)
        case ElementNumber.COMPETENCY_TRAINING:
            return list(_COMPETENCY_TRAINING)
        case ElementNumber.WORKPLACE_BEHAVIOR:
            return list(_WORKPLACE_BEHAVIOR)
        case ElementNumber.PPE:
            return list(_PPE)
        case ElementNumber.PREVENTATIVE_MAINTENANCE:
            return list(_PREVENTATIVE_MAINTENANCE)
        case ElementNumber.TRAINING_COMMUNICATION:
            return list(_TRAINING_COMMUNICATION)
        case ElementNumber.WORKPLACE_INSPECTIONS:
            return list(_WORKPLACE_INSPECTIONS)
        case ElementNumber.INCIDENT_INVESTIGATION:
            return list(_INCIDENT_INVESTIGATION)
        case ElementNumber.EMERGENCY_PREPAREDNESS:
            return list(_EMERGENCY_PREPAREDNESS)
        case ElementNumber.STATISTICS_RECORDS:
            return list(_STATISTICS_RECORDS)
        case ElementNumber.REGULATORY_AWARENESS:
            return list(_REGULATORY_AWARENESS)
        case ElementNumber.MANAGEMENT_REVIEW:
            return list(_MANAGEMENT_REVIEW)
        case _:
            return []
