"""
Form-evidence catalog — the default rubric.

Each requirement is satisfied by submitted/approved form submissions whose
template form code is one of the listed codes, inside the element's lookback
window. Lookup is a match over the closed element range; anything outside
1–14 yields an empty list.
"""

from __future__ import annotations

from audit_readiness.catalog.elements import lookback_days_for, to_element
from audit_readiness.models.enums import ElementNumber, EvidenceKind, Frequency
from audit_readiness.models.schemas import MatcherCriteria, Requirement

DOC = EvidenceKind.DOCUMENT
FORM = EvidenceKind.FORM_SUBMISSION
OBS = EvidenceKind.OBSERVATION


def _req(
    element: ElementNumber,
    req_id: str,
    description: str,
    kind: EvidenceKind,
    frequency: Frequency,
    samples: int,
    points: int,
    form_codes: tuple[str, ...],
) -> Requirement:
    return Requirement(
        id=req_id,
        description=description,
        evidence_kind=kind,
        frequency=frequency,
        minimum_samples=samples,
        point_value=points,
        matchers=MatcherCriteria(
            type_codes=form_codes,
            tags=(int(element),),
            lookback_days=lookback_days_for(element),
        ),
    )


# ── Element 1: Health & Safety Management System ────────

_E = ElementNumber.MANAGEMENT_SYSTEM
_MANAGEMENT_SYSTEM = (
    _req(_E, "elem1_policy", "Written H&S Policy signed by top management",
         DOC, Frequency.ANNUAL, 1, 15, ("safety_policy", "policy_acknowledgment")),
    _req(_E, "elem1_roles", "Roles & Responsibilities documented for all levels",
         DOC, Frequency.ANNUAL, 1, 10, ("role_responsibility_matrix",)),
    _req(_E, "elem1_objectives", "H&S objectives and targets established",
         DOC, Frequency.ANNUAL, 1, 10, ("annual_safety_plan", "safety_objectives")),
    _req(_E, "elem1_mgmt_review", "Management review meetings (quarterly)",
         FORM, Frequency.QUARTERLY, 4, 15,
         ("management_review", "safety_meeting_minutes", "annual_review")),
)

# ── Element 2: Hazard Identification & Assessment ───────

_E = ElementNumber.HAZARD_IDENTIFICATION
_HAZARD_IDENTIFICATION = (
    _req(_E, "elem2_daily_ha", "Daily hazard assessments for active jobsites",
         FORM, Frequency.DAILY, 20, 20,
         ("hazard_assessment", "jha_form", "job_hazard_analysis")),
    _req(_E, "elem2_reporting", "Hazard reporting system accessible to all workers",
         FORM, Frequency.AS_NEEDED, 5, 10,
         ("hazard_reporting", "hazard_report", "safety_concern")),
    _req(_E, "elem2_review", "Monthly review of hazard assessments",
         FORM, Frequency.MONTHLY, 3, 10,
         ("hazard_review", "ha_summary", "monthly_safety_review")),
    _req(_E, "elem2_controls", "Hazards documented with control measures",
         FORM, Frequency.AS_NEEDED, 10, 10,
         ("hazard_control", "risk_assessment", "hazard_assessment")),
)

# ── Element 3: Hazard Control ───────────────────────────

_E = ElementNumber.HAZARD_CONTROL
_HAZARD_CONTROL = (
    _req(_E, "elem3_hierarchy", "Hierarchy of controls applied to hazards",
         FORM, Frequency.AS_NEEDED, 10, 15,
         ("hazard_control", "control_implementation", "risk_mitigation")),
    _req(_E, "elem3_swp", "Safe work practices documented",
         DOC, Frequency.ANNUAL, 5, 15,
         ("swp_form", "safe_work_practice", "sop_acknowledgment")),
    _req(_E, "elem3_sjp", "Safe job procedures for critical tasks",
         DOC, Frequency.ANNUAL, 5, 10,
         ("sjp_form", "critical_task_analysis", "task_analysis")),
    _req(_E, "elem3_verification", "Control effectiveness verified",
         FORM, Frequency.MONTHLY, 3, 10,
         ("control_verification", "workplace_inspection", "safety_audit")),
)

# ── Element 4: Competency & Training ────────────────────

_E = ElementNumber.COMPETENCY_TRAINING
_COMPETENCY_TRAINING = (
    _req(_E, "elem4_orientation", "New worker orientation completed",
         FORM, Frequency.AS_NEEDED, 5, 15,
         ("orientation_checklist", "new_hire_orientation", "worker_orientation")),
    _req(_E, "elem4_competency", "Competency assessments for critical tasks",
         FORM, Frequency.ANNUAL, 5, 15,
         ("competency_assessment", "skills_verification", "training_record")),
    _req(_E, "elem4_matrix", "Training matrix maintained",
         DOC, Frequency.ANNUAL, 1, 10, ("training_matrix", "training_plan")),
    _req(_E, "elem4_records", "Training records for all workers",
         FORM, Frequency.AS_NEEDED, 10, 10,
         ("training_record", "training_attendance", "certification_record")),
)

# ── Element 5: Workplace Behavior ───────────────────────

_E = ElementNumber.WORKPLACE_BEHAVIOR
_WORKPLACE_BEHAVIOR = (
    _req(_E, "elem5_rules", "Company safety rules documented",
         DOC, Frequency.ANNUAL, 1, 15,
         ("safety_rules", "company_rules", "safety_handbook")),
    _req(_E, "elem5_communication", "Rules communicated to all workers",
         FORM, Frequency.ANNUAL, 5, 10,
         ("rule_acknowledgment", "safety_rules_sign_off", "orientation_checklist")),
    _req(_E, "elem5_enforcement", "Progressive discipline system documented",
         DOC, Frequency.ANNUAL, 1, 10,
         ("disciplinary_action", "progressive_discipline", "rule_violation_report")),
    _req(_E, "elem5_recognition", "Safety recognition program",
         FORM, Frequency.MONTHLY, 3, 10,
         ("safety_recognition", "worker_recognition", "safety_award")),
)

# ── Element 6: Personal Protective Equipment ────────────

_E = ElementNumber.PPE
_PPE = (
    _req(_E, "elem6_assessment", "PPE hazard assessment conducted",
         FORM, Frequency.ANNUAL, 1, 15,
         ("ppe_assessment", "ppe_hazard_assessment", "ppe_matrix")),
    _req(_E, "elem6_issuance", "PPE issuance documented",
         FORM, Frequency.AS_NEEDED, 10, 10,
         ("ppe_issuance", "ppe_sign_out", "equipment_issuance")),
    _req(_E, "elem6_training", "PPE training provided",
         FORM, Frequency.ANNUAL, 5, 10,
         ("ppe_training", "training_record", "ppe_orientation")),
    _req(_E, "elem6_inspection", "PPE inspection records",
         FORM, Frequency.MONTHLY, 3, 10,
         ("ppe_inspection", "equipment_inspection", "pre_use_inspection")),
)

# ── Element 7: Preventative Maintenance ─────────────────

_E = ElementNumber.PREVENTATIVE_MAINTENANCE
_PREVENTATIVE_MAINTENANCE = (
    _req(_E, "elem7_program", "Preventative maintenance program documented",
         DOC, Frequency.ANNUAL, 1, 15,
         ("maintenance_program", "pm_schedule", "maintenance_plan")),
    _req(_E, "elem7_schedule", "Maintenance schedule maintained",
         FORM, Frequency.MONTHLY, 3, 10,
         ("maintenance_log", "maintenance_schedule", "equipment_maintenance")),
    _req(_E, "elem7_inspection", "Equipment inspections documented",
         FORM, Frequency.WEEKLY, 12, 10,
         ("equipment_inspection", "pre_use_inspection", "vehicle_inspection")),
    _req(_E, "elem7_deficiency", "Deficiency correction records",
         FORM, Frequency.AS_NEEDED, 3, 10,
         ("deficiency_report", "equipment_repair", "maintenance_request")),
)

# ── Element 8: Training & Communication ─────────────────

_E = ElementNumber.TRAINING_COMMUNICATION
_TRAINING_COMMUNICATION = (
    _req(_E, "elem8_program", "Formal training program documented",
         DOC, Frequency.ANNUAL, 1, 15,
         ("training_program", "training_plan", "annual_training_schedule")),
    _req(_E, "elem8_toolbox", "Toolbox talks conducted regularly",
         FORM, Frequency.WEEKLY, 12, 15,
         ("toolbox_talk", "safety_talk", "tailgate_meeting")),
    _req(_E, "elem8_records", "Training records maintained",
         FORM, Frequency.AS_NEEDED, 10, 10,
         ("training_record", "training_attendance", "training_sign_in")),
    _req(_E, "elem8_evaluation", "Training effectiveness evaluated",
         FORM, Frequency.ANNUAL, 2, 10,
         ("training_evaluation", "competency_assessment", "training_feedback")),
)

# ── Element 9: Workplace Inspections ────────────────────

_E = ElementNumber.WORKPLACE_INSPECTIONS
_WORKPLACE_INSPECTIONS = (
    _req(_E, "elem9_schedule", "Inspection schedule maintained",
         DOC, Frequency.ANNUAL, 1, 10, ("inspection_schedule", "inspection_plan")),
    _req(_E, "elem9_workplace", "Regular workplace inspections conducted",
         FORM, Frequency.WEEKLY, 12, 20,
         ("workplace_inspection", "site_inspection", "safety_inspection")),
    _req(_E, "elem9_corrective", "Corrective actions tracked",
         FORM, Frequency.AS_NEEDED, 5, 10,
         ("corrective_action", "inspection_corrective_action", "action_item")),
    _req(_E, "elem9_participation", "Worker participation in inspections",
         FORM, Frequency.MONTHLY, 3, 10,
         ("workplace_inspection", "joint_inspection", "jhsc_inspection")),
)

# ── Element 10: Incident Investigation ──────────────────

_E = ElementNumber.INCIDENT_INVESTIGATION
_INCIDENT_INVESTIGATION = (
    _req(_E, "elem10_procedure", "Incident investigation procedure documented",
         DOC, Frequency.ANNUAL, 1, 10, ("investigation_procedure", "incident_policy")),
    _req(_E, "elem10_reporting", "Incident reporting system in place",
         FORM, Frequency.AS_NEEDED, 3, 15,
         ("incident_report", "near_miss_report", "accident_report")),
    _req(_E, "elem10_investigation", "Incidents investigated with root cause analysis",
         FORM, Frequency.AS_NEEDED, 2, 15,
         ("incident_investigation", "root_cause_analysis", "investigation_report")),
    _req(_E, "elem10_corrective", "Corrective actions implemented",
         FORM, Frequency.AS_NEEDED, 3, 10,
         ("corrective_action", "incident_followup", "action_closeout")),
)

# ── Element 11: Emergency Preparedness ──────────────────

_E = ElementNumber.EMERGENCY_PREPAREDNESS
_EMERGENCY_PREPAREDNESS = (
    _req(_E, "elem11_plan", "Written emergency response plan",
         DOC, Frequency.ANNUAL, 1, 15,
         ("emergency_plan", "emergency_response_plan", "erp")),
    _req(_E, "elem11_drills", "Emergency drills conducted",
         FORM, Frequency.ANNUAL, 2, 15,
         ("emergency_drill", "fire_drill_log", "evacuation_drill")),
    _req(_E, "elem11_training", "Emergency training provided",
         FORM, Frequency.ANNUAL, 5, 10,
         ("emergency_training", "first_aid_training", "fire_safety_training")),
    _req(_E, "elem11_equipment", "Emergency equipment inspected",
         FORM, Frequency.MONTHLY, 3, 10,
         ("fire_extinguisher_inspection", "first_aid_inspection", "emergency_equipment")),
)

# ── Element 12: Statistics & Records ────────────────────

_E = ElementNumber.STATISTICS_RECORDS
_STATISTICS_RECORDS = (
    _req(_E, "elem12_tracking", "Safety statistics tracked",
         FORM, Frequency.MONTHLY, 3, 15,
         ("safety_statistics", "monthly_stats", "kpi_report")),
    _req(_E, "elem12_injury_log", "Injury log maintained",
         FORM, Frequency.AS_NEEDED, 1, 10,
         ("injury_log", "first_aid_log", "wsib_form_7")),
    _req(_E, "elem12_trends", "Trend analysis conducted",
         FORM, Frequency.QUARTERLY, 2, 10,
         ("trend_analysis", "quarterly_review", "safety_metrics")),
    _req(_E, "elem12_records", "Records retention system",
         DOC, Frequency.ANNUAL, 1, 10, ("records_retention", "document_control")),
)

# ── Element 13: Regulatory Awareness ────────────────────

_E = ElementNumber.REGULATORY_AWARENESS
_REGULATORY_AWARENESS = (
    _req(_E, "elem13_awareness", "Regulatory requirements identified",
         DOC, Frequency.ANNUAL, 1, 15,
         ("compliance_checklist", "regulatory_register", "legal_requirements")),
    _req(_E, "elem13_access", "Legislation accessible to workers",
         OBS, Frequency.ANNUAL, 1, 10, ("legislation_access", "regulation_posting")),
    _req(_E, "elem13_updates", "Regulatory updates tracked",
         FORM, Frequency.QUARTERLY, 2, 10,
         ("regulatory_update_log", "legislation_review", "compliance_update")),
    _req(_E, "elem13_compliance", "Compliance verified",
         FORM, Frequency.ANNUAL, 1, 10,
         ("compliance_audit", "regulatory_inspection", "compliance_review")),
)

# ── Element 14: Management System Review ────────────────

_E = ElementNumber.MANAGEMENT_REVIEW
_MANAGEMENT_REVIEW = (
    _req(_E, "elem14_review", "Annual management system review",
         FORM, Frequency.ANNUAL, 1, 15,
         ("annual_review", "management_review", "system_review")),
    _req(_E, "elem14_meetings", "Regular safety meetings held",
         FORM, Frequency.MONTHLY, 6, 15,
         ("safety_meeting_minutes", "jhsc_meeting", "safety_committee")),
    _req(_E, "elem14_improvement", "Continuous improvement documented",
         FORM, Frequency.QUARTERLY, 2, 10,
         ("improvement_plan", "action_plan", "corrective_action")),
    _req(_E, "elem14_commitment", "Management commitment demonstrated",
         FORM, Frequency.ANNUAL, 2, 10,
         ("management_walkthrough", "leadership_tour", "visible_leadership")),
)

del _E


def requirements_for(element_number: int) -> list[Requirement]:
    """Ordered form-evidence requirements for one element ([] when undefined)."""
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


def all_requirements() -> dict[int, list[Requirement]]:
    return {int(n): requirements_for(n) for n in ElementNumber}
