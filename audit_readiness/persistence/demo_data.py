"""
Demo data — seeds the in-memory stores for mock mode.

The demo organization is deliberately mid-way to readiness: most management
and inspection forms are in place, several elements are thin, and one piece of
equipment is overdue for service.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from audit_readiness.models.records import (
    DocumentFolder,
    DocumentRecord,
    Equipment,
    FormSubmission,
    FormTemplate,
    MaintenanceAttachment,
    MaintenanceRecord,
    MaintenanceSchedule,
)
from audit_readiness.persistence.memory_stores import (
    InMemoryDocumentStore,
    InMemoryFormStore,
    InMemoryMaintenanceStore,
)

logger = logging.getLogger(__name__)

DEMO_ORGANIZATION = "demo-org"

# form code, template name, element tags, submissions, days between submissions
_FORMS = [
    ("safety_policy", "Health & Safety Policy Acknowledgment", [1], 1, 30),
    ("role_responsibility_matrix", "Roles & Responsibilities Matrix", [1], 1, 30),
    ("management_review", "Quarterly Management Review", [1, 14], 3, 90),
    ("hazard_assessment", "Field Level Hazard Assessment", [2], 24, 3),
    ("hazard_reporting", "Hazard Report", [2], 2, 20),
    ("toolbox_talk", "Toolbox Talk Sign-in", [8], 10, 7),
    ("workplace_inspection", "Weekly Site Inspection", [9], 9, 7),
    ("incident_report", "Incident Report", [10], 2, 60),
    ("emergency_drill", "Emergency Drill Record", [11], 1, 120),
]

# folder code, folder name
_FOLDERS = [
    ("POL", "Policies"),
    ("MIN", "Meeting Minutes"),
    ("PLN", "Plans"),
]

# control number, title, type, folder, extracted text, days old
_DOCUMENTS = [
    ("DEMO-POL-001", "Health and Safety Policy", "POL", "POL",
     "This policy sets out management commitment to health and safety. "
     "Responsibilities of every worker are listed. Signed by the President.", 200),
    ("DEMO-POL-002", "Organizational Chart and Responsibilities", "POL", "POL", None, 180),
    ("DEMO-MIN-001", "Q1 Management Review Minutes", "MIN", "MIN",
     "Management review of H&S objectives and incident statistics.", 250),
    ("DEMO-MIN-002", "Q2 Management Review Minutes", "MIN", "MIN",
     "Management review of H&S objectives and incident statistics.", 160),
    ("DEMO-PLN-001", "Emergency Response Plan", "PLN", "PLN",
     "Evacuation routes, muster points and emergency contacts for all sites.", 90),
]


def seed_demo_data(
    form_store: InMemoryFormStore,
    document_store: InMemoryDocumentStore,
    maintenance_store: InMemoryMaintenanceStore,
    now: datetime,
    organization_id: str = DEMO_ORGANIZATION,
) -> None:
    """Populate the three record stores relative to ``now``."""
    submissions = 0
    for index, (code, name, tags, count, spacing) in enumerate(_FORMS, start=1):
        template = form_store.add_template(FormTemplate(
            id=f"tpl-{index}",
            organization_id=organization_id,
            form_code=code,
            name=name,
            element_tags=tags,
        ))
        for n in range(count):
            created = now - timedelta(days=1 + n * spacing)
            form_store.add_submission(FormSubmission(
                id=f"sub-{index}-{n + 1}",
                organization_id=organization_id,
                template_id=template.id,
                form_number=f"{code.upper()}-{n + 1:04d}",
                status="approved" if n % 3 else "submitted",
                created_at=created,
                submitted_at=created,
            ))
            submissions += 1

    folder_ids = {}
    for code, name in _FOLDERS:
        folder = document_store.add_folder(DocumentFolder(
            id=f"fld-{code.lower()}",
            organization_id=organization_id,
            folder_code=code,
            name=name,
        ))
        folder_ids[code] = folder.id

    for index, (control, title, doc_type, folder, text, age) in enumerate(_DOCUMENTS, start=1):
        created = now - timedelta(days=age)
        document_store.add_document(DocumentRecord(
            id=f"doc-{index}",
            organization_id=organization_id,
            control_number=control,
            title=title,
            document_type_code=doc_type,
            status="approved",
            extracted_text=text,
            folder_id=folder_ids.get(folder),
            created_at=created,
            updated_at=created,
        ))

    _seed_equipment(maintenance_store, now, organization_id)
    logger.info(
        f"[MOCK] Seeded {organization_id}: {len(_FORMS)} templates, {submissions} submissions, "
        f"{len(_DOCUMENTS)} documents"
    )


def _seed_equipment(store: InMemoryMaintenanceStore, now: datetime, organization_id: str) -> None:
    today = now.date()

    store.add_equipment(Equipment(
        id="eq-1",
        organization_id=organization_id,
        equipment_code="EXC-01",
        name="Excavator 320",
        equipment_type="heavy_equipment",
    ))
    store.add_schedule(MaintenanceSchedule(
        id="sch-1",
        equipment_id="eq-1",
        schedule_name="Quarterly service",
        maintenance_type="preventive",
        frequency_unit="months",
        frequency_value=3,
        next_due_date=today + timedelta(days=30),
    ))
    for n in range(4):
        record = store.add_record(MaintenanceRecord(
            id=f"rec-1-{n + 1}",
            equipment_id="eq-1",
            maintenance_type="preventive",
            work_description="Quarterly service: fluids, filters, greasing",
            actual_date=today - timedelta(days=60 + n * 90),
            cost_total=850.0,
        ))
        store.add_attachment(MaintenanceAttachment(
            id=f"att-1-{n + 1}",
            equipment_id="eq-1",
            maintenance_record_id=record.id,
            attachment_type="invoice",
            uploaded_at=now - timedelta(days=60 + n * 90),
        ))

    store.add_equipment(Equipment(
        id="eq-2",
        organization_id=organization_id,
        equipment_code="LFT-02",
        name="Scissor Lift",
        equipment_type="aerial_lift",
        certifications_required=["annual_inspection"],
    ))
    store.add_schedule(MaintenanceSchedule(
        id="sch-2",
        equipment_id="eq-2",
        schedule_name="Annual inspection",
        maintenance_type="certification",
        frequency_unit="years",
        frequency_value=1,
        next_due_date=today - timedelta(days=10),
    ))
    store.add_record(MaintenanceRecord(
        id="rec-2-1",
        equipment_id="eq-2",
        maintenance_type="corrective",
        work_description="Replaced hydraulic hose",
        actual_date=today - timedelta(days=45),
        cost_total=320.0,
    ))
