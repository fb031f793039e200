"""
In-memory record stores — used in mock mode and by the test suite.
Setting ``available = False`` makes every query raise StoreUnavailable.
"""

from __future__ import annotations

from datetime import date, datetime

from audit_readiness.errors import StoreUnavailable
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
from audit_readiness.persistence.stores import (
    DocumentStore,
    FormStore,
    MaintenanceStore,
    wildcard_match,
)


class _Toggle:
    name = "memory"

    def __init__(self):
        self.available = True

    def _check(self) -> None:
        if not self.available:
            raise StoreUnavailable(self.name, "in-memory store disabled")


class InMemoryFormStore(_Toggle, FormStore):
    name = "forms"

    def __init__(self):
        super().__init__()
        self._templates: dict[str, FormTemplate] = {}
        self._submissions: list[FormSubmission] = []

    def add_template(self, template: FormTemplate) -> FormTemplate:
        self._templates[template.id] = template
        return template

    def add_submission(self, submission: FormSubmission) -> FormSubmission:
        self._submissions.append(submission)
        return submission

    def templates_by_codes(self, organization_id, form_codes):
        self._check()
        codes = set(form_codes)
        return [
            t for t in self._templates.values()
            if t.organization_id == organization_id and t.form_code in codes
        ]

    def templates_tagged(self, organization_id, element_number):
        self._check()
        return [
            t for t in self._templates.values()
            if t.organization_id == organization_id and element_number in t.element_tags
        ]

    def submissions(self, organization_id, template_ids, statuses, since):
        self._check()
        wanted = set(template_ids)
        rows = [
            s for s in self._submissions
            if s.organization_id == organization_id
            and s.template_id in wanted
            and s.status in statuses
            and s.created_at >= since
        ]
        return sorted(rows, key=lambda s: s.created_at, reverse=True)


class InMemoryDocumentStore(_Toggle, DocumentStore):
    name = "documents"

    def __init__(self):
        super().__init__()
        self._folders: dict[str, DocumentFolder] = {}
        self._documents: list[DocumentRecord] = []

    def add_folder(self, folder: DocumentFolder) -> DocumentFolder:
        self._folders[folder.id] = folder
        return folder

    def add_document(self, document: DocumentRecord) -> DocumentRecord:
        self._documents.append(document)
        return document

    def _active(self, organization_id: str, statuses: tuple[str, ...]) -> list[DocumentRecord]:
        return [
            d for d in self._documents
            if d.organization_id == organization_id and d.status in statuses
        ]

    def folders(self, organization_id):
        self._check()
        return [f for f in self._folders.values() if f.organization_id == organization_id]

    def by_control_number(self, organization_id, pattern, statuses):
        self._check()
        rows = [d for d in self._active(organization_id, statuses)
                if wildcard_match(pattern, d.control_number)]
        return sorted(rows, key=lambda d: d.control_number)

    def by_type(self, organization_id, type_code, statuses, since=None):
        self._check()
        rows = [
            d for d in self._active(organization_id, statuses)
            if d.document_type_code == type_code and (since is None or d.created_at >= since)
        ]
        return sorted(rows, key=lambda d: d.title)

    def in_folder(self, organization_id, folder_id, statuses, since=None):
        self._check()
        rows = [
            d for d in self._active(organization_id, statuses)
            if d.folder_id == folder_id and (since is None or d.created_at >= since)
        ]
        return sorted(rows, key=lambda d: d.title)

    def containing(self, organization_id, phrase, statuses, limit=50):
        self._check()
        needle = phrase.lower()
        rows = [
            d for d in self._active(organization_id, statuses)
            if needle in d.title.lower()
            or needle in d.description.lower()
            or needle in (d.extracted_text or "").lower()
        ]
        return rows[:limit]

    def tagged(self, organization_id, element_number, statuses):
        self._check()
        return [d for d in self._active(organization_id, statuses)
                if element_number in d.element_tags]


class InMemoryMaintenanceStore(_Toggle, MaintenanceStore):
    name = "maintenance"

    def __init__(self):
        super().__init__()
        self._equipment: dict[str, Equipment] = {}
        self._schedules: list[MaintenanceSchedule] = []
        self._records: list[MaintenanceRecord] = []
        self._attachments: list[MaintenanceAttachment] = []

    def add_equipment(self, equipment: Equipment) -> Equipment:
        self._equipment[equipment.id] = equipment
        return equipment

    def add_schedule(self, schedule: MaintenanceSchedule) -> MaintenanceSchedule:
        self._schedules.append(schedule)
        return schedule

    def add_record(self, record: MaintenanceRecord) -> MaintenanceRecord:
        self._records.append(record)
        return record

    def add_attachment(self, attachment: MaintenanceAttachment) -> MaintenanceAttachment:
        self._attachments.append(attachment)
        return attachment

    def equipment(self, organization_id, statuses):
        self._check()
        return [
            e for e in self._equipment.values()
            if e.organization_id == organization_id and e.status in statuses
        ]

    def schedules(self, equipment_id):
        self._check()
        return [s for s in self._schedules if s.equipment_id == equipment_id and s.is_active]

    def records(self, equipment_id, since: date):
        self._check()
        rows = [r for r in self._records
                if r.equipment_id == equipment_id and r.actual_date >= since]
        return sorted(rows, key=lambda r: r.actual_date, reverse=True)

    def attachments(self, equipment_id, record_ids, since: datetime):
        self._check()
        wanted = set(record_ids)
        return [
            a for a in self._attachments
            if (a.maintenance_record_id is not None and a.maintenance_record_id in wanted)
            or (a.equipment_id == equipment_id and a.maintenance_record_id is None
                and a.uploaded_at >= since)
        ]
