"""
Read-only views of the upstream record stores.
These mirror the fields the locators query; the stores own everything else.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, field_validator


def _calendar_day(value):
    """BSON has no date-only type; stored timestamps are reduced to their day."""
    if isinstance(value, datetime):
        return value.date()
    return value


# ── Form submissions ─────────────────────────────────────


class FormTemplate(BaseModel):
    id: str
    organization_id: str
    form_code: str
    name: str
    element_tags: list[int] = []


class FormSubmission(BaseModel):
    id: str
    organization_id: str
    template_id: str
    form_number: str = ""
    status: str = "draft"  # draft | submitted | approved | rejected
    created_at: datetime
    submitted_at: Optional[datetime] = None


# ── Documents ────────────────────────────────────────────


class DocumentFolder(BaseModel):
    id: str
    organization_id: str
    folder_code: str
    name: str


class DocumentRecord(BaseModel):
    id: str
    organization_id: str
    control_number: str = ""
    title: str
    description: str = ""
    document_type_code: str = ""
    status: str = "draft"  # draft | active | approved | archived
    extracted_text: Optional[str] = None
    tags: list[str] = []
    element_tags: list[int] = []
    folder_id: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


# ── Equipment & maintenance ──────────────────────────────


class Equipment(BaseModel):
    id: str
    organization_id: str
    equipment_code: str
    name: str
    equipment_type: str = ""
    status: str = "active"  # active | in_service | maintenance | retired
    certifications_required: list[str] = []


class MaintenanceSchedule(BaseModel):
    id: str
    equipment_id: str
    schedule_name: str = ""
    maintenance_type: Optional[str] = None
    maintenance_category: Optional[str] = None
    frequency_type: str = "calendar"  # calendar | usage_hours
    frequency_unit: Optional[str] = None  # days | weeks | months | years
    frequency_value: int = 1
    next_due_date: Optional[date] = None
    is_active: bool = True

    due_date_as_day = field_validator("next_due_date", mode="before")(_calendar_day)


class MaintenanceRecord(BaseModel):
    id: str
    equipment_id: str
    maintenance_type: str  # preventive | corrective | repair | *inspection* | certification
    maintenance_category: Optional[str] = None
    work_description: str = ""
    actual_date: date
    next_service_date: Optional[date] = None
    passed_inspection: Optional[bool] = None
    cost_total: float = 0.0

    dates_as_days = field_validator("actual_date", "next_service_date", mode="before")(_calendar_day)


class MaintenanceAttachment(BaseModel):
    id: str
    equipment_id: str
    maintenance_record_id: Optional[str] = None
    attachment_type: str  # receipt | invoice | service_report | certification | photo
    uploaded_at: datetime
