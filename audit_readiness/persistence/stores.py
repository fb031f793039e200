"""
Record-store interfaces — the read-only queries the evidence locators need.

Implementations are synchronous (pymongo or in-memory); locators call them
through ``asyncio.to_thread``. Any backend failure must surface as
``StoreUnavailable`` so the locator can degrade it to zero evidence.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from datetime import date, datetime

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

COUNTED_SUBMISSION_STATUSES = ("submitted", "approved")
ACTIVE_DOCUMENT_STATUSES = ("active", "approved")
ACTIVE_EQUIPMENT_STATUSES = ("active", "in_service", "maintenance")


def wildcard_to_regex(pattern: str) -> str:
    """Translate a ``*`` wildcard reference pattern into an anchored regex."""
    return "^" + ".*".join(re.escape(part) for part in pattern.split("*")) + "$"


def wildcard_match(pattern: str, value: str) -> bool:
    return re.match(wildcard_to_regex(pattern), value or "", re.IGNORECASE) is not None


class FormStore(ABC):
    """Form templates and their submissions."""

    name = "forms"

    @abstractmethod
    def templates_by_codes(self, organization_id: str, form_codes: list[str]) -> list[FormTemplate]:
        ...

    @abstractmethod
    def templates_tagged(self, organization_id: str, element_number: int) -> list[FormTemplate]:
        ...

    @abstractmethod
    def submissions(
        self,
        organization_id: str,
        template_ids: list[str],
        statuses: tuple[str, ...],
        since: datetime,
    ) -> list[FormSubmission]:
        """Submissions newest first."""


class DocumentStore(ABC):
    """Controlled documents and folders."""

    name = "documents"

    @abstractmethod
    def folders(self, organization_id: str) -> list[DocumentFolder]:
        ...

    @abstractmethod
    def by_control_number(
        self, organization_id: str, pattern: str, statuses: tuple[str, ...]
    ) -> list[DocumentRecord]:
        ...

    @abstractmethod
    def by_type(
        self,
        organization_id: str,
        type_code: str,
        statuses: tuple[str, ...],
        since: datetime | None = None,
    ) -> list[DocumentRecord]:
        ...

    @abstractmethod
    def in_folder(
        self,
        organization_id: str,
        folder_id: str,
        statuses: tuple[str, ...],
        since: datetime | None = None,
    ) -> list[DocumentRecord]:
        ...

    @abstractmethod
    def containing(
        self, organization_id: str, phrase: str, statuses: tuple[str, ...], limit: int = 50
    ) -> list[DocumentRecord]:
        """Documents whose title, description or extracted text contains ``phrase``."""

    @abstractmethod
    def tagged(
        self, organization_id: str, element_number: int, statuses: tuple[str, ...]
    ) -> list[DocumentRecord]:
        ...


class MaintenanceStore(ABC):
    """Equipment inventory, schedules, service records and attachments."""

    name = "maintenance"

    @abstractmethod
    def equipment(self, organization_id: str, statuses: tuple[str, ...]) -> list[Equipment]:
        ...

    @abstractmethod
    def schedules(self, equipment_id: str) -> list[MaintenanceSchedule]:
        """Active schedules only."""

    @abstractmethod
    def records(self, equipment_id: str, since: date) -> list[MaintenanceRecord]:
        """Service records on or after ``since``, newest first."""

    @abstractmethod
    def attachments(
        self, equipment_id: str, record_ids: list[str], since: datetime
    ) -> list[MaintenanceAttachment]:
        """Attachments of the given records plus equipment-level uploads since ``since``."""
