"""
MongoDB record stores — read-only adapters over the operational collections.
Every pymongo failure is re-raised as StoreUnavailable; documents that do not
validate against their record model are logged and skipped.
"""

from __future__ import annotations

import functools
import logging
import re
from datetime import date, datetime, time, timezone
from typing import Any, Iterable, TypeVar

from pydantic import BaseModel, ValidationError
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

from audit_readiness.config import Settings, get_settings
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
from audit_readiness.persistence.mongo_client import MongoClient
from audit_readiness.persistence.stores import (
    DocumentStore,
    FormStore,
    MaintenanceStore,
    wildcard_to_regex,
)

logger = logging.getLogger(__name__)

_NO_ID = {"_id": 0}

RecordT = TypeVar("RecordT", bound=BaseModel)


def _guarded(method):
    """Translate pymongo errors into StoreUnavailable for the locators."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except PyMongoError as exc:
            logger.warning(f"{self.name} query {method.__name__} failed: {exc}")
            raise StoreUnavailable(self.name, str(exc)) from exc

    return wrapper


def _as_datetime(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


class _MongoStore:
    name = "mongo"

    def __init__(self, client: MongoClient | None = None, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.client = client or MongoClient(self.settings)

    def _collection(self, name: str) -> Any:
        return self.client.collection(name)

    def _records(self, model: type[RecordT], cursor: Iterable[dict[str, Any]]) -> list[RecordT]:
        """Validate each document; malformed ones are logged and skipped."""
        records = []
        for doc in cursor:
            try:
                records.append(model(**doc))
            except ValidationError as exc:
                logger.warning(
                    f"{self.name}: skipping malformed {model.__name__} {doc.get('id', '?')}: "
                    f"{exc.error_count()} validation error(s)"
                )
        return records


class MongoFormStore(_MongoStore, FormStore):
    name = "forms"

    @_guarded
    def templates_by_codes(self, organization_id, form_codes):
        cursor = self._collection(self.settings.form_templates_collection).find(
            {"organization_id": organization_id, "form_code": {"$in": list(form_codes)}},
            _NO_ID,
        )
        return self._records(FormTemplate, cursor)

    @_guarded
    def templates_tagged(self, organization_id, element_number):
        cursor = self._collection(self.settings.form_templates_collection).find(
            {"organization_id": organization_id, "element_tags": element_number},
            _NO_ID,
        )
        return self._records(FormTemplate, cursor)

    @_guarded
    def submissions(self, organization_id, template_ids, statuses, since):
        cursor = self._collection(self.settings.form_submissions_collection).find(
            {
                "organization_id": organization_id,
                "template_id": {"$in": list(template_ids)},
                "status": {"$in": list(statuses)},
                "created_at": {"$gte": since},
            },
            _NO_ID,
        ).sort("created_at", DESCENDING)
        return self._records(FormSubmission, cursor)


class MongoDocumentStore(_MongoStore, DocumentStore):
    name = "documents"

    def _find(self, query: dict[str, Any], sort_key: str = "title", limit: int = 0):
        cursor = self._collection(self.settings.documents_collection).find(query, _NO_ID)
        cursor = cursor.sort(sort_key, ASCENDING)
        if limit:
            cursor = cursor.limit(limit)
        return self._records(DocumentRecord, cursor)

    @staticmethod
    def _base(organization_id: str, statuses: tuple[str, ...], since: datetime | None = None):
        query: dict[str, Any] = {
            "organization_id": organization_id,
            "status": {"$in": list(statuses)},
        }
        if since is not None:
            query["created_at"] = {"$gte": since}
        return query

    @_guarded
    def folders(self, organization_id):
        cursor = self._collection(self.settings.document_folders_collection).find(
            {"organization_id": organization_id}, _NO_ID
        )
        return self._records(DocumentFolder, cursor)

    @_guarded
    def by_control_number(self, organization_id, pattern, statuses):
        query = self._base(organization_id, statuses)
        query["control_number"] = {"$regex": wildcard_to_regex(pattern), "$options": "i"}
        return self._find(query, sort_key="control_number")

    @_guarded
    def by_type(self, organization_id, type_code, statuses, since=None):
        query = self._base(organization_id, statuses, since)
        query["document_type_code"] = type_code
        return self._find(query)

    @_guarded
    def in_folder(self, organization_id, folder_id, statuses, since=None):
        query = self._base(organization_id, statuses, since)
        query["folder_id"] = folder_id
        return self._find(query)

    @_guarded
    def containing(self, organization_id, phrase, statuses, limit=50):
        needle = {"$regex": re.escape(phrase), "$options": "i"}
        query = self._base(organization_id, statuses)
        query["$or"] = [
            {"title": needle},
            {"description": needle},
            {"extracted_text": needle},
        ]
        return self._find(query, limit=limit)

    @_guarded
    def tagged(self, organization_id, element_number, statuses):
        query = self._base(organization_id, statuses)
        query["element_tags"] = element_number
        return self._find(query)


class MongoMaintenanceStore(_MongoStore, MaintenanceStore):
    name = "maintenance"

    @_guarded
    def equipment(self, organization_id, statuses):
        cursor = self._collection(self.settings.equipment_collection).find(
            {"organization_id": organization_id, "status": {"$in": list(statuses)}},
            _NO_ID,
        )
        return self._records(Equipment, cursor)

    @_guarded
    def schedules(self, equipment_id):
        cursor = self._collection(self.settings.maintenance_schedules_collection).find(
            {"equipment_id": equipment_id, "is_active": True}, _NO_ID
        )
        return self._records(MaintenanceSchedule, cursor)

    @_guarded
    def records(self, equipment_id, since):
        cursor = self._collection(self.settings.maintenance_records_collection).find(
            {"equipment_id": equipment_id, "actual_date": {"$gte": _as_datetime(since)}},
            _NO_ID,
        ).sort("actual_date", DESCENDING)
        return self._records(MaintenanceRecord, cursor)

    @_guarded
    def attachments(self, equipment_id, record_ids, since):
        cursor = self._collection(self.settings.maintenance_attachments_collection).find(
            {
                "$or": [
                    {"maintenance_record_id": {"$in": list(record_ids)}},
                    {
                        "equipment_id": equipment_id,
                        "maintenance_record_id": None,
                        "uploaded_at": {"$gte": since},
                    },
                ]
            },
            _NO_ID,
        )
        return self._records(MaintenanceAttachment, cursor)
