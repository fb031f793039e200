"""
Equipment-maintenance locator (element 7).

Every requirement is judged on a per-equipment roll-up of the active
inventory: schedules, service records of the last twelve months, uploaded
receipts and reports, and certification expiry. Required counts scale with
the inventory, so each match carries its own ``required``.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date, datetime, time, timezone
from typing import Optional

from pydantic import BaseModel

from audit_readiness.catalog import maintenance_requirements as catalog
from audit_readiness.locators.base import EvidenceSource
from audit_readiness.locators.merge import TAG_MATCH_ID
from audit_readiness.models.enums import ElementNumber, MatchStrategy, SourceKind
from audit_readiness.models.records import (
    Equipment,
    MaintenanceAttachment,
    MaintenanceRecord,
    MaintenanceSchedule,
)
from audit_readiness.models.schemas import Evidence, Requirement, RequirementMatch
from audit_readiness.persistence.stores import ACTIVE_EQUIPMENT_STATUSES, MaintenanceStore
from audit_readiness.utils.dates import months_ago

logger = logging.getLogger(__name__)

EQUIPMENT_CONFIDENCE = 90
GRACE_FACTOR = 1.1
RECEIPT_TYPES = ("receipt", "invoice", "service_report")
UNIT_DAYS = {"days": 1, "weeks": 7, "months": 30, "years": 365}
USAGE_HOURS_FREQUENCY_DAYS = 90
DEFAULT_FREQUENCY_DAYS = 365


class EquipmentRollup(BaseModel):
    """Twelve-month maintenance picture for one piece of equipment."""
    equipment: Equipment
    schedules: list[MaintenanceSchedule] = []
    overdue_schedules: int = 0
    compliant_schedules: int = 0
    records: list[MaintenanceRecord] = []
    attachments: list[MaintenanceAttachment] = []
    preventive_count: int = 0
    corrective_count: int = 0
    inspection_count: int = 0
    certification_count: int = 0
    receipt_count: int = 0
    total_cost: float = 0.0
    certifications_current: bool = False
    last_maintenance_date: Optional[date] = None
    next_due_date: Optional[date] = None

    @property
    def has_schedule(self) -> bool:
        return bool(self.schedules)

    @property
    def compliance_score(self) -> int:
        """Share of schedules serviced on time, as a whole percentage."""
        if not self.schedules:
            return 0
        return int(100 * self.compliant_schedules / len(self.schedules) + 0.5)


# ── Roll-up helpers ──────────────────────────────────────


def frequency_days(schedule: MaintenanceSchedule) -> int:
    if schedule.frequency_type == "calendar" or schedule.frequency_unit:
        unit = schedule.frequency_unit or "months"
        per_unit = UNIT_DAYS.get(unit)
        if per_unit is None:
            return DEFAULT_FREQUENCY_DAYS
        return per_unit * (schedule.frequency_value or 1)
    if schedule.frequency_type == "usage_hours":
        return USAGE_HOURS_FREQUENCY_DAYS
    return DEFAULT_FREQUENCY_DAYS


def _serves(record: MaintenanceRecord, schedule: MaintenanceSchedule) -> bool:
    if schedule.maintenance_category and record.maintenance_category == schedule.maintenance_category:
        return True
    if schedule.maintenance_type and record.maintenance_type == schedule.maintenance_type:
        return True
    if schedule.schedule_name and schedule.schedule_name.lower() in record.work_description.lower():
        return True
    return False


def serviced_on_time(
    schedule: MaintenanceSchedule, records: list[MaintenanceRecord], today: date
) -> bool:
    """Latest matching service falls within the schedule frequency plus 10% grace."""
    relevant = [r for r in records if _serves(r, schedule)]
    if not relevant:
        return False
    latest = max(r.actual_date for r in relevant)
    return (today - latest).days <= frequency_days(schedule) * GRACE_FACTOR


def certifications_current(equipment: Equipment, records: list[MaintenanceRecord], today: date) -> bool:
    if not equipment.certifications_required:
        return True
    return any(
        r.maintenance_type == "certification"
        and r.passed_inspection is not False
        and r.next_service_date is not None
        and r.next_service_date >= today
        for r in records
    )


def build_rollup(
    equipment: Equipment,
    schedules: list[MaintenanceSchedule],
    records: list[MaintenanceRecord],
    attachments: list[MaintenanceAttachment],
    today: date,
) -> EquipmentRollup:
    due_dates = [s.next_due_date for s in schedules if s.next_due_date is not None]
    return EquipmentRollup(
        equipment=equipment,
        schedules=schedules,
        overdue_schedules=sum(1 for d in due_dates if d < today),
        compliant_schedules=sum(1 for s in schedules if serviced_on_time(s, records, today)),
        records=records,
        attachments=attachments,
        preventive_count=sum(1 for r in records if r.maintenance_type == "preventive"),
        corrective_count=sum(1 for r in records if r.maintenance_type in ("corrective", "repair")),
        inspection_count=sum(1 for r in records if "inspection" in r.maintenance_type),
        certification_count=sum(1 for r in records if r.maintenance_type == "certification"),
        receipt_count=sum(1 for a in attachments if a.attachment_type in RECEIPT_TYPES),
        total_cost=round(sum(r.cost_total for r in records), 2),
        certifications_current=certifications_current(equipment, records, today),
        last_maintenance_date=max((r.actual_date for r in records), default=None),
        next_due_date=min(due_dates, default=None),
    )


class MaintenanceLocator(EvidenceSource):
    source = SourceKind.MAINTENANCE

    def __init__(self, store: MaintenanceStore, **kwargs):
        super().__init__(**kwargs)
        self.store = store
        self._inflight: dict[str, asyncio.Future] = {}

    # ── Roll-up ──────────────────────────────────────────

    def rollups(self, organization_id: str, now: datetime) -> list[EquipmentRollup] | None:
        """Roll-up per active unit; None when the inventory itself is unreachable."""
        inventory = self._query(
            "equipment inventory", self.store.equipment, organization_id, ACTIVE_EQUIPMENT_STATUSES,
        )
        if inventory is None:
            return None

        since = months_ago(now, 12)
        today = now.date()
        rollups = []
        for unit in inventory:
            schedules = self._query(f"schedules of {unit.equipment_code}", self.store.schedules, unit.id)
            records = self._query(
                f"records of {unit.equipment_code}", self.store.records, unit.id, since.date(),
            )
            record_ids = [r.id for r in records or []]
            attachments = self._query(
                f"attachments of {unit.equipment_code}",
                self.store.attachments, unit.id, record_ids, since,
            )
            rollups.append(build_rollup(unit, schedules or [], records or [], attachments or [], today))
        return rollups

    def _to_evidence(self, rollup: EquipmentRollup, requirement_id: str, strategy: MatchStrategy) -> Evidence:
        unit = rollup.equipment
        return Evidence(
            id=self._evidence_id(unit.id),
            source=self.source,
            date=(
                datetime.combine(rollup.last_maintenance_date, time.min, tzinfo=timezone.utc)
                if rollup.last_maintenance_date else None
            ),
            description=(
                f"{unit.name}: {len(rollup.records)} records, "
                f"{rollup.preventive_count} preventive, {rollup.receipt_count} receipts"
            ),
            reference=unit.equipment_code,
            relevance=EQUIPMENT_CONFIDENCE,
            matched_by=strategy,
            satisfied_requirements=[requirement_id],
        )

    # ── Shared roll-up ───────────────────────────────────

    async def shared_rollups(self, organization_id: str) -> list[EquipmentRollup] | None:
        """
        One roll-up per organization for every concurrent caller. The tag
        search and all five requirements of an element-7 score await the same
        in-flight build; the entry is dropped as soon as it completes.
        """
        task = self._inflight.get(organization_id)
        if task is None:
            task = asyncio.ensure_future(self._retrying(
                f"roll-up of {organization_id}",
                lambda rollups: rollups is None,
                self.rollups, organization_id, self.clock(),
            ))
            self._inflight[organization_id] = task
            task.add_done_callback(lambda _: self._inflight.pop(organization_id, None))
        return await asyncio.shield(task)

    async def locate_all(self, organization_id, element_number, requirements):
        rollups = await self.shared_rollups(organization_id)
        return {r.id: self._from_rollups(organization_id, r, rollups) for r in requirements}

    async def locate_tagged(self, organization_id, element_number):
        if element_number != ElementNumber.PREVENTATIVE_MAINTENANCE:
            return []
        return self._tagged_from(await self.shared_rollups(organization_id) or [])

    # ── Hooks ────────────────────────────────────────────

    def _match(self, organization_id, element_number, requirement, now):
        return self._from_rollups(organization_id, requirement, self.rollups(organization_id, now))

    # ── Requirement checks ───────────────────────────────

    def _from_rollups(
        self,
        organization_id: str,
        requirement: Requirement,
        rollups: list[EquipmentRollup] | None,
    ) -> RequirementMatch:
        if rollups is None:
            return RequirementMatch(requirement_id=requirement.id, failed=True)
        if not rollups:
            logger.debug(f"No active equipment for {organization_id}; {requirement.id} not configured")
            return RequirementMatch(requirement_id=requirement.id, configured=False)

        units = len(rollups)
        match requirement.id:
            case catalog.SCHEDULES:
                contributing = [r for r in rollups if r.has_schedule]
                found, required = len(contributing), units
            case catalog.PREVENTIVE:
                contributing = [r for r in rollups if r.preventive_count]
                found = sum(r.preventive_count for r in rollups)
                required = catalog.PREVENTIVE_SERVICES_PER_UNIT * units
            case catalog.DOCUMENTATION:
                contributing = [r for r in rollups if r.receipt_count]
                found = sum(r.receipt_count for r in rollups)
                required = catalog.RECEIPTS_PER_UNIT * units
            case catalog.COMPLIANCE:
                contributing = [r for r in rollups if r.compliant_schedules]
                found = sum(r.compliant_schedules for r in rollups)
                required = max(sum(len(r.schedules) for r in rollups), 1)
            case catalog.CERTIFICATIONS:
                needing = [r for r in rollups if r.equipment.certifications_required]
                contributing = [r for r in needing if r.certifications_current]
                found, required = len(contributing), len(needing)
            case _:
                logger.debug(f"Unrecognised maintenance requirement {requirement.id}")
                return RequirementMatch(requirement_id=requirement.id, configured=False)

        return RequirementMatch(
            requirement_id=requirement.id,
            evidence=[self._to_evidence(r, requirement.id, MatchStrategy.TYPE) for r in contributing],
            found=found,
            required=required,
        )

    def _tagged_from(self, rollups: list[EquipmentRollup]) -> list[Evidence]:
        return [
            self._to_evidence(r, TAG_MATCH_ID, MatchStrategy.TAG)
            for r in rollups
            if r.records
        ]
