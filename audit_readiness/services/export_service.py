"""
Export Service — serializes scores for the audit package.

  JSON → the full OverallScore
  CSV  → one row per evidence item across all elements
  Equipment CSV → one row per active unit (element 7 maintenance profile)
"""

from __future__ import annotations

import csv
import io
import json
import logging
from datetime import datetime

from audit_readiness.locators.maintenance import EquipmentRollup
from audit_readiness.models.enums import ExportFormat
from audit_readiness.models.schemas import OverallScore

logger = logging.getLogger(__name__)

EVIDENCE_COLUMNS = [
    "Element",
    "Element Name",
    "Requirement IDs",
    "Source",
    "Date",
    "Reference",
    "Description",
    "Relevance",
]

EQUIPMENT_COLUMNS = [
    "Equipment Code",
    "Equipment Name",
    "Type",
    "Status",
    "Has Schedule",
    "Scheduled Tasks",
    "Records (12mo)",
    "Preventive",
    "Inspections",
    "Certifications",
    "Attachments",
    "Receipts",
    "Total Cost",
    "Compliance Score",
    "Last Maintenance",
    "Next Due",
]


def _iso(value) -> str:
    return value.isoformat() if value is not None else ""


class ExportService:

    def export(self, score: OverallScore, fmt: ExportFormat | str = ExportFormat.JSON) -> str:
        fmt = ExportFormat(fmt)
        if fmt == ExportFormat.CSV:
            return self.to_csv(score)
        return self.to_json(score)

    def to_json(self, score: OverallScore) -> str:
        return json.dumps(score.model_dump(mode="json"), indent=2)

    def to_csv(self, score: OverallScore) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(EVIDENCE_COLUMNS)
        rows = 0
        for element in score.element_scores:
            for evidence in element.evidence:
                writer.writerow([
                    element.element_number,
                    element.element_name,
                    ";".join(evidence.satisfied_requirements),
                    evidence.source.value,
                    _iso(evidence.date),
                    evidence.reference,
                    evidence.description,
                    evidence.relevance,
                ])
                rows += 1
        logger.debug(f"Exported {rows} evidence rows")
        return buffer.getvalue()

    def equipment_json(self, rollups: list[EquipmentRollup], exported_at: datetime) -> str:
        summary = {
            "total_equipment": len(rollups),
            "equipment_with_schedules": sum(1 for r in rollups if r.has_schedule),
            "total_maintenance_records": sum(len(r.records) for r in rollups),
            "total_preventive": sum(r.preventive_count for r in rollups),
            "total_inspections": sum(r.inspection_count for r in rollups),
            "total_attachments": sum(len(r.attachments) for r in rollups),
            "total_receipts": sum(r.receipt_count for r in rollups),
            "total_cost_12mo": round(sum(r.total_cost for r in rollups), 2),
        }
        payload = {
            "element": 7,
            "export_date": exported_at.isoformat(),
            "summary": summary,
            "equipment": [r.model_dump(mode="json") for r in rollups],
        }
        return json.dumps(payload, indent=2)

    def equipment_csv(self, rollups: list[EquipmentRollup]) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(EQUIPMENT_COLUMNS)
        for r in rollups:
            unit = r.equipment
            writer.writerow([
                unit.equipment_code,
                unit.name,
                unit.equipment_type,
                unit.status,
                "Yes" if r.has_schedule else "No",
                len(r.schedules),
                len(r.records),
                r.preventive_count,
                r.inspection_count,
                r.certification_count,
                len(r.attachments),
                r.receipt_count,
                f"{r.total_cost:.2f}",
                f"{r.compliance_score}%",
                _iso(r.last_maintenance_date),
                _iso(r.next_due_date),
            ])
        return buffer.getvalue()
