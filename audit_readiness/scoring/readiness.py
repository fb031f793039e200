"""
Readiness Projector — turns the remaining effort into a target date,
three fixed milestones and a short critical path.
"""

from __future__ import annotations

import math
from datetime import date

from audit_readiness.models.enums import MilestoneStatus, Severity
from audit_readiness.models.schemas import CriticalPathItem, Gap, Milestone, ReadinessProjection
from audit_readiness.utils.dates import add_days

BUFFER_DAYS = 7
CRITICAL_PATH_LENGTH = 5
TASK_DURATION_DAYS = 2

_MILESTONES = (
    # id, name, days out (None = projected date), threshold
    ("ms-1", "Critical Gaps Addressed", 14, 60.0),
    ("ms-2", "Documentation Complete", 30, 75.0),
    ("ms-3", "Audit Ready", None, 80.0),
)

_STANDARD_TASKS = {
    "ms-2": ["All forms completed", "Policies reviewed", "Records organized"],
    "ms-3": ["Mock audit passed", "Package prepared", "Staff briefed"],
}


class ReadinessProjector:

    def __init__(self, hours_per_week: float = 10.0):
        self.hours_per_week = hours_per_week

    def project(self, gaps: list[Gap], current_percentage: float, today: date) -> ReadinessProjection:
        total_hours = sum(g.estimated_effort_hours for g in gaps)
        weeks = math.ceil(total_hours / self.hours_per_week) if self.hours_per_week > 0 else 0
        projected = add_days(today, 7 * weeks + BUFFER_DAYS)

        return ReadinessProjection(
            total_hours=total_hours,
            weeks_needed=weeks,
            projected_ready_date=projected,
            milestones=self._milestones(gaps, current_percentage, today, projected),
            critical_path=self._critical_path(gaps, today),
        )

    def _milestones(
        self, gaps: list[Gap], current: float, today: date, projected: date
    ) -> list[Milestone]:
        critical = [g.description for g in gaps if g.severity == Severity.CRITICAL]
        milestones = []
        for ms_id, name, offset, threshold in _MILESTONES:
            milestones.append(Milestone(
                id=ms_id,
                name=name,
                date=projected if offset is None else add_days(today, offset),
                threshold=threshold,
                status=MilestoneStatus.COMPLETED if current >= threshold else MilestoneStatus.UPCOMING,
                tasks=_STANDARD_TASKS.get(ms_id, critical[:3]),
            ))
        return milestones

    def _critical_path(self, gaps: list[Gap], today: date) -> list[CriticalPathItem]:
        urgent = [g for g in gaps if g.severity in (Severity.CRITICAL, Severity.MAJOR)]
        path = []
        for index, gap in enumerate(urgent[:CRITICAL_PATH_LENGTH]):
            start = add_days(today, index * TASK_DURATION_DAYS)
            path.append(CriticalPathItem(
                id=f"cp-{index + 1}",
                task=gap.action_required,
                duration_days=TASK_DURATION_DAYS,
                start_date=start,
                end_date=add_days(start, TASK_DURATION_DAYS),
            ))
        return path
