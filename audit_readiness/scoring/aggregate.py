"""
Aggregate Scorer — weighted roll-up of the fourteen element scores.

    overall% = round1(100 · Σ(earned·w) / Σ(max·w))

Audit-ready means overall ≥ the readiness threshold AND no critical gaps.
"""

from __future__ import annotations

import logging
from datetime import datetime

from audit_readiness.catalog.elements import ELEMENT_WEIGHTS
from audit_readiness.models.enums import Severity
from audit_readiness.models.schemas import ElementScore, Gap, OverallScore, ReadinessProjection
from audit_readiness.scoring.element_scorer import status_for
from audit_readiness.utils.rounding import round_half_up, round_one_decimal

logger = logging.getLogger(__name__)

DEFAULT_WEIGHT = 1.0


def weighted_percentage(element_scores: list[ElementScore], weights: dict[int, float]) -> float:
    earned = sum(s.earned_points * weights.get(s.element_number, DEFAULT_WEIGHT) for s in element_scores)
    possible = sum(s.max_points * weights.get(s.element_number, DEFAULT_WEIGHT) for s in element_scores)
    if possible <= 0:
        return 0.0
    return round_one_decimal(100 * earned / possible)


def all_gaps(element_scores: list[ElementScore]) -> list[Gap]:
    return [gap for score in element_scores for gap in score.gaps]


class AggregateScorer:

    def __init__(self, weights: dict[int, float] | None = None, readiness_threshold: float = 80.0):
        self.weights = weights if weights is not None else ELEMENT_WEIGHTS
        self.readiness_threshold = readiness_threshold

    def aggregate(
        self,
        element_scores: list[ElementScore],
        projection: ReadinessProjection,
        now: datetime,
    ) -> OverallScore:
        overall = weighted_percentage(element_scores, self.weights)
        gaps = all_gaps(element_scores)
        counts = {severity: 0 for severity in Severity}
        for gap in gaps:
            counts[gap.severity] += 1

        ready = overall >= self.readiness_threshold and counts[Severity.CRITICAL] == 0
        result = OverallScore(
            overall_percentage=overall,
            overall_status=status_for(overall),
            element_scores=element_scores,
            ready_for_audit=ready,
            critical_gaps_count=counts[Severity.CRITICAL],
            major_gaps_count=counts[Severity.MAJOR],
            minor_gaps_count=counts[Severity.MINOR],
            observation_gaps_count=counts[Severity.OBSERVATION],
            total_gaps_count=len(gaps),
            estimated_hours_to_ready=round_half_up(sum(g.estimated_effort_hours for g in gaps)),
            projected_ready_date=projection.projected_ready_date,
            milestones=projection.milestones,
            critical_path=projection.critical_path,
            last_calculated=now,
        )
        logger.info(
            f"Overall {overall}% ({result.overall_status.value}), "
            f"{counts[Severity.CRITICAL]} critical / {len(gaps)} gaps, ready={ready}"
        )
        return result
