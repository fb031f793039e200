"""
Tests: Weighted aggregation, effort models and readiness projection.

Run with:
    pytest audit_readiness/tests/test_aggregate.py -v
"""

from datetime import date, datetime, timezone

from audit_readiness.catalog import maintenance_requirements as maintenance
from audit_readiness.models.enums import EvidenceKind, MilestoneStatus, Severity
from audit_readiness.models.schemas import ElementScore, Gap, MatcherCriteria, Requirement
from audit_readiness.scoring.aggregate import AggregateScorer, weighted_percentage
from audit_readiness.scoring.effort import DocumentTypeEffort, EvidenceKindEffort, MaintenanceEffort
from audit_readiness.scoring.readiness import ReadinessProjector

TODAY = date(2025, 6, 15)
NOW = datetime(2025, 6, 15, 10, 0, tzinfo=timezone.utc)


def _gap(severity, hours=1.0, element=1, label="gap"):
    return Gap(
        requirement_id=label,
        element_number=element,
        severity=severity,
        description=f"{label} description",
        action_required=f"fix {label}",
        estimated_effort_hours=hours,
    )


def _element(number, earned, max_points, gaps=()):
    return ElementScore(
        element_number=number,
        element_name=f"Element {number}",
        max_points=max_points,
        earned_points=earned,
        percentage=100 * earned / max_points if max_points else 0,
        gaps=list(gaps),
    )


def _req(kind=EvidenceKind.DOCUMENT, codes=("POL",), req_id="r"):
    return Requirement(
        id=req_id,
        description="d",
        evidence_kind=kind,
        matchers=MatcherCriteria(type_codes=codes),
    )


class TestWeightedPercentage:
    def test_two_element_fixture(self):
        scores = [_element(1, 10, 20), _element(2, 30, 30)]
        assert weighted_percentage(scores, {1: 1.2, 2: 1.0}) == 77.8

    def test_no_max_points(self):
        assert weighted_percentage([_element(1, 0, 0)], {1: 1.0}) == 0.0


class TestAggregateScorer:
    def _projection(self, gaps=()):
        return ReadinessProjector().project(list(gaps), 0, TODAY)

    def test_high_score_with_critical_gap_not_ready(self):
        critical = _gap(Severity.CRITICAL)
        scores = [_element(1, 85, 100, [critical])]
        result = AggregateScorer({1: 1.0}).aggregate(scores, self._projection([critical]), NOW)
        assert result.overall_percentage == 85.0
        assert result.ready_for_audit is False
        assert result.critical_gaps_count == 1

    def test_ready_when_above_threshold_and_no_critical(self):
        minor = _gap(Severity.MINOR, hours=2.5)
        scores = [_element(1, 85, 100, [minor])]
        result = AggregateScorer({1: 1.0}).aggregate(scores, self._projection([minor]), NOW)
        assert result.ready_for_audit is True
        assert result.minor_gaps_count == 1
        assert result.estimated_hours_to_ready == 3

    def test_gap_counts(self):
        gaps = [_gap(Severity.CRITICAL), _gap(Severity.MAJOR), _gap(Severity.MAJOR),
                _gap(Severity.OBSERVATION, hours=0)]
        result = AggregateScorer({1: 1.0}).aggregate(
            [_element(1, 10, 50, gaps)], self._projection(gaps), NOW
        )
        assert result.critical_gaps_count == 1
        assert result.major_gaps_count == 2
        assert result.observation_gaps_count == 1
        assert result.total_gaps_count == 4
        assert result.last_calculated == NOW


class TestEffortModels:
    def test_two_missing_policies(self):
        assert DocumentTypeEffort().estimate(_req(codes=("POL",)), 2) == 16

    def test_unknown_document_type(self):
        assert DocumentTypeEffort().estimate(_req(codes=("XYZ",)), 1) == 4

    def test_manual(self):
        assert DocumentTypeEffort().estimate(_req(codes=("MAN",)), 1) == 16

    def test_evidence_kind_floor(self):
        req = _req(kind=EvidenceKind.FORM_SUBMISSION, codes=("jha",))
        assert EvidenceKindEffort().estimate(req, 0) == 0.25
        assert EvidenceKindEffort().estimate(req, 8) == 2.0

    def test_document_kind(self):
        assert EvidenceKindEffort().estimate(_req(), 3) == 12

    def test_maintenance_certification(self):
        req = _req(req_id=maintenance.CERTIFICATIONS, codes=("certification",))
        assert MaintenanceEffort().estimate(req, 2) == 16


class TestReadinessProjector:
    def test_weeks_and_date(self):
        gaps = [_gap(Severity.MAJOR, hours=12), _gap(Severity.MINOR, hours=3)]
        projection = ReadinessProjector(10).project(gaps, 50, TODAY)
        assert projection.total_hours == 15
        assert projection.weeks_needed == 2
        assert projection.projected_ready_date == date(2025, 7, 6)

    def test_no_gaps_one_week_buffer(self):
        projection = ReadinessProjector(10).project([], 95, TODAY)
        assert projection.weeks_needed == 0
        assert projection.projected_ready_date == date(2025, 6, 22)
        assert all(m.status == MilestoneStatus.COMPLETED for m in projection.milestones)

    def test_milestones(self):
        gaps = [_gap(Severity.CRITICAL, label=f"c{i}") for i in range(4)]
        projection = ReadinessProjector(10).project(gaps, 75, TODAY)
        ms1, ms2, ms3 = projection.milestones
        assert ms1.name == "Critical Gaps Addressed"
        assert ms1.date == date(2025, 6, 29)
        assert ms1.tasks == ["c0 description", "c1 description", "c2 description"]
        assert ms1.status == MilestoneStatus.COMPLETED
        assert ms2.date == date(2025, 7, 15)
        assert ms2.status == MilestoneStatus.COMPLETED  # 75 meets its threshold
        assert ms3.date == projection.projected_ready_date
        assert ms3.status == MilestoneStatus.UPCOMING

    def test_critical_path(self):
        gaps = [_gap(Severity.CRITICAL, label=f"c{i}") for i in range(4)]
        gaps += [_gap(Severity.MAJOR, label=f"m{i}") for i in range(3)]
        gaps.append(_gap(Severity.MINOR, label="minor"))
        path = ReadinessProjector().project(gaps, 40, TODAY).critical_path
        assert len(path) == 5
        assert path[0].start_date == TODAY
        assert path[0].end_date == date(2025, 6, 17)
        assert path[1].start_date == date(2025, 6, 17)
        assert path[4].task == "fix m0"
        assert all(item.status == "pending" for item in path)
