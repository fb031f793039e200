"""
Tests: Element scoring, gap severity and status thresholds.

Run with:
    pytest audit_readiness/tests/test_element_scorer.py -v
"""

import asyncio

import pytest

from audit_readiness.locators.base import EvidenceSource
from audit_readiness.models.enums import EvidenceKind, ScoreStatus, Severity, SourceKind
from audit_readiness.models.schemas import Evidence, MatcherCriteria, Requirement, RequirementMatch
from audit_readiness.scoring.effort import CONFIGURATION_EFFORT_HOURS, EvidenceKindEffort
from audit_readiness.scoring.element_scorer import ElementScorer, ScoringProfile, status_for
from audit_readiness.scoring.gaps import classify_shortfall


def _req(req_id, points, samples=1, kind=EvidenceKind.FORM_SUBMISSION, recommended=False):
    return Requirement(
        id=req_id,
        description=f"Requirement {req_id}",
        evidence_kind=kind,
        minimum_samples=samples,
        point_value=points,
        recommended=recommended,
        matchers=MatcherCriteria(type_codes=(req_id,)),
    )


def _evidence(record, req_id):
    return Evidence(
        id=f"forms:{record}",
        source=SourceKind.FORMS,
        relevance=90,
        satisfied_requirements=[req_id],
    )


class StubSource(EvidenceSource):
    """Answers each requirement with a preset (found, configured) pair."""

    source = SourceKind.FORMS

    def __init__(self, answers, **kwargs):
        super().__init__(**kwargs)
        self.answers = answers

    def _match(self, organization_id, element_number, requirement, now):
        found, configured = self.answers.get(requirement.id, (0, True))
        return RequirementMatch(
            requirement_id=requirement.id,
            evidence=[_evidence(f"{requirement.id}-{i}", requirement.id) for i in range(found)],
            found=found,
            configured=configured,
        )


def _scorer(requirements, answers, settings, max_points=50):
    profile = ScoringProfile(
        name="test",
        catalog=lambda n: requirements,
        source=StubSource(answers, settings=settings),
        effort=EvidenceKindEffort(),
        max_points=lambda n: max_points,
    )
    return ElementScorer(profile, settings)


class TestProportionalCredit:
    def test_one_of_three(self, settings):
        reqs = [_req("r1", 10, samples=3)]
        score = asyncio.run(_scorer(reqs, {"r1": (1, True)}, settings).score("org", 1))
        assert score.earned_points == 3
        assert len(score.gaps) == 1
        assert score.gaps[0].severity == Severity.MAJOR
        assert score.gaps[0].description == "Only 1/3 requirement r1 found"

    def test_half_rounds_up(self, settings):
        reqs = [_req("r1", 5, samples=2)]
        score = asyncio.run(_scorer(reqs, {"r1": (1, True)}, settings).score("org", 1))
        assert score.earned_points == 3

    def test_full_credit_keeps_sample(self, settings):
        reqs = [_req("r1", 10, samples=2)]
        score = asyncio.run(_scorer(reqs, {"r1": (8, True)}, settings).score("org", 1))
        assert score.earned_points == 10
        assert score.gaps == []
        assert len(score.evidence) == settings.evidence_sample_limit


class TestZeroEvidence:
    def test_four_requirements_all_missing(self, settings):
        reqs = [_req("r1", 20), _req("r2", 10), _req("r3", 10), _req("r4", 10)]
        score = asyncio.run(_scorer(reqs, {}, settings).score("org", 1))
        assert score.earned_points == 0
        assert score.percentage == 0
        assert score.status == ScoreStatus.CRITICAL
        assert len(score.gaps) == 4
        assert all(g.severity == Severity.CRITICAL for g in score.gaps)
        assert score.gaps[0].description == "No requirement r1 found"

    def test_one_unmet_against_declared_max(self, settings):
        reqs = [_req("r1", 15), _req("r2", 15), _req("r3", 10), _req("r4", 10)]
        answers = {"r1": (0, True), "r2": (1, True), "r3": (1, True), "r4": (1, True)}
        score = asyncio.run(_scorer(reqs, answers, settings, max_points=50).score("org", 1))
        assert score.earned_points == 35
        assert score.percentage == 70
        assert score.status == ScoreStatus.NEEDS_IMPROVEMENT
        assert [g.severity for g in score.gaps] == [Severity.CRITICAL]

    def test_partial_rubric_never_reaches_100(self, settings):
        reqs = [_req("r1", 10)]
        score = asyncio.run(_scorer(reqs, {"r1": (1, True)}, settings, max_points=50).score("org", 1))
        assert score.percentage == 20


class TestConfigurationAndObservations:
    def test_unconfigured_is_critical_with_flat_effort(self, settings):
        reqs = [_req("r1", 10, samples=12)]
        score = asyncio.run(_scorer(reqs, {"r1": (0, False)}, settings).score("org", 1))
        gap = score.gaps[0]
        assert gap.severity == Severity.CRITICAL
        assert gap.estimated_effort_hours == CONFIGURATION_EFFORT_HOURS
        assert gap.description.startswith("No forms configured for:")
        assert gap.action_required == "Create or configure forms for: r1"

    def test_recommended_unmet_is_observation(self, settings):
        reqs = [_req("r1", 10), _req("extra", 0, recommended=True)]
        score = asyncio.run(_scorer(reqs, {"r1": (1, True)}, settings, max_points=10).score("org", 1))
        assert score.earned_points == 10
        assert score.percentage == 100
        assert [g.severity for g in score.gaps] == [Severity.OBSERVATION]

    def test_gaps_sorted_by_severity(self, settings):
        reqs = [_req("minor", 10, samples=10), _req("crit", 10)]
        answers = {"minor": (8, True), "crit": (0, True)}
        score = asyncio.run(_scorer(reqs, answers, settings).score("org", 1))
        assert [g.severity for g in score.gaps] == [Severity.CRITICAL, Severity.MINOR]


class TestUnknownElement:
    @pytest.mark.parametrize("element", [0, 15])
    def test_empty_score(self, settings, element):
        score = asyncio.run(_scorer([_req("r1", 10)], {"r1": (1, True)}, settings).score("org", element))
        assert score.max_points == 0
        assert score.percentage == 0
        assert score.status == ScoreStatus.CRITICAL
        assert score.requirements == []


class TestSeverityBoundaries:
    def test_exactly_three_quarters_is_critical(self):
        assert classify_shortfall(1, 4) == Severity.CRITICAL

    def test_exactly_half_is_major(self):
        assert classify_shortfall(2, 4) == Severity.MAJOR

    def test_just_under_half_is_minor(self):
        assert classify_shortfall(51, 100) == Severity.MINOR


class TestStatusBoundaries:
    @pytest.mark.parametrize("percentage,status", [
        (100, ScoreStatus.EXCELLENT),
        (90, ScoreStatus.EXCELLENT),
        (89.9, ScoreStatus.GOOD),
        (80, ScoreStatus.GOOD),
        (79.9, ScoreStatus.NEEDS_IMPROVEMENT),
        (60, ScoreStatus.NEEDS_IMPROVEMENT),
        (59.9, ScoreStatus.CRITICAL),
        (0, ScoreStatus.CRITICAL),
    ])
    def test_thresholds(self, percentage, status):
        assert status_for(percentage) == status
