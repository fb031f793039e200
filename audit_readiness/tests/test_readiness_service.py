"""
Tests: ReadinessService orchestration, profiles and export.

Run with:
    pytest audit_readiness/tests/test_readiness_service.py -v
"""

import asyncio
import json

import pytest

from audit_readiness.models.enums import ScoreStatus, ScoringProfileName, Severity
from audit_readiness.models.schemas import ElementScore, OverallScore
from audit_readiness.persistence.demo_data import seed_demo_data
from audit_readiness.services.export_service import EQUIPMENT_COLUMNS, EVIDENCE_COLUMNS
from audit_readiness.services.readiness_service import ReadinessService

from conftest import NOW, ORG


@pytest.fixture
def service(settings, stores, clock):
    seed_demo_data(stores.forms, stores.documents, stores.maintenance, NOW, ORG)
    return ReadinessService(settings, stores, clock)


@pytest.fixture
def empty_service(settings, stores, clock):
    return ReadinessService(settings, stores, clock)


class TestCalculateOverall:
    def test_scores_all_fourteen_elements(self, service):
        score = asyncio.run(service.calculate_overall(ORG))
        assert [e.element_number for e in score.element_scores] == list(range(1, 15))
        assert all(0 <= e.percentage <= 100 for e in score.element_scores)
        assert 0 < score.overall_percentage < 100
        assert score.last_calculated == NOW

    def test_demo_org_not_ready(self, service):
        score = asyncio.run(service.calculate_overall(ORG))
        assert score.critical_gaps_count > 0
        assert score.ready_for_audit is False
        assert score.total_gaps_count == sum(len(e.gaps) for e in score.element_scores)
        assert [m.id for m in score.milestones] == ["ms-1", "ms-2", "ms-3"]
        assert score.projected_ready_date > NOW.date()

    def test_empty_organization(self, empty_service):
        score = asyncio.run(empty_service.calculate_overall("nobody"))
        assert score.overall_percentage == 0
        assert score.overall_status == ScoreStatus.CRITICAL
        assert all(g.severity == Severity.CRITICAL for e in score.element_scores for g in e.gaps)

    def test_store_outage_degrades(self, service, stores):
        stores.forms.available = False
        score = asyncio.run(service.calculate_overall(ORG))
        assert score.overall_percentage == 0
        assert score.ready_for_audit is False


class TestCaching:
    def test_second_call_served_from_cache(self, service, monkeypatch):
        calls = []
        original = service.calculate_overall

        async def counting(organization_id):
            calls.append(organization_id)
            return await original(organization_id)

        monkeypatch.setattr(service, "calculate_overall", counting)
        first = asyncio.run(service.get_or_calculate(ORG))
        second = asyncio.run(service.get_or_calculate(ORG))
        assert len(calls) == 1
        assert first == second

        asyncio.run(service.get_or_calculate(ORG, force_refresh=True))
        assert len(calls) == 2

    def test_quick_score(self, service):
        full = asyncio.run(service.get_or_calculate(ORG))
        quick = asyncio.run(service.quick_score(ORG))
        assert quick.overall_percentage == full.overall_percentage
        assert quick.critical_gaps == full.critical_gaps_count
        assert quick.projected_ready_date == full.projected_ready_date


class TestElements:
    def test_get_score_for_element(self, service):
        score = asyncio.run(service.get_score(ORG, element=2))
        assert isinstance(score, ElementScore)
        assert score.element_number == 2

    def test_get_score_overall(self, service):
        assert isinstance(asyncio.run(service.get_score(ORG)), OverallScore)

    def test_unknown_element(self, service):
        score = asyncio.run(service.score_element(ORG, 15))
        assert score.max_points == 0
        assert score.status == ScoreStatus.CRITICAL

    def test_element_evidence(self, service):
        evidence = asyncio.run(service.locate_element_evidence(ORG, 9))
        assert evidence
        relevances = [e.relevance for e in evidence]
        assert relevances == sorted(relevances, reverse=True)


class TestProfiles:
    def test_for_profile_shares_stores(self, service):
        documents = service.for_profile("documents")
        assert documents.profile_name == ScoringProfileName.DOCUMENTS
        assert documents.stores is service.stores
        assert documents.cache is None
        assert service.for_profile("forms") is service

    def test_document_profile(self, service):
        score = asyncio.run(service.for_profile("documents").score_element(ORG, 1))
        assert score.earned_points > 0
        policy_gaps = [g for g in score.gaps if g.requirement_id == "elem1_hs_policy"]
        assert policy_gaps == []

    def test_document_gap_action(self, empty_service):
        score = asyncio.run(empty_service.for_profile("documents").score_element("nobody", 1))
        gap = next(g for g in score.gaps if g.requirement_id == "elem1_hs_policy")
        assert gap.action_required.startswith("Create POL document covering:")
        assert gap.estimated_effort_hours == 8

    def test_maintenance_profile(self, service):
        score = asyncio.run(service.for_profile("maintenance").score_element(ORG, 7))
        assert score.max_points == 45
        assert 0 < score.earned_points <= 45

    def test_maintenance_inventory_read_once_per_score(self, service, stores, monkeypatch):
        calls = []
        original = stores.maintenance.equipment

        def counting(*args, **kwargs):
            calls.append(args)
            return original(*args, **kwargs)

        monkeypatch.setattr(stores.maintenance, "equipment", counting)
        maintenance = service.for_profile("maintenance")

        score = asyncio.run(maintenance.score_element(ORG, 7))
        assert score.earned_points > 0
        assert len(calls) == 1

        asyncio.run(maintenance.score_element(ORG, 7))
        assert len(calls) == 2

    def test_maintenance_without_inventory(self, empty_service):
        score = asyncio.run(empty_service.for_profile("maintenance").score_element("nobody", 7))
        assert score.earned_points == 0
        assert all(g.description.startswith("No equipment configured") for g in score.gaps)


class TestExport:
    def test_json(self, service):
        payload = json.loads(asyncio.run(service.export(ORG, "json")))
        assert len(payload["element_scores"]) == 14
        assert "overall_percentage" in payload

    def test_csv_one_row_per_evidence(self, service):
        body = asyncio.run(service.export(ORG, "csv"))
        lines = body.strip().split("\n")
        assert lines[0] == ",".join(EVIDENCE_COLUMNS)
        score = asyncio.run(service.get_or_calculate(ORG))
        assert len(lines) - 1 == sum(len(e.evidence) for e in score.element_scores)

    def test_equipment_csv(self, service):
        body = asyncio.run(service.for_profile("maintenance").export(ORG, "csv"))
        lines = body.strip().split("\n")
        assert lines[0] == ",".join(EQUIPMENT_COLUMNS)
        assert len(lines) == 3

    def test_equipment_json(self, service):
        payload = json.loads(asyncio.run(service.for_profile("maintenance").export(ORG, "json")))
        assert payload["summary"]["total_equipment"] == 2
        assert payload["element"] == 7
