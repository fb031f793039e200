"""
Tests: HTTP routes via FastAPI's TestClient.

Run with:
    pytest audit_readiness/tests/test_api.py -v
"""

import pytest
from fastapi.testclient import TestClient

from audit_readiness.api import create_app
from audit_readiness.api.routes import get_readiness_service
from audit_readiness.persistence.demo_data import seed_demo_data
from audit_readiness.services.readiness_service import ReadinessService

from conftest import NOW, ORG


@pytest.fixture
def client(settings, stores, clock):
    seed_demo_data(stores.forms, stores.documents, stores.maintenance, NOW, ORG)
    service = ReadinessService(settings, stores, clock)
    app = create_app()
    app.dependency_overrides[get_readiness_service] = lambda: service
    return TestClient(app)


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"


class TestReadinessRoutes:
    def test_overall(self, client):
        response = client.get(f"/api/readiness/{ORG}")
        assert response.status_code == 200
        body = response.json()
        assert len(body["element_scores"]) == 14
        assert 0 <= body["overall_percentage"] <= 100

    def test_single_element_via_query(self, client):
        body = client.get(f"/api/readiness/{ORG}", params={"element": 2}).json()
        assert body["element_number"] == 2
        assert "gaps" in body

    def test_unknown_profile_rejected(self, client):
        response = client.get(f"/api/readiness/{ORG}", params={"profile": "bogus"})
        assert response.status_code == 422

    def test_quick(self, client):
        body = client.get(f"/api/readiness/{ORG}/quick").json()
        assert set(body) == {
            "overall_percentage", "overall_status", "ready_for_audit",
            "critical_gaps", "projected_ready_date",
        }

    def test_element(self, client):
        body = client.get(f"/api/readiness/{ORG}/elements/9").json()
        assert body["element_number"] == 9
        assert body["max_points"] == 50

    def test_element_must_be_integer(self, client):
        assert client.get(f"/api/readiness/{ORG}/elements/nine").status_code == 422

    def test_unknown_element_is_empty(self, client):
        response = client.get(f"/api/readiness/{ORG}/elements/15")
        assert response.status_code == 200
        assert response.json()["max_points"] == 0

    def test_element_evidence(self, client):
        body = client.get(f"/api/readiness/{ORG}/elements/9/evidence").json()
        assert body["profile"] == "forms"
        assert len(body["evidence"]) > 0

    def test_document_profile_element(self, client):
        body = client.get(f"/api/readiness/{ORG}/elements/1", params={"profile": "documents"}).json()
        assert body["earned_points"] > 0


class TestExportRoute:
    def test_json(self, client):
        response = client.get(f"/api/readiness/{ORG}/export")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")
        assert "attachment" in response.headers["content-disposition"]

    def test_csv(self, client):
        response = client.get(f"/api/readiness/{ORG}/export", params={"format": "csv"})
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert response.text.startswith("Element,Element Name,Requirement IDs")

    def test_equipment_csv(self, client):
        response = client.get(
            f"/api/readiness/{ORG}/export", params={"format": "csv", "profile": "maintenance"}
        )
        assert response.text.startswith("Equipment Code,Equipment Name")

    def test_bad_format(self, client):
        response = client.get(f"/api/readiness/{ORG}/export", params={"format": "xml"})
        assert response.status_code == 422


class TestCatalogRoute:
    def test_form_catalog(self, client):
        body = client.get("/api/readiness/catalog/2").json()
        assert body["element_name"] == "Hazard Identification & Assessment"
        assert body["weight"] == 1.2
        assert len(body["requirements"]) == 4

    def test_maintenance_catalog(self, client):
        body = client.get("/api/readiness/catalog/7", params={"profile": "maintenance"}).json()
        assert len(body["requirements"]) == 5
