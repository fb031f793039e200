"""
Tests: MongoDB store adapters against fake collections (no server needed).

Run with:
    pytest audit_readiness/tests/test_mongo_stores.py -v
"""

import asyncio
from datetime import date, datetime, timezone

import pytest
from pymongo.errors import AutoReconnect

from audit_readiness.errors import StoreUnavailable
from audit_readiness.locators.maintenance import MaintenanceLocator
from audit_readiness.persistence.memory_stores import InMemoryDocumentStore, InMemoryMaintenanceStore
from audit_readiness.persistence.mongo_client import MongoClient
from audit_readiness.persistence.mongo_stores import MongoDocumentStore, MongoFormStore, MongoMaintenanceStore
from audit_readiness.persistence.score_repository import InMemoryScoreRepository, MongoScoreRepository
from audit_readiness.services.readiness_service import ReadinessService, RecordStores
from audit_readiness.services.score_cache import ScoreCache

from conftest import NOW, ORG

CREATED = datetime(2025, 5, 1, tzinfo=timezone.utc)


class FakeCursor(list):
    def sort(self, *args, **kwargs):
        return self

    def limit(self, count):
        return FakeCursor(self[:count])


class FakeCollection:
    def __init__(self, docs=(), error=None):
        self.docs = list(docs)
        self.error = error
        self.queries = []

    def find(self, query, projection=None):
        if self.error:
            raise self.error
        self.queries.append(query)
        return FakeCursor(self.docs)

    def find_one(self, query, projection=None):
        return self.docs[0] if self.docs else None


class FakeClient:
    def __init__(self, collections):
        self.collections = collections

    def collection(self, name):
        return self.collections.get(name) or FakeCollection()


class TestMongoFormStore:
    def test_templates_by_codes(self, settings):
        templates = FakeCollection([
            {"id": "t-1", "organization_id": ORG, "form_code": "jha", "name": "Job Hazard Analysis"},
        ])
        store = MongoFormStore(FakeClient({settings.form_templates_collection: templates}), settings)

        found = store.templates_by_codes(ORG, ["jha", "flha"])

        assert [t.form_code for t in found] == ["jha"]
        assert templates.queries[0]["form_code"] == {"$in": ["jha", "flha"]}

    def test_pymongo_error_becomes_store_unavailable(self, settings):
        broken = FakeCollection(error=AutoReconnect("primary stepped down"))
        store = MongoFormStore(FakeClient({settings.form_templates_collection: broken}), settings)

        with pytest.raises(StoreUnavailable) as info:
            store.templates_tagged(ORG, 2)
        assert info.value.store == "forms"


class TestMongoDocumentStore:
    def _store(self, settings, docs):
        collection = FakeCollection(docs)
        store = MongoDocumentStore(FakeClient({settings.documents_collection: collection}), settings)
        return store, collection

    def test_control_number_uses_anchored_regex(self, settings):
        store, collection = self._store(settings, [
            {"id": "d-1", "organization_id": ORG, "control_number": "ACME-POL-001",
             "title": "Health & Safety Policy", "status": "active", "created_at": CREATED},
        ])

        found = store.by_control_number(ORG, "*-POL-001", ("active", "approved"))

        assert found[0].control_number == "ACME-POL-001"
        query = collection.queries[0]
        assert query["control_number"]["$regex"] == "^.*\\-POL\\-001$"
        assert query["status"] == {"$in": ["active", "approved"]}

    def test_containing_is_limited(self, settings):
        docs = [
            {"id": f"d-{i}", "organization_id": ORG, "title": f"Doc {i}", "created_at": CREATED}
            for i in range(5)
        ]
        store, collection = self._store(settings, docs)

        found = store.containing(ORG, "hazard assessment", ("active",), limit=2)

        assert len(found) == 2
        assert len(collection.queries[0]["$or"]) == 3

    def test_since_filter_applied(self, settings):
        store, collection = self._store(settings, [])
        store.by_type(ORG, "POL", ("active",), since=CREATED)
        assert collection.queries[0]["created_at"] == {"$gte": CREATED}


class TestMalformedRecords:
    TEMPLATES = [
        {"id": "t-1", "organization_id": ORG, "form_code": "hazard_assessment"},  # no name
        {"id": "t-2", "organization_id": ORG, "form_code": "jha", "name": "Job Hazard Analysis"},
    ]

    def test_bad_document_skipped(self, settings):
        templates = FakeCollection(self.TEMPLATES)
        store = MongoFormStore(FakeClient({settings.form_templates_collection: templates}), settings)

        assert [t.id for t in store.templates_tagged(ORG, 2)] == ["t-2"]

    def test_overall_score_survives_bad_document(self, settings, clock):
        client = FakeClient({settings.form_templates_collection: FakeCollection(self.TEMPLATES)})
        stores = RecordStores(
            forms=MongoFormStore(client, settings),
            documents=InMemoryDocumentStore(),
            maintenance=InMemoryMaintenanceStore(),
            scores=InMemoryScoreRepository(),
        )
        service = ReadinessService(settings, stores, clock)

        score = asyncio.run(service.calculate_overall(ORG))

        assert [e.element_number for e in score.element_scores] == list(range(1, 15))
        assert score.ready_for_audit is False

    def test_corrupt_cache_slot_is_a_miss(self, settings):
        slot = FakeCollection([{"organization_id": ORG, "score": {"overall_percentage": "n/a"}}])
        repo = MongoScoreRepository(FakeClient({settings.score_cache_collection: slot}), settings)

        with pytest.raises(StoreUnavailable):
            repo.load(ORG)
        assert ScoreCache(repo, lambda: NOW).get(ORG) is None


class TestMongoMaintenanceStore:
    def _client(self, settings):
        return FakeClient({
            settings.equipment_collection: FakeCollection([
                {"id": "eq-1", "organization_id": ORG, "equipment_code": "EXC-01", "name": "Excavator"},
            ]),
            settings.maintenance_schedules_collection: FakeCollection([
                {"id": "s-1", "equipment_id": "eq-1", "maintenance_type": "preventive",
                 "frequency_unit": "months", "frequency_value": 3,
                 "next_due_date": datetime(2025, 7, 1, 9, 0, tzinfo=timezone.utc)},
            ]),
            settings.maintenance_records_collection: FakeCollection([
                {"id": "rec-1", "equipment_id": "eq-1", "maintenance_type": "preventive",
                 "actual_date": datetime(2025, 5, 1, 14, 30, tzinfo=timezone.utc),
                 "next_service_date": datetime(2025, 8, 1, 0, 0, tzinfo=timezone.utc)},
            ]),
        })

    def test_timestamps_become_calendar_days(self, settings):
        store = MongoMaintenanceStore(self._client(settings), settings)

        record = store.records("eq-1", date(2024, 6, 15))[0]
        assert record.actual_date == date(2025, 5, 1)
        assert record.next_service_date == date(2025, 8, 1)
        assert store.schedules("eq-1")[0].next_due_date == date(2025, 7, 1)

    def test_rollup_over_mongo_records(self, settings, clock):
        store = MongoMaintenanceStore(self._client(settings), settings)
        locator = MaintenanceLocator(store, settings=settings, clock=clock)

        rollups = locator.rollups(ORG, NOW)

        assert len(rollups) == 1
        assert rollups[0].preventive_count == 1
        assert rollups[0].last_maintenance_date == date(2025, 5, 1)


class TestMongoClient:
    def test_driver_timeouts_follow_locator_timeout(self, settings):
        options = MongoClient(settings).client_options()
        assert options["socketTimeoutMS"] == 500
        assert options["connectTimeoutMS"] == 500
        assert options["serverSelectionTimeoutMS"] == 500
        assert options["tz_aware"] is True
