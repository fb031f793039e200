"""Persistence — record-store adapters, score repository, MongoClient."""

from audit_readiness.persistence.memory_stores import (
    InMemoryDocumentStore,
    InMemoryFormStore,
    InMemoryMaintenanceStore,
)
from audit_readiness.persistence.mongo_client import MongoClient
from audit_readiness.persistence.score_repository import (
    InMemoryScoreRepository,
    MongoScoreRepository,
    ScoreRepository,
)
from audit_readiness.persistence.stores import DocumentStore, FormStore, MaintenanceStore

__all__ = [
    "InMemoryDocumentStore",
    "InMemoryFormStore",
    "InMemoryMaintenanceStore",
    "MongoClient",
    "InMemoryScoreRepository",
    "MongoScoreRepository",
    "ScoreRepository",
    "DocumentStore",
    "FormStore",
    "MaintenanceStore",
]
