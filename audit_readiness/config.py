"""
Application configuration using Pydantic Settings.
All environment-specific values are centralized here.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # ── App ──────────────────────────────────────────────
    app_name: str = "COR Audit Readiness"
    debug: bool = True
    mock_mode: bool = True  # When True, stores are in-memory and seeded with demo data
    timezone: str = "America/Toronto"  # calendar-day boundary for the score cache

    # ── MongoDB ──────────────────────────────────────────
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_database: str = "audit_readiness"
    score_cache_collection: str = "audit_score_cache"
    form_templates_collection: str = "form_templates"
    form_submissions_collection: str = "form_submissions"
    documents_collection: str = "documents"
    document_folders_collection: str = "document_folders"
    equipment_collection: str = "equipment_inventory"
    maintenance_schedules_collection: str = "maintenance_schedules"
    maintenance_records_collection: str = "maintenance_records"
    maintenance_attachments_collection: str = "maintenance_attachments"

    # ── Evidence Locators ────────────────────────────────
    locator_concurrency: int = 8
    locator_timeout_seconds: float = 10.0
    locator_max_retries: int = 1
    locator_retry_backoff_seconds: float = 0.25
    evidence_sample_limit: int = 5

    # ── Readiness ────────────────────────────────────────
    remediation_hours_per_week: float = 10.0
    readiness_threshold: float = 80.0

    # ── Logging ──────────────────────────────────────────
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings (singleton)."""
    return Settings()
