"""Services — ReadinessService, ScoreCache, ExportService."""

from audit_readiness.services.export_service import ExportService
from audit_readiness.services.readiness_service import ReadinessService, RecordStores, build_stores
from audit_readiness.services.score_cache import ScoreCache

__all__ = ["ExportService", "ReadinessService", "RecordStores", "build_stores", "ScoreCache"]
