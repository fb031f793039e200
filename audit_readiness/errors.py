"""
Error taxonomy for the scoring core.

Only two conditions are raised as exceptions. Both are caught inside the
package and turned into degraded results, never propagated to callers:

  StoreUnavailable   → raised by a record-store adapter; the locator treats
                       the affected strategy as zero evidence.
  CacheWriteFailure  → raised by a score repository; the cache logs it and
                       the freshly computed score is still returned.

Missing categories and unknown elements are not errors: they surface as a
critical Gap and as empty results respectively.
"""

from __future__ import annotations


class AuditReadinessError(Exception):
    """Base class for errors raised by this package."""


class StoreUnavailable(AuditReadinessError, RuntimeError):
    """A backing record store could not be queried."""

    def __init__(self, store: str, detail: str = ""):
        self.store = store
        self.detail = detail
        message = f"{store} store unavailable"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class CacheWriteFailure(AuditReadinessError, RuntimeError):
    """The score cache slot could not be written."""

    def __init__(self, organization_id: str, detail: str = ""):
        self.organization_id = organization_id
        self.detail = detail
        super().__init__(f"Failed to cache score for {organization_id}: {detail}")
