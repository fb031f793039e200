"""Catalog — fixed per-element rubric definitions."""

from audit_readiness.catalog.elements import (
    ELEMENT_WEIGHTS,
    element_definition,
    element_name,
    element_weight,
    max_points_for,
)
from audit_readiness.catalog.requirements import all_requirements, requirements_for
from audit_readiness.catalog.document_requirements import document_requirements_for
from audit_readiness.catalog.maintenance_requirements import maintenance_requirements_for

__all__ = [
    "ELEMENT_WEIGHTS",
    "element_definition",
    "element_name",
    "element_weight",
    "max_points_for",
    "all_requirements",
    "requirements_for",
    "document_requirements_for",
    "maintenance_requirements_for",
]
