"""
Element definitions — names, weights, declared max points, lookback windows.

The declared max is the single canonical total for each element and is shared
by every scoring profile. It is set independently of the requirement point
values, so a catalog may be a partial rubric at any time.
"""

from __future__ import annotations

from audit_readiness.models.enums import ElementNumber
from audit_readiness.models.schemas import ElementDefinition

DEFAULT_LOOKBACK_DAYS = 365
SHORT_LOOKBACK_DAYS = 90  # daily/weekly field activity is judged on the last quarter


def _define(number: ElementNumber, name: str, weight: float, max_points: int,
            lookback_days: int = DEFAULT_LOOKBACK_DAYS) -> ElementDefinition:
    return ElementDefinition(
        number=int(number),
        name=name,
        weight=weight,
        max_points=max_points,
        lookback_days=lookback_days,
    )


ELEMENTS: dict[int, ElementDefinition] = {
    d.number: d
    for d in (
        _define(ElementNumber.MANAGEMENT_SYSTEM, "Health & Safety Management System", 1.2, 50),
        _define(ElementNumber.HAZARD_IDENTIFICATION, "Hazard Identification & Assessment", 1.2, 50,
                SHORT_LOOKBACK_DAYS),
        _define(ElementNumber.HAZARD_CONTROL, "Hazard Control", 1.2, 50),
        _define(ElementNumber.COMPETENCY_TRAINING, "Competency & Training", 1.1, 50),
        _define(ElementNumber.WORKPLACE_BEHAVIOR, "Workplace Behavior", 1.0, 45),
        _define(ElementNumber.PPE, "Personal Protective Equipment", 1.0, 45),
        _define(ElementNumber.PREVENTATIVE_MAINTENANCE, "Preventative Maintenance", 1.0, 45),
        _define(ElementNumber.TRAINING_COMMUNICATION, "Training & Communication", 1.0, 50),
        _define(ElementNumber.WORKPLACE_INSPECTIONS, "Workplace Inspections", 1.0, 50,
                SHORT_LOOKBACK_DAYS),
        _define(ElementNumber.INCIDENT_INVESTIGATION, "Incident Investigation", 1.1, 50),
        _define(ElementNumber.EMERGENCY_PREPAREDNESS, "Emergency Preparedness", 1.1, 50),
        _define(ElementNumber.STATISTICS_RECORDS, "Statistics & Records", 1.0, 45),
        _define(ElementNumber.REGULATORY_AWARENESS, "Regulatory Awareness", 1.0, 45),
        _define(ElementNumber.MANAGEMENT_REVIEW, "Management System Review", 1.0, 50),
    )
}

ELEMENT_WEIGHTS: dict[int, float] = {number: d.weight for number, d in ELEMENTS.items()}


def to_element(element_number: int) -> ElementNumber | None:
    """Narrow an arbitrary integer to the closed 1–14 range, or None."""
    try:
        return ElementNumber(element_number)
    except ValueError:
        return None


def element_definition(element_number: int) -> ElementDefinition | None:
    element = to_element(element_number)
    return ELEMENTS[element] if element is not None else None


def element_name(element_number: int) -> str:
    definition = element_definition(element_number)
    return definition.name if definition else f"Element {element_number}"


def element_weight(element_number: int) -> float:
    definition = element_definition(element_number)
    return definition.weight if definition else 1.0


def max_points_for(element_number: int) -> int:
    """Canonical declared max; 0 for an element that is not defined."""
    definition = element_definition(element_number)
    return definition.max_points if definition else 0


def lookback_days_for(element_number: int) -> int:
    definition = element_definition(element_number)
    return definition.lookback_days if definition else DEFAULT_LOOKBACK_DAYS
