"""COR audit readiness — evidence-based scoring across the fourteen audit elements."""

__version__ = "0.1.0"
