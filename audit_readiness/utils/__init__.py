from .logger import setup_logging
from .rounding import clamp_percentage, round_half_up, round_one_decimal

__all__ = ["setup_logging", "round_half_up", "round_one_decimal", "clamp_percentage"]
