"""Cross-run trend classification."""

from apidrift.trends.analyzers import (
    assess_stability,
    calculate_confidence_trend,
    calculate_frequency_band,
)
from apidrift.trends.builder import build_trends

__all__ = [
    "assess_stability",
    "build_trends",
    "calculate_confidence_trend",
    "calculate_frequency_band",
]
