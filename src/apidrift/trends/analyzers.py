"""
Trend analyzers.

Pure classifiers over per-run series, all ordered oldest to newest.
"""

from __future__ import annotations

from typing import Sequence

from apidrift.types import ConfidenceTrend, FrequencyBand, Stability

MIN_TREND_POINTS = 3
DIRECTIONAL_DOMINANCE = 0.7
STABLE_PRESENCE_RATE = 0.8
RECENT_RUNS = 3


def calculate_frequency_band(avg_percentage: float) -> FrequencyBand:
    """Band an average occurrence percentage.

    Thresholds are strict except the ``intermittent`` floor, which
    includes 10 exactly.
    """
    if avg_percentage > 80:
        return FrequencyBand.DOMINANT
    if avg_percentage > 40:
        return FrequencyBand.COMMON
    if avg_percentage >= 10:
        return FrequencyBand.INTERMITTENT
    return FrequencyBand.RARE


def calculate_confidence_trend(sample_counts: Sequence[int]) -> ConfidenceTrend:
    """Direction of a sample-count series.

    ``stable`` is the fallback whenever neither direction dominates, not
    only when the counts are flat.
    """
    if len(sample_counts) < MIN_TREND_POINTS:
        return ConfidenceTrend.INSUFFICIENT_DATA

    steps = list(zip(sample_counts, sample_counts[1:]))
    increasing = sum(1 for before, after in steps if after > before)
    decreasing = sum(1 for before, after in steps if after < before)

    if increasing / len(steps) > DIRECTIONAL_DOMINANCE:
        return ConfidenceTrend.STRENGTHENING
    if decreasing / len(steps) > DIRECTIONAL_DOMINANCE:
        return ConfidenceTrend.WEAKENING
    return ConfidenceTrend.STABLE


def assess_stability(presence: Sequence[bool]) -> Stability:
    """Classify a presence-per-run series."""
    if len(presence) < MIN_TREND_POINTS:
        return Stability.EMERGING

    rate = sum(1 for present in presence if present) / len(presence)
    if rate > STABLE_PRESENCE_RATE:
        return Stability.STABLE

    older = presence[:-RECENT_RUNS]
    recent = presence[-RECENT_RUNS:]
    if not any(older) and any(recent):
        return Stability.EMERGING

    return Stability.VOLATILE
