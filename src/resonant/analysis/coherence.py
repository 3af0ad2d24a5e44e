"""Temporal coherence: how stable recent feature records have been."""

from __future__ import annotations

import math
from typing import Sequence

from ..core.models import FeatureRecord
from .features import variance

DEFAULT_TOLERANCE_HZ = 50.0


def harmonic_similarity(
    candidate: Sequence[float],
    reference: Sequence[float],
    *,
    tolerance_hz: float = DEFAULT_TOLERANCE_HZ,
) -> float:
    """Fraction of ``candidate`` harmonics with a match in ``reference`` within tolerance."""
    if not candidate or not reference:
        return 0.0
    matches = sum(
        1 for h1 in candidate if any(abs(h1 - h2) < tolerance_hz for h2 in reference)
    )
    return matches / len(candidate)


def harmonic_consistency(
    candidate: Sequence[float],
    history: Sequence[FeatureRecord],
    *,
    tolerance_hz: float = DEFAULT_TOLERANCE_HZ,
) -> float:
    """Mean :func:`harmonic_similarity` over history entries that have harmonics."""
    if not candidate:
        return 0.0
    scores = [
        harmonic_similarity(candidate, record.harmonics, tolerance_hz=tolerance_hz)
        for record in history
        if record.harmonics
    ]
    if not scores:
        return 0.0
    return sum(scores) / len(scores)


def coherence(
    candidate: FeatureRecord,
    history: Sequence[FeatureRecord],
    *,
    window: int = 5,
    min_history: int = 3,
    tolerance_hz: float = DEFAULT_TOLERANCE_HZ,
) -> float:
    """
    Composite 0..1 stability score of ``candidate`` against ``history``.

    Returns ``0.0`` while ``history`` holds fewer than ``min_history``
    records. Otherwise averages, over the last ``window`` records:

    * frequency stability ``exp(-var(f) / 1000)``
    * amplitude stability ``exp(-var(a))``
    * harmonic consistency of the candidate's harmonics
    """
    if len(history) < min_history:
        return 0.0
    recent = list(history)[-window:]
    freq_stability = math.exp(-variance(r.frequency for r in recent) / 1000.0)
    amp_stability = math.exp(-variance(r.amplitude for r in recent))
    consistency = harmonic_consistency(candidate.harmonics, recent, tolerance_hz=tolerance_hz)
    score = (freq_stability + amp_stability + consistency) / 3.0
    return min(1.0, max(0.0, score))
