"""
Voiceprint enrollment and authentication.

A voiceprint is the flattened ``(frequency, amplitude, coherence)`` triples
of the enrolled records. Authentication flattens the candidate records the
same way and accepts when the Euclidean distance is below a fixed,
unnormalized threshold. This is a toy matcher, not a biometric.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

import numpy as np
from scipy.spatial.distance import euclidean

from ..core.errors import DimensionMismatch, InsufficientData
from ..core.models import FeatureRecord

logger = logging.getLogger(__name__)

MIN_RECORDS = 5
DEFAULT_THRESHOLD = 1000.0


def flatten(records: Sequence[FeatureRecord]) -> np.ndarray:
    """Concatenate ``(frequency, amplitude, coherence)`` of every record."""
    return np.array(
        [value for r in records for value in (r.frequency, r.amplitude, r.coherence)],
        dtype=float,
    )


class VoiceprintStore:
    """Holds at most one enrolled voiceprint."""

    def __init__(
        self,
        *,
        min_records: int = MIN_RECORDS,
        threshold: float = DEFAULT_THRESHOLD,
    ) -> None:
        self.min_records = int(min_records)
        self.threshold = float(threshold)
        self._voiceprint: Optional[np.ndarray] = None

    @property
    def enrolled(self) -> bool:
        return self._voiceprint is not None

    def _require(self, records: Sequence[FeatureRecord]) -> None:
        if len(records) < self.min_records:
            raise InsufficientData(self.min_records, len(records))

    def enroll(self, records: Sequence[FeatureRecord]) -> None:
        """Store a new voiceprint, replacing any previous enrollment."""
        self._require(records)
        self._voiceprint = flatten(records)
        logger.info("Enrolled voiceprint from %d records", len(records))

    def distance(self, records: Sequence[FeatureRecord]) -> float:
        if self._voiceprint is None:
            raise ValueError("no voiceprint enrolled")
        self._require(records)
        candidate = flatten(records)
        if candidate.size != self._voiceprint.size:
            raise DimensionMismatch(self._voiceprint.size, candidate.size)
        return float(euclidean(self._voiceprint, candidate))

    def authenticate(self, records: Sequence[FeatureRecord]) -> bool:
        """
        Compare ``records`` against the enrolled voiceprint.

        Raises :class:`InsufficientData` for too few records, even before
        enrollment. Returns False when nothing is enrolled. Raises
        :class:`DimensionMismatch` when the record count differs from the
        enrollment.
        """
        self._require(records)
        if self._voiceprint is None:
            logger.info("Authentication attempted without an enrolled voiceprint")
            return False
        dist = self.distance(records)
        accepted = dist < self.threshold
        logger.info("Voiceprint distance %.3f -> %s", dist, "accepted" if accepted else "rejected")
        return accepted
