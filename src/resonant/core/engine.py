"""Per-session orchestrator tying analysis, history and consumers together."""

from __future__ import annotations

import logging
from collections import Counter, deque
from typing import Deque, Dict, List, Optional, Sequence, Tuple

from numpy.typing import ArrayLike

from ..analysis.coherence import coherence
from ..analysis.cognitive import classify
from ..analysis.patterns import determine_phase, generate_structures
from ..analysis.rate import Clock, ProcessingThrottle
from ..analysis.spectrum import SpectralAnalyzer
from ..config.runtime import EngineConfig
from ..security import steganography
from ..security.voiceprint import VoiceprintStore
from ..tools.debug import time_block
from .history import FeatureHistory
from .models import CognitiveState, EvolutionEntry, FeatureRecord, Structure, SystemPhase

logger = logging.getLogger(__name__)


class ResonanceEngine:
    """
    Owns all mutable state of one capture session.

    History, spectral cache, throttle and voiceprint live on the instance;
    nothing is shared between engines. The engine is not thread-safe:
    concurrent callers must serialize access themselves.
    """

    def __init__(self, config: EngineConfig | None = None, *, clock: Clock | None = None) -> None:
        self.config = (config or EngineConfig()).sanitized()
        self.analyzer = SpectralAnalyzer(self.config)
        self.history = FeatureHistory(self.config.history_size)
        self.throttle: ProcessingThrottle[FeatureRecord] = ProcessingThrottle(
            self.config.min_interval_s, clock=clock
        )
        self.voiceprints = VoiceprintStore(
            min_records=self.config.min_voiceprint_records,
            threshold=self.config.voiceprint_threshold,
        )
        self._evolution: Deque[EvolutionEntry] = deque(maxlen=self.config.evolution_size)
        self._phase: SystemPhase = "void"
        logger.info(
            "ResonanceEngine ready: %.0f Hz, %d-sample windows, history %d",
            self.config.sample_rate_hz,
            self.config.window_size,
            self.config.history_size,
        )

    # -------------------------------------------------------------- pipeline
    def process(self, window: ArrayLike) -> FeatureRecord:
        """
        Analyze one sample window and append the result to history.

        Calls arriving within ``min_interval_s`` of the last computation
        return that same record without touching history.
        """
        now = self.throttle.now()
        if not self.throttle.admit(now):
            cached = self.throttle.last
            assert cached is not None
            logger.debug("Throttled process() call; reusing record from %.3f", cached.timestamp)
            return cached

        cfg = self.config
        with time_block("spectral analysis"):
            features = self.analyzer.extract(window)

        amplitude = max(features.amplitude, features.signal_rms * cfg.amplitude_floor_ratio)
        draft = FeatureRecord(
            frequency=features.frequency,
            amplitude=amplitude,
            harmonics=features.harmonics,
            phase=features.phase,
            coherence=0.0,
            timestamp=now,
        )
        score = coherence(
            draft,
            self.history.snapshot(),
            window=cfg.coherence_window,
            min_history=cfg.min_coherence_history,
            tolerance_hz=cfg.harmonic_tolerance_hz,
        )
        record = FeatureRecord(
            frequency=draft.frequency,
            amplitude=draft.amplitude,
            harmonics=draft.harmonics,
            phase=draft.phase,
            coherence=score,
            timestamp=now,
        )
        logger.debug(
            "Window -> f=%.1f Hz, a=%.4f, %d harmonics, coherence=%.3f",
            record.frequency,
            record.amplitude,
            len(record.harmonics),
            record.coherence,
        )
        self._append(record)
        return self.throttle.store(record, now)

    def ingest(self, record: FeatureRecord) -> FeatureRecord:
        """Append an externally produced record (synthetic sources, gestures)."""
        self._append(record)
        return record

    def _append(self, record: FeatureRecord) -> None:
        # Phase is judged on the history before the new record joins it
        previous = self._phase
        self._phase = determine_phase(self.history.snapshot())
        self.history.append(record)
        self._evolution.append(
            EvolutionEntry(
                timestamp=record.timestamp,
                phase=previous,
                frequency=record.frequency,
                coherence=record.coherence,
            )
        )

    # ------------------------------------------------------------- consumers
    @property
    def latest(self) -> Optional[FeatureRecord]:
        return self.history.latest

    @property
    def phase(self) -> SystemPhase:
        return self._phase

    def classify(self, record: FeatureRecord | None = None) -> Optional[CognitiveState]:
        """Classify ``record`` (default: the latest one) against current history."""
        target = record if record is not None else self.history.latest
        if target is None:
            return None
        return classify(target, self.history.snapshot())

    def structures(self, record: FeatureRecord | None = None) -> List[Structure]:
        target = record if record is not None else self.history.latest
        if target is None:
            return []
        return generate_structures(target)

    def evolution(self) -> Tuple[EvolutionEntry, ...]:
        return tuple(self._evolution)

    def phase_distribution(self) -> Dict[str, int]:
        counts = Counter(entry.phase for entry in self._evolution)
        return {phase: counts.get(phase, 0) for phase in ("void", "emergence", "coherence", "phase-lock")}

    def embed(
        self,
        message: str,
        records: Sequence[FeatureRecord] | None = None,
        *,
        terminate: bool = False,
    ) -> List[FeatureRecord]:
        """Hide ``message`` in ``records`` (default: a snapshot of history)."""
        source = self.history.snapshot() if records is None else records
        return steganography.embed(message, source, terminate=terminate)

    def extract(self, records: Sequence[FeatureRecord], length: int | None = None) -> str:
        return steganography.extract(records, length)

    def enroll(self, records: Sequence[FeatureRecord] | None = None) -> None:
        self.voiceprints.enroll(self.history.snapshot() if records is None else records)

    def authenticate(self, records: Sequence[FeatureRecord] | None = None) -> bool:
        return self.voiceprints.authenticate(self.history.snapshot() if records is None else records)
