"""Shared dataclasses for feature records and derived states."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Literal, Mapping, Tuple

EmotionalState = Literal["calm", "agitated", "focused", "distracted"]
MentalState = Literal["receptive", "resistant", "suggestible", "analytical"]
SentimentLabel = Literal["positive", "negative", "neutral"]
SystemPhase = Literal["void", "emergence", "coherence", "phase-lock"]


@dataclass(frozen=True, slots=True)
class FeatureRecord:
    """
    Structured output of one analysis cycle.

    ``harmonics`` holds the frequencies (Hz) of the 2x..6x multiples of the
    fundamental that cleared the relative magnitude threshold, in harmonic
    order. ``timestamp`` is a monotonic instant in seconds.
    """

    frequency: float
    amplitude: float
    harmonics: Tuple[float, ...] = ()
    phase: float = 0.0
    coherence: float = 0.0
    timestamp: float = 0.0

    def __post_init__(self) -> None:
        # Accept any iterable of harmonics but store an immutable tuple
        object.__setattr__(self, "harmonics", tuple(float(h) for h in self.harmonics))

    def to_mapping(self) -> dict:
        data = asdict(self)
        data["harmonics"] = list(self.harmonics)
        return data

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "FeatureRecord":
        return cls(
            frequency=float(mapping["frequency"]),
            amplitude=float(mapping["amplitude"]),
            harmonics=tuple(mapping.get("harmonics", ())),
            phase=float(mapping.get("phase", 0.0)),
            coherence=float(mapping.get("coherence", 0.0)),
            timestamp=float(mapping.get("timestamp", 0.0)),
        )


@dataclass(frozen=True, slots=True)
class Sentiment:
    score: float
    label: SentimentLabel


@dataclass(frozen=True, slots=True)
class CognitiveState:
    """Emotional/mental state pair inferred from one feature record."""

    emotional_state: EmotionalState
    mental_state: MentalState
    sentiment: Sentiment


@dataclass(frozen=True, slots=True)
class EvolutionEntry:
    timestamp: float
    phase: SystemPhase
    frequency: float
    coherence: float


@dataclass(frozen=True, slots=True)
class CymaticCircle:
    frequency: float
    amplitude: float
    coherence: float
    sides: int
    radius: float
    rotation: float
    kind: str = field(default="cymatic-circle", init=False)


@dataclass(frozen=True, slots=True)
class HarmonicMatrix:
    coherence: float
    frequencies: Tuple[float, ...]
    phase_relationships: Tuple[float, ...]
    kind: str = field(default="harmonic-matrix", init=False)

    @property
    def layers(self) -> int:
        return len(self.frequencies)


Structure = CymaticCircle | HarmonicMatrix
