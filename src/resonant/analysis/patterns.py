"""Higher-level readings of the feature stream: phase, geometry, labels."""

from __future__ import annotations

import math
from typing import List, Sequence

from ..core.models import (
    CognitiveState,
    CymaticCircle,
    FeatureRecord,
    HarmonicMatrix,
    Structure,
    SystemPhase,
)


def determine_phase(history: Sequence[FeatureRecord]) -> SystemPhase:
    """Classify the session by the mean coherence of the last three records."""
    if len(history) < 3:
        return "void"
    recent = list(history)[-3:]
    average = sum(r.coherence for r in recent) / 3.0
    if average > 0.8:
        return "phase-lock"
    if average > 0.6:
        return "coherence"
    if average > 0.3:
        return "emergence"
    return "void"


def generate_structures(record: FeatureRecord) -> List[Structure]:
    structures: List[Structure] = []
    frequency = record.frequency
    amplitude = record.amplitude

    if frequency > 100.0 and amplitude > 0.1:
        structures.append(
            CymaticCircle(
                frequency=frequency,
                amplitude=amplitude,
                coherence=record.coherence,
                sides=int(math.floor(frequency / 100.0)) % 12 + 3,
                radius=amplitude * 100.0,
                rotation=math.radians(frequency % 360.0),
            )
        )

    harmonics = record.harmonics
    if len(harmonics) > 2 and record.coherence > 0.5:
        base = harmonics[0]
        structures.append(
            HarmonicMatrix(
                coherence=record.coherence,
                frequencies=harmonics,
                phase_relationships=tuple(h / base * math.pi for h in harmonics),
            )
        )
    return structures


def describe_state(state: CognitiveState, record: FeatureRecord) -> str:
    """Human-readable label for a classified state."""
    breathing = record.frequency < 150.0 and record.coherence > 0.6
    voice = 250.0 < record.frequency < 3000.0

    emotional = state.emotional_state
    if emotional == "agitated":
        if breathing:
            return "Your Stress Pattern"
        if voice:
            return "Anxious Energy Flow"
        return "High Intensity State"
    if emotional == "calm":
        if breathing:
            return "Deep Relaxation"
        if record.coherence > 0.8:
            return "Perfect Balance"
        return "Peaceful Mind"
    if emotional == "focused":
        if state.mental_state == "analytical":
            return "Thoughts Aligning"
        return "Focused Resonance"
    if emotional == "distracted":
        return "Scattered Energy"
    return "Your Inner Pattern"
