from __future__ import annotations

import math

import pytest

from resonant.analysis.patterns import describe_state, determine_phase, generate_structures
from resonant.core.models import (
    CognitiveState,
    CymaticCircle,
    FeatureRecord,
    HarmonicMatrix,
    Sentiment,
)


def _with_coherence(*values: float) -> list[FeatureRecord]:
    return [FeatureRecord(frequency=440.0, amplitude=0.2, coherence=v) for v in values]


@pytest.mark.parametrize(
    "coherences, phase",
    [
        ((0.9, 0.9), "void"),
        ((0.9, 0.85, 0.9), "phase-lock"),
        ((0.0, 0.7, 0.7, 0.7), "coherence"),
        ((0.4, 0.4, 0.4), "emergence"),
        ((0.1, 0.2, 0.3), "void"),
    ],
)
def test_determine_phase(coherences, phase) -> None:
    assert determine_phase(_with_coherence(*coherences)) == phase


def test_structures_for_loud_rich_record() -> None:
    record = FeatureRecord(
        frequency=450.0,
        amplitude=0.3,
        harmonics=(900.0, 1350.0, 1800.0),
        coherence=0.8,
    )

    circle, matrix = generate_structures(record)

    assert isinstance(circle, CymaticCircle)
    assert circle.sides == 7
    assert circle.radius == pytest.approx(30.0)
    assert circle.rotation == pytest.approx(math.radians(90.0))
    assert isinstance(matrix, HarmonicMatrix)
    assert matrix.layers == 3
    assert matrix.phase_relationships == pytest.approx((math.pi, 1.5 * math.pi, 2.0 * math.pi))


def test_quiet_record_has_no_structures() -> None:
    assert generate_structures(FeatureRecord(frequency=80.0, amplitude=0.05)) == []


@pytest.mark.parametrize(
    "emotional, mental, frequency, coherence, label",
    [
        ("agitated", "resistant", 100.0, 0.7, "Your Stress Pattern"),
        ("agitated", "resistant", 440.0, 0.1, "Anxious Energy Flow"),
        ("agitated", "resistant", 5000.0, 0.1, "High Intensity State"),
        ("calm", "receptive", 100.0, 0.9, "Deep Relaxation"),
        ("calm", "suggestible", 440.0, 0.9, "Perfect Balance"),
        ("calm", "suggestible", 440.0, 0.5, "Peaceful Mind"),
        ("focused", "analytical", 440.0, 0.8, "Thoughts Aligning"),
        ("focused", "suggestible", 440.0, 0.8, "Focused Resonance"),
        ("distracted", "suggestible", 440.0, 0.2, "Scattered Energy"),
    ],
)
def test_describe_state(emotional, mental, frequency, coherence, label) -> None:
    state = CognitiveState(
        emotional_state=emotional,
        mental_state=mental,
        sentiment=Sentiment(score=0.0, label="neutral"),
    )
    record = FeatureRecord(frequency=frequency, amplitude=0.2, coherence=coherence)

    assert describe_state(state, record) == label
