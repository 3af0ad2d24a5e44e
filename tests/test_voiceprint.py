from __future__ import annotations

from dataclasses import replace

import numpy as np
import pytest

from resonant.core.errors import DimensionMismatch, InsufficientData, ResonanceError
from resonant.core.models import FeatureRecord
from resonant.security.voiceprint import VoiceprintStore, flatten


def _records(count: int = 5) -> list[FeatureRecord]:
    return [
        FeatureRecord(frequency=300.0 + 10 * i, amplitude=0.2, coherence=0.6, timestamp=float(i))
        for i in range(count)
    ]


def test_flatten_interleaves_frequency_amplitude_coherence() -> None:
    vector = flatten(_records(2))

    np.testing.assert_allclose(vector, [300.0, 0.2, 0.6, 310.0, 0.2, 0.6])


def test_authenticate_after_enroll_on_same_records() -> None:
    store = VoiceprintStore()
    records = _records()
    store.enroll(records)

    assert store.enrolled
    assert store.authenticate(records)


def test_shifted_frequencies_are_rejected() -> None:
    store = VoiceprintStore()
    records = _records()
    store.enroll(records)

    shifted = [replace(r, frequency=r.frequency + 1001.0) for r in records]

    assert not store.authenticate(shifted)


@pytest.mark.parametrize("count", [0, 1, 4])
def test_enroll_with_too_few_records_keeps_existing_voiceprint(count: int) -> None:
    store = VoiceprintStore()
    records = _records()
    store.enroll(records)

    with pytest.raises(InsufficientData) as excinfo:
        store.enroll(_records(count))

    assert excinfo.value.required == 5
    assert excinfo.value.actual == count
    assert store.authenticate(records)


def test_authenticate_with_too_few_records_signals_insufficient_data() -> None:
    store = VoiceprintStore()
    with pytest.raises(InsufficientData):
        store.authenticate(_records(4))

    store.enroll(_records())
    with pytest.raises(InsufficientData):
        store.authenticate(_records(4))


def test_authenticate_without_enrollment_is_negative() -> None:
    assert VoiceprintStore().authenticate(_records()) is False


def test_length_mismatch_is_explicit() -> None:
    store = VoiceprintStore()
    store.enroll(_records(5))

    with pytest.raises(DimensionMismatch) as excinfo:
        store.authenticate(_records(6))

    assert excinfo.value.expected == 15
    assert excinfo.value.actual == 18


def test_errors_share_a_value_error_base() -> None:
    assert issubclass(InsufficientData, ResonanceError)
    assert issubclass(DimensionMismatch, ValueError)


def test_reenrollment_overwrites() -> None:
    store = VoiceprintStore()
    first = _records()
    second = [replace(r, frequency=r.frequency + 5000.0) for r in first]
    store.enroll(first)
    store.enroll(second)

    assert store.authenticate(second)
    assert not store.authenticate(first)
