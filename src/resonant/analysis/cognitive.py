"""Map feature records to an emotional/mental state pair and a sentiment."""

from __future__ import annotations

from functools import lru_cache
from typing import Sequence

import numpy as np
from scipy.stats import variation
from vaderSentiment.vaderSentiment import SentimentIntensityAnalyzer

from ..core.models import (
    CognitiveState,
    EmotionalState,
    FeatureRecord,
    MentalState,
    Sentiment,
    SentimentLabel,
)

PITCH_WINDOW = 5


@lru_cache(maxsize=1)
def _sentiment_analyzer() -> SentimentIntensityAnalyzer:
    return SentimentIntensityAnalyzer()


def is_breathing(record: FeatureRecord) -> bool:
    return record.frequency < 150.0 and record.coherence > 0.6


def is_voice(record: FeatureRecord) -> bool:
    return 250.0 < record.frequency < 3000.0 and len(record.harmonics) > 2


def pitch_variation(history: Sequence[FeatureRecord], window: int = PITCH_WINDOW) -> float:
    """Coefficient of variation of the last ``window`` historical frequencies."""
    freqs = np.array([r.frequency for r in list(history)[-window:]], dtype=float)
    if freqs.size < 2 or np.mean(freqs) == 0.0:
        return 0.0
    return float(variation(freqs))


def emotional_state(record: FeatureRecord, history: Sequence[FeatureRecord]) -> EmotionalState:
    amplitude = record.amplitude
    coherence = record.coherence
    if is_breathing(record):
        breathing_rate = record.frequency / 60.0
        if breathing_rate > 20.0:
            return "agitated"
        if amplitude > 0.6:
            return "agitated"
        if coherence > 0.8:
            return "calm"
        return "distracted"
    if is_voice(record):
        if pitch_variation(history) > 0.5 and amplitude > 0.6:
            return "agitated"
        if coherence > 0.7:
            return "focused"
        return "distracted"
    if amplitude > 0.5:
        return "focused" if coherence > 0.7 else "agitated"
    return "distracted" if coherence < 0.3 else "calm"


def mental_state(record: FeatureRecord) -> MentalState:
    coherence = record.coherence
    complexity = len(record.harmonics) * coherence
    if complexity > 4.0:
        return "analytical"
    if coherence < 0.2:
        return "resistant"
    if is_breathing(record) and coherence > 0.8:
        return "receptive"
    if record.frequency > 1000.0:
        return "analytical"
    return "suggestible"


def synthesize_text(record: FeatureRecord) -> str:
    """
    Short descriptive phrase built from the rounded record values.

    Only the coherence and amplitude bands contribute polar words; the
    frequency token is neutral.
    """
    frequency = int(round(record.frequency))
    amplitude = round(record.amplitude, 1)
    coherence = round(record.coherence, 1)

    words = [f"{frequency}hz"]
    if coherence >= 0.7:
        words.append("calm")
    elif coherence < 0.3:
        words.append("confused")
    else:
        words.append("tone")
    if amplitude > 0.6:
        words.append("stressed")
    else:
        words.append("signal")
    return " ".join(words)


def sentiment_of(text: str) -> Sentiment:
    score = float(_sentiment_analyzer().polarity_scores(text)["compound"])
    label: SentimentLabel
    if score > 0:
        label = "positive"
    elif score < 0:
        label = "negative"
    else:
        label = "neutral"
    return Sentiment(score=score, label=label)


def classify(record: FeatureRecord, history: Sequence[FeatureRecord] = ()) -> CognitiveState:
    """
    Infer a :class:`CognitiveState` from ``record`` and recent ``history``.

    Pure function: neither argument is modified.
    """
    return CognitiveState(
        emotional_state=emotional_state(record, history),
        mental_state=mental_state(record),
        sentiment=sentiment_of(synthesize_text(record)),
    )
