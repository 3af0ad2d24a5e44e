"""Core data model and the per-session engine.

The engine sits between raw sample windows handed in by a capture
collaborator and the consumers of feature records (classifier,
steganography codec, voiceprint store).
"""

from .errors import DimensionMismatch, InsufficientData, ResonanceError
from .history import FeatureHistory
from .models import (
    CognitiveState,
    CymaticCircle,
    EvolutionEntry,
    FeatureRecord,
    HarmonicMatrix,
    Sentiment,
)
from .engine import ResonanceEngine

__all__ = [
    "CognitiveState",
    "CymaticCircle",
    "DimensionMismatch",
    "EvolutionEntry",
    "FeatureHistory",
    "FeatureRecord",
    "HarmonicMatrix",
    "InsufficientData",
    "ResonanceEngine",
    "ResonanceError",
    "Sentiment",
]
