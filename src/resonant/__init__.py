"""Feature extraction, state classification, and record-level codecs for short signal windows."""

from .config import EngineConfig, load_config
from .core import (
    CognitiveState,
    DimensionMismatch,
    FeatureRecord,
    InsufficientData,
    ResonanceEngine,
)

__version__ = "0.1.0"

__all__ = [
    "CognitiveState",
    "DimensionMismatch",
    "EngineConfig",
    "FeatureRecord",
    "InsufficientData",
    "ResonanceEngine",
    "load_config",
]
