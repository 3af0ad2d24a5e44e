from .synthetic import (
    SIGNAL_BANDS,
    SignalData,
    SignalType,
    generate_signal,
    record_from_gesture,
    record_from_signal,
    sine_window,
)

__all__ = [
    "SIGNAL_BANDS",
    "SignalData",
    "SignalType",
    "generate_signal",
    "record_from_gesture",
    "record_from_signal",
    "sine_window",
]
