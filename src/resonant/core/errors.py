"""Error taxonomy for enrollment, authentication and analysis."""

from __future__ import annotations


class ResonanceError(ValueError):
    """Base class for errors raised by the resonance engine."""


class InsufficientData(ResonanceError):
    """Raised when fewer records are supplied than an operation requires."""

    def __init__(self, required: int, actual: int, what: str = "records") -> None:
        self.required = int(required)
        self.actual = int(actual)
        super().__init__(f"need at least {self.required} {what}, got {self.actual}")


class DimensionMismatch(ResonanceError):
    """Raised when a candidate feature vector differs in length from the reference."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = int(expected)
        self.actual = int(actual)
        super().__init__(
            f"feature vector length {self.actual} does not match voiceprint length {self.expected}"
        )


__all__ = ["ResonanceError", "InsufficientData", "DimensionMismatch"]
