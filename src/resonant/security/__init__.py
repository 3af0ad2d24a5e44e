"""Illustrative message hiding and voiceprint matching on feature records."""

from .steganography import embed, extract, message_bits
from .voiceprint import VoiceprintStore, flatten

__all__ = ["embed", "extract", "message_bits", "VoiceprintStore", "flatten"]
