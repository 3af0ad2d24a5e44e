"""Configuration objects and helpers for the resonance engine.

A single YAML document (optionally nested under an ``engine:`` key) maps
onto :class:`~resonant.config.runtime.EngineConfig`, the typed dataclass
every other sub-package reads its constants from.
"""

from .runtime import EngineConfig, config_from_mapping, load_config

__all__ = ["EngineConfig", "config_from_mapping", "load_config"]
