"""Signal analysis for resonance feature extraction.

This package gathers helpers that operate on NumPy arrays of samples and on
feature records. Modules such as :mod:`spectrum`, :mod:`coherence`,
:mod:`cognitive`, and :mod:`patterns` hold no session state of their own so
they can be reused in scripts, automated tests, or the engine alike.
"""
