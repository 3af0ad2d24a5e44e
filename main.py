from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Sequence
from pathlib import Path

import numpy as np

# Make sure the 'src' directory is on sys.path so 'resonant' can be imported
REPO_ROOT = Path(__file__).resolve().parent
SRC_DIR = REPO_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from resonant.analysis.patterns import describe_state
from resonant.config import load_config
from resonant.core import InsufficientData, ResonanceEngine
from resonant.sources import sine_window

logger = logging.getLogger("resonant.demo")


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Synthetic resonance session")
    parser.add_argument("--config", type=Path, default=None, help="YAML engine config")
    parser.add_argument(
        "--frequency",
        type=float,
        default=440.0,
        help="Fundamental of the synthetic tone in Hz (default: 440)",
    )
    parser.add_argument(
        "--windows",
        type=int,
        default=40,
        help="Number of sample windows to process (default: 40)",
    )
    parser.add_argument("--message", default="hi", help="Text to hide in the records")
    parser.add_argument("--seed", type=int, default=0, help="Noise RNG seed")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def run_session(args: argparse.Namespace) -> int:
    cfg = load_config(args.config)
    rng = np.random.default_rng(args.seed)

    # Synthetic clock advancing two throttle intervals per window
    ticks = iter(np.arange(args.windows + 1) * (2.0 * cfg.min_interval_s))
    engine = ResonanceEngine(cfg, clock=lambda: float(next(ticks)))

    collected = []
    for _ in range(args.windows):
        window = sine_window(
            args.frequency,
            sample_rate_hz=cfg.sample_rate_hz,
            size=cfg.window_size,
            overtones=((2, 0.5), (3, 0.25)),
            noise=0.01,
            rng=rng,
        )
        record = engine.process(window)
        collected.append(record)

    state = engine.classify()
    latest = engine.latest
    if state is not None and latest is not None:
        logger.info(
            "Latest: f=%.1f Hz coherence=%.2f phase=%s -> %s / %s (%s %.2f) %r",
            latest.frequency,
            latest.coherence,
            engine.phase,
            state.emotional_state,
            state.mental_state,
            state.sentiment.label,
            state.sentiment.score,
            describe_state(state, latest),
        )
    logger.info("Phase distribution: %s", engine.phase_distribution())

    carrier = engine.embed(args.message, collected)
    recovered = engine.extract(carrier, length=len(args.message.encode("utf-8")))
    logger.info("Hidden message round trip: %r -> %r", args.message, recovered)

    try:
        engine.enroll()
        logger.info("Authentication against own history: %s", engine.authenticate())
    except InsufficientData as exc:
        logger.warning("Voiceprint skipped: %s", exc)
        return 1
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """
    Entry point for the synthetic demo session.

    Parameters
    ----------
    argv:
        Command-line arguments (without the program name). If None, uses sys.argv.
    """
    args = _build_arg_parser().parse_args(None if argv is None else list(argv))
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return run_session(args)


def _run_with_cprofile(argv: Sequence[str] | None = None) -> int:
    """Run the session under cProfile and print top cumulative functions."""
    import cProfile
    import io
    import pstats

    profiler = cProfile.Profile()
    profiler.enable()
    try:
        return main(argv)
    finally:
        profiler.disable()
        buffer = io.StringIO()
        stats = pstats.Stats(profiler, stream=buffer).sort_stats("cumulative")
        stats.print_stats(50)
        print(buffer.getvalue())


if __name__ == "__main__":
    if os.getenv("RESONANT_PROFILE", ""):
        sys.exit(_run_with_cprofile(sys.argv[1:]))
    else:
        sys.exit(main(sys.argv[1:]))
