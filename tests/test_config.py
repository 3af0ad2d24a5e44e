import pathlib
import sys
import tempfile
import unittest

# Ensure src/ is on path for direct test execution
ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from resonant.config import EngineConfig, config_from_mapping, load_config  # noqa: E402


class EngineConfigTest(unittest.TestCase):
    def test_defaults(self):
        cfg = EngineConfig()
        self.assertEqual(cfg.sample_rate_hz, 44100.0)
        self.assertEqual(cfg.window_size, 1024)
        self.assertEqual(cfg.num_bins, 512)
        self.assertEqual(cfg.history_size, 10)
        self.assertEqual(cfg.min_interval_s, 0.05)
        self.assertEqual(cfg.voiceprint_threshold, 1000.0)

    def test_mapping_accepts_engine_block_and_ignores_unknown_keys(self):
        cfg = config_from_mapping(
            {"engine": {"window_size": 2048, "bogus": 1}, "history_size": 4}
        )
        self.assertEqual(cfg.window_size, 2048)
        self.assertEqual(cfg.history_size, 4)

    def test_empty_mapping_gives_defaults(self):
        self.assertEqual(config_from_mapping(None), EngineConfig())

    def test_sanitized_applies_limits(self):
        cfg = EngineConfig(
            sample_rate_hz=8000.0,
            high_cutoff_hz=10000.0,
            window_size=0,
            cache_size=-3,
            harmonic_threshold=4.0,
        ).sanitized()
        self.assertEqual(cfg.high_cutoff_hz, 4000.0)
        self.assertEqual(cfg.window_size, 2)
        self.assertEqual(cfg.cache_size, 0)
        self.assertEqual(cfg.harmonic_threshold, 1.0)

    def test_load_config_missing_file_falls_back(self):
        self.assertEqual(load_config(None), EngineConfig())
        self.assertEqual(load_config("/nonexistent/resonant.yaml"), EngineConfig())

    def test_load_config_reads_yaml(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = pathlib.Path(tmpdir) / "resonant.yaml"
            path.write_text(
                "engine:\n  sample_rate_hz: 16000\n  min_interval_s: 0.1\n",
                encoding="utf-8",
            )
            cfg = load_config(path)
        self.assertEqual(cfg.sample_rate_hz, 16000.0)
        self.assertEqual(cfg.min_interval_s, 0.1)

    def test_load_config_rejects_non_mapping(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = pathlib.Path(tmpdir) / "bad.yaml"
            path.write_text("- 1\n- 2\n", encoding="utf-8")
            with self.assertRaises(ValueError):
                load_config(path)

    def test_to_mapping_round_trip(self):
        cfg = EngineConfig(window_size=512, decimation=2)
        self.assertEqual(config_from_mapping(cfg.to_mapping()), cfg)


if __name__ == "__main__":
    unittest.main()
