import pathlib
import sys
import unittest

# Ensure src/ is on path for direct test execution
ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from resonant.core.models import FeatureRecord  # noqa: E402
from resonant.security.steganography import embed, extract, message_bits  # noqa: E402


def _records(count):
    return [
        FeatureRecord(
            frequency=400.0 + i * 3.37,
            amplitude=0.1 * (i % 7),
            harmonics=(800.0 + i, 1200.0 + i),
            phase=0.01 * i,
            coherence=0.5,
            timestamp=float(i),
        )
        for i in range(count)
    ]


class SteganographyTest(unittest.TestCase):
    def test_round_trip_with_known_length(self):
        records = _records(48)
        carrier = embed("Hello", records)
        self.assertEqual(extract(carrier, length=5), "Hello")

    def test_only_frequency_of_carrier_records_changes(self):
        records = _records(30)
        carrier = embed("Hi", records)

        self.assertEqual(len(carrier), len(records))
        for index, (before, after) in enumerate(zip(records, carrier)):
            self.assertEqual(before.amplitude, after.amplitude)
            self.assertEqual(before.harmonics, after.harmonics)
            self.assertEqual(before.phase, after.phase)
            self.assertEqual(before.coherence, after.coherence)
            self.assertEqual(before.timestamp, after.timestamp)
            if index >= 16:
                self.assertEqual(before, after)

    def test_low_bit_is_cleared_then_set(self):
        record = FeatureRecord(frequency=441.7, amplitude=0.1)
        zero = embed("\x00", [record] * 8)
        one = embed("\x01", [record] * 8)

        self.assertEqual(zero[0].frequency, 440.0)
        self.assertEqual(one[7].frequency, 441.0)

    def test_empty_records_pass_through(self):
        self.assertEqual(embed("secret", []), [])

    def test_terminator_allows_length_free_extraction(self):
        records = _records(64)
        carrier = embed("abc", records, terminate=True)
        self.assertEqual(extract(carrier), "abc")

    def test_trailing_partial_byte_is_dropped(self):
        carrier = embed("A", _records(12))
        self.assertEqual(extract(carrier), "A")

    def test_utf8_round_trip(self):
        message = "héllo"
        length = len(message.encode("utf-8"))
        carrier = embed(message, _records(length * 8))
        self.assertEqual(extract(carrier, length=length), message)

    def test_short_carrier_truncates_message_with_warning(self):
        records = _records(10)
        with self.assertLogs("resonant.security.steganography", "WARNING"):
            carrier = embed("Hello", records)

        self.assertEqual(len(carrier), 10)
        low_bits = "".join(str(int(r.frequency) & 1) for r in carrier)
        self.assertEqual(low_bits, message_bits("Hello")[:10])
        for before, after in zip(records, carrier):
            self.assertEqual(before.amplitude, after.amplitude)
            self.assertEqual(before.harmonics, after.harmonics)
            self.assertEqual(before.phase, after.phase)
            self.assertEqual(before.coherence, after.coherence)
            self.assertEqual(before.timestamp, after.timestamp)

    def test_message_bits_are_msb_first(self):
        self.assertEqual(message_bits("A"), "01000001")
        self.assertEqual(message_bits("A", terminate=True), "0100000100000000")


if __name__ == "__main__":
    unittest.main()
