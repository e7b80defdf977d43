"""Regression tests for raw-key decoding.

Covers ESC timing, Alt combos, arrow sequences, and control-key tokens.
"""

import os
import time
import unittest

from lazydb.input import reader


class ReadKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        reader._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        reader._PENDING_BYTES.clear()

    def _read_all(self, payload: bytes, count: int) -> list[str]:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, payload)
            return [reader.read_key(read_fd, timeout_ms=20) for _ in range(count)]
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        started = time.monotonic()
        keys = self._read_all(b"\x1b", 1)
        elapsed = time.monotonic() - started

        self.assertEqual(keys, ["ESC"])
        self.assertLess(elapsed, 0.2)

    def test_arrow_sequences(self) -> None:
        self.assertEqual(
            self._read_all(b"\x1b[A\x1b[B\x1b[C\x1b[D", 4),
            ["UP", "DOWN", "RIGHT", "LEFT"],
        )

    def test_delete_sequence(self) -> None:
        self.assertEqual(self._read_all(b"\x1b[3~", 1), ["DELETE"])

    def test_escape_plus_printable_is_alt_combo(self) -> None:
        self.assertEqual(self._read_all(b"\x1b1\x1bz", 2), ["ALT_1", "ALT_z"])

    def test_double_escape_keeps_second_byte(self) -> None:
        self.assertEqual(self._read_all(b"\x1b\x1b", 2), ["ESC", "ESC"])

    def test_control_keys(self) -> None:
        self.assertEqual(
            self._read_all(b"\x12\x03\r\x7f\t", 5),
            ["CTRL_R", "CTRL_C", "ENTER", "BACKSPACE", "TAB"],
        )

    def test_utf8_character_is_one_key(self) -> None:
        self.assertEqual(self._read_all("é".encode("utf-8"), 1), ["é"])

    def test_timeout_returns_empty_token(self) -> None:
        self.assertEqual(self._read_all(b"", 1), [""])


class DecodeControlByteTests(unittest.TestCase):
    def test_printable_byte_is_not_a_control(self) -> None:
        self.assertIsNone(reader.decode_control_byte(b"q"))

    def test_ctrl_letters(self) -> None:
        self.assertEqual(reader.decode_control_byte(b"\x1a"), "CTRL_Z")
        self.assertEqual(reader.decode_control_byte(b"\x01"), "CTRL_A")


if __name__ == "__main__":
    unittest.main()
