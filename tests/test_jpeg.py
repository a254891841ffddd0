import struct
import unittest

from image_probe.dimensions import decode_jpeg_dimensions
from image_probe.errors import DimensionDecodeFailed


def segment(marker: int, payload: bytes) -> bytes:
    return bytes([0xFF, marker]) + struct.pack(">H", len(payload) + 2) + payload


def sof(marker: int, width: int, height: int) -> bytes:
    return segment(marker, b"\x08" + struct.pack(">HH", height, width) + b"\x03" + bytes(9))


class TestJPEG(unittest.TestCase):
    def test_baseline_sof(self):
        buffer = b"\xFF\xD8" + sof(0xC0, 640, 480)
        dims = decode_jpeg_dimensions(buffer)
        self.assertEqual((dims.width, dims.height), (640, 480))

    def test_progressive_sof(self):
        buffer = b"\xFF\xD8" + sof(0xC2, 1920, 1080)
        dims = decode_jpeg_dimensions(buffer)
        self.assertEqual((dims.width, dims.height), (1920, 1080))

    def test_skips_segments(self):
        buffer = (
            b"\xFF\xD8"
            + segment(0xE0, b"JFIF\x00" + bytes(9))
            + segment(0xE1, bytes(300))
            + segment(0xDB, bytes(65))
            + segment(0xC4, bytes(0))
            + segment(0xFE, b"comment")
            + sof(0xC0, 7, 3)
            + segment(0xDA, bytes(10))
        )
        dims = decode_jpeg_dimensions(buffer)
        self.assertEqual((dims.width, dims.height), (7, 3))

    def test_other_sof_markers_are_skipped(self):
        # SOF1(0xC1)은 크기 마커로 취급하지 않음
        buffer = b"\xFF\xD8" + sof(0xC1, 1, 1) + sof(0xC0, 50, 60)
        dims = decode_jpeg_dimensions(buffer)
        self.assertEqual((dims.width, dims.height), (50, 60))

    def test_signature_only(self):
        with self.assertRaises(DimensionDecodeFailed):
            decode_jpeg_dimensions(bytes([0xFF, 0xD8, 0xFF]))

    def test_broken_marker_chain(self):
        buffer = b"\xFF\xD8" + segment(0xE0, bytes(4)) + b"\x00\xC0" + bytes(20)
        with self.assertRaises(DimensionDecodeFailed):
            decode_jpeg_dimensions(buffer)

    def test_no_sof_before_end(self):
        buffer = b"\xFF\xD8" + segment(0xE0, bytes(16)) + segment(0xDB, bytes(8))
        with self.assertRaises(DimensionDecodeFailed):
            decode_jpeg_dimensions(buffer)

    def test_truncated_sof(self):
        buffer = b"\xFF\xD8" + sof(0xC0, 10, 10)[:8]
        with self.assertRaises(DimensionDecodeFailed):
            decode_jpeg_dimensions(buffer)

    def test_truncated_segment_length(self):
        buffer = b"\xFF\xD8\xFF\xE0\x00"
        with self.assertRaises(DimensionDecodeFailed):
            decode_jpeg_dimensions(buffer)

    def test_segment_length_past_end(self):
        buffer = b"\xFF\xD8" + bytes([0xFF, 0xE0, 0xFF, 0xFF]) + bytes(10)
        with self.assertRaises(DimensionDecodeFailed):
            decode_jpeg_dimensions(buffer)


if __name__ == "__main__":
    unittest.main()
