import base64
import struct
import unittest

from image_probe.dimensions import decode_png_dimensions
from image_probe.errors import DimensionDecodeFailed


def make_png(width: int, height: int) -> bytes:
    return (
        b"\x89PNG\r\n\x1a\n"
        + struct.pack(">I", 13)
        + b"IHDR"
        + struct.pack(">II", width, height)
        + b"\x08\x02\x00\x00\x00"
    )


class TestPNG(unittest.TestCase):
    def test_parse_png(self):
        buffer = (
            "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAIAAACQd1PeAAAAD0lEQVR4nGNgYAAAAAMAAWgmWQ0AAAAASUVORK5CYII="
        )
        dims = decode_png_dimensions(base64.b64decode(buffer))
        self.assertEqual(dims.width, 1)
        self.assertEqual(dims.height, 1)

    def test_ihdr_bytes(self):
        buffer = bytearray(make_png(1, 1))
        buffer[16:20] = bytes([0x00, 0x00, 0x01, 0x00])
        buffer[20:24] = bytes([0x00, 0x00, 0x00, 0xC8])
        dims = decode_png_dimensions(bytes(buffer))
        self.assertEqual((dims.width, dims.height), (256, 200))

    def test_large_dimensions_are_unsigned(self):
        dims = decode_png_dimensions(make_png(0xFFFFFFFF, 0x80000000))
        self.assertEqual(dims.width, 0xFFFFFFFF)
        self.assertEqual(dims.height, 0x80000000)

    def test_truncated_png(self):
        with self.assertRaises(DimensionDecodeFailed):
            decode_png_dimensions(make_png(10, 10)[:23])


if __name__ == "__main__":
    unittest.main()
