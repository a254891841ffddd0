import struct
import unittest

from image_probe.dimensions import decode_bmp_dimensions, decode_gif_dimensions
from image_probe.errors import DimensionDecodeFailed
from image_probe.models import ImageFormat


def make_gif(width: int, height: int) -> bytes:
    return b"GIF89a" + struct.pack("<HH", width, height)


def make_bmp(width: int, height: int) -> bytes:
    # 파일 헤더(14) + DIB 헤더 크기(4)
    return b"BM" + bytes(12) + struct.pack("<I", 40) + struct.pack("<II", width, height)


class TestGIF(unittest.TestCase):
    def test_parse_gif(self):
        dims = decode_gif_dimensions(make_gif(320, 240))
        self.assertEqual((dims.width, dims.height), (320, 240))

    def test_extra_bytes_are_ignored(self):
        dims = decode_gif_dimensions(make_gif(1, 65535) + bytes(100))
        self.assertEqual((dims.width, dims.height), (1, 65535))

    def test_truncated_gif(self):
        with self.assertRaises(DimensionDecodeFailed) as ctx:
            decode_gif_dimensions(make_gif(1, 1)[:9])
        self.assertEqual(ctx.exception.format, ImageFormat.GIF)


class TestBMP(unittest.TestCase):
    def test_parse_bmp(self):
        buffer = make_bmp(800, 600)
        self.assertEqual(len(buffer), 26)
        dims = decode_bmp_dimensions(buffer)
        self.assertEqual((dims.width, dims.height), (800, 600))

    def test_top_down_height_read_unsigned(self):
        buffer = b"BM" + bytes(16) + struct.pack("<Ii", 16, -16)
        dims = decode_bmp_dimensions(buffer)
        self.assertEqual(dims.width, 16)
        self.assertEqual(dims.height, 2**32 - 16)

    def test_truncated_bmp(self):
        with self.assertRaises(DimensionDecodeFailed):
            decode_bmp_dimensions(make_bmp(2, 2)[:25])


if __name__ == "__main__":
    unittest.main()
