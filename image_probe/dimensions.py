"""포맷별 헤더에서 이미지 크기를 읽는 파서 모음.

각 파서는 파일 전체 바이트를 받아 Dimensions를 반환하고, 헤더가 잘렸거나
형식이 맞지 않으면 DimensionDecodeFailed를 발생시킵니다. 픽셀 데이터는
디코딩하지 않습니다.
"""

import re
import struct

from .errors import DimensionDecodeFailed
from .models import Dimensions, ImageFormat


PNG_MIN_LENGTH = 24
GIF_MIN_LENGTH = 10
BMP_MIN_LENGTH = 26
WEBP_MIN_LENGTH = 30

# Start-Of-Frame 마커 (baseline, progressive)
JPEG_SOF_MARKERS = (0xC0, 0xC2)

_VIEWBOX_RE = re.compile(r"""viewBox=["']([^"']+)["']""")
_WIDTH_RE = re.compile(r"""(?<![\w-])width=["'](\d+)""")
_HEIGHT_RE = re.compile(r"""(?<![\w-])height=["'](\d+)""")


def _require_length(buffer: bytes, fmt: ImageFormat, minimum: int) -> None:
    if len(buffer) < minimum:
        raise DimensionDecodeFailed(
            fmt, f"헤더가 잘렸습니다 ({len(buffer)} < {minimum} 바이트)"
        )


def decode_png_dimensions(buffer: bytes) -> Dimensions:
    """IHDR 청크에서 너비와 높이를 읽습니다."""
    _require_length(buffer, ImageFormat.PNG, PNG_MIN_LENGTH)

    # 너비는 16번째 바이트부터, 높이는 20번째 바이트부터 4바이트 (big-endian)
    width, height = struct.unpack_from('>II', buffer, 16)
    return Dimensions(width=width, height=height)


def decode_gif_dimensions(buffer: bytes) -> Dimensions:
    """논리 화면 디스크립터에서 너비와 높이를 읽습니다."""
    _require_length(buffer, ImageFormat.GIF, GIF_MIN_LENGTH)

    width, height = struct.unpack_from('<HH', buffer, 6)
    return Dimensions(width=width, height=height)


def decode_bmp_dimensions(buffer: bytes) -> Dimensions:
    """BITMAPINFOHEADER에서 너비와 높이를 읽습니다.

    높이는 부호 없는 값으로 읽습니다. 음수 높이(top-down 비트맵)는
    큰 양수로 나타납니다.
    """
    _require_length(buffer, ImageFormat.BMP, BMP_MIN_LENGTH)

    width, height = struct.unpack_from('<II', buffer, 18)
    return Dimensions(width=width, height=height)


def decode_jpeg_dimensions(buffer: bytes) -> Dimensions:
    """마커 세그먼트를 건너뛰며 SOF 마커를 찾아 크기를 읽습니다."""
    fmt = ImageFormat.JPEG
    length = len(buffer)
    # SOI 시그니처(2바이트) 다음부터 탐색
    offset = 2

    while offset < length:
        if buffer[offset] != 0xFF:
            raise DimensionDecodeFailed(fmt, f"오프셋 {offset}에 마커가 없습니다")
        if offset + 1 >= length:
            raise DimensionDecodeFailed(fmt, f"오프셋 {offset}의 마커가 잘렸습니다")

        marker = buffer[offset + 1]
        if marker in JPEG_SOF_MARKERS:
            if offset + 9 > length:
                raise DimensionDecodeFailed(fmt, "SOF 세그먼트가 잘렸습니다")
            height, width = struct.unpack_from('>HH', buffer, offset + 5)
            return Dimensions(width=width, height=height)

        if offset + 4 > length:
            raise DimensionDecodeFailed(fmt, f"오프셋 {offset}의 세그먼트 길이가 잘렸습니다")
        (segment_length,) = struct.unpack_from('>H', buffer, offset + 2)
        offset += 2 + segment_length

    raise DimensionDecodeFailed(fmt, "SOF 마커를 찾지 못했습니다")


def decode_webp_dimensions(buffer: bytes) -> Dimensions:
    """VP8X, VP8, VP8L 하위 청크에 따라 크기를 읽습니다."""
    fmt = ImageFormat.WEBP
    _require_length(buffer, fmt, WEBP_MIN_LENGTH)

    chunk = bytes(buffer[12:16])

    if chunk == b"VP8X":
        # 24비트 little-endian, 실제 값 - 1 로 저장됨
        width = int.from_bytes(buffer[22:25], "little") + 1
        height = int.from_bytes(buffer[25:28], "little") + 1
        return Dimensions(width=width, height=height)

    if chunk == b"VP8 ":
        # 상위 2비트는 스케일 값이므로 14비트만 사용
        width, height = struct.unpack_from('<HH', buffer, 26)
        return Dimensions(width=width & 0x3FFF, height=height & 0x3FFF)

    if chunk == b"VP8L":
        (bits,) = struct.unpack_from('<I', buffer, 18)
        width = (bits & 0x3FFF) + 1
        height = ((bits >> 14) & 0x3FFF) + 1
        return Dimensions(width=width, height=height)

    raise DimensionDecodeFailed(fmt, f"알 수 없는 WEBP 청크 {chunk!r}")


def decode_svg_dimensions(buffer: bytes) -> Dimensions:
    """viewBox 속성을 먼저, 없으면 width/height 속성을 사용합니다."""
    fmt = ImageFormat.SVG
    try:
        text = bytes(buffer).decode("utf-8")
    except UnicodeDecodeError as e:
        raise DimensionDecodeFailed(fmt, f"텍스트로 디코딩할 수 없습니다: {e}") from e

    view_box = _VIEWBOX_RE.search(text)
    if view_box:
        values = [v for v in re.split(r"[\s,]+", view_box.group(1)) if v]
        if len(values) < 2:
            raise DimensionDecodeFailed(fmt, f"viewBox 값이 부족합니다: {view_box.group(1)!r}")
        try:
            width, height = (int(float(v)) for v in values[:2])
        except (ValueError, OverflowError) as e:
            raise DimensionDecodeFailed(fmt, f"viewBox 값이 숫자가 아닙니다: {view_box.group(1)!r}") from e
        return Dimensions(width=width, height=height)

    width_match = _WIDTH_RE.search(text)
    height_match = _HEIGHT_RE.search(text)
    if width_match and height_match:
        return Dimensions(
            width=int(width_match.group(1)),
            height=int(height_match.group(1)),
        )

    raise DimensionDecodeFailed(fmt, "viewBox 또는 width/height 속성이 없습니다")


def decode_dimensions(buffer: bytes, fmt: ImageFormat) -> Dimensions:
    """판별된 포맷에 맞는 파서로 크기를 읽습니다."""
    if fmt is ImageFormat.JPEG:
        return decode_jpeg_dimensions(buffer)
    elif fmt is ImageFormat.PNG:
        return decode_png_dimensions(buffer)
    elif fmt is ImageFormat.GIF:
        return decode_gif_dimensions(buffer)
    elif fmt is ImageFormat.BMP:
        return decode_bmp_dimensions(buffer)
    elif fmt is ImageFormat.WEBP:
        return decode_webp_dimensions(buffer)
    elif fmt is ImageFormat.SVG:
        return decode_svg_dimensions(buffer)
    else:
        raise ValueError(f"알 수 없는 포맷: {fmt}")
