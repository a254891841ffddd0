"""이미지 바이트에서 포맷과 크기를 읽어내는 헤더 파서"""

__version__ = "0.1.0"

from .decoder import ImageDecoder, decode
from .errors import DimensionDecodeFailed, ImageProbeError, UnsupportedFormat
from .models import DecodedImage, Dimensions, ImageFormat
from .signatures import detect_format, matches_signature

__all__ = [
    "__version__",
    "DecodedImage",
    "Dimensions",
    "DimensionDecodeFailed",
    "ImageDecoder",
    "ImageFormat",
    "ImageProbeError",
    "UnsupportedFormat",
    "decode",
    "detect_format",
    "matches_signature",
]
