from typing import Optional

from .dimensions import decode_dimensions
from .errors import UnsupportedFormat
from .logger import trace
from .models import DecodedImage, Dimensions, ImageFormat
from .signatures import detect_format


class ImageDecoder:
    """이미지 바이트의 포맷과 크기를 읽는 클래스"""

    def __init__(self, buffer: bytes):
        """
        Args:
            buffer: 이미지 파일 전체의 바이트 데이터
        """
        self.buffer = buffer

    @classmethod
    def from_buffer(cls, buffer: bytes) -> 'ImageDecoder':
        """버퍼로부터 ImageDecoder 인스턴스를 생성합니다."""
        return cls(buffer)

    @property
    def format(self) -> Optional[ImageFormat]:
        """시그니처로 판별한 포맷. 일치하는 포맷이 없으면 None."""
        return detect_format(self.buffer)

    def get_dimensions(self) -> Dimensions:
        """이미지의 너비와 높이를 반환합니다."""
        fmt = self.format
        if fmt is None:
            raise UnsupportedFormat()
        return decode_dimensions(self.buffer, fmt)

    def decode(self) -> DecodedImage:
        """포맷 판별과 크기 디코딩을 한 번에 수행합니다."""
        fmt = self.format
        if fmt is None:
            raise UnsupportedFormat()

        trace(f"이미지 포맷 감지됨: {fmt.value} ({len(self.buffer)} 바이트)")
        dimensions = decode_dimensions(self.buffer, fmt)
        trace(f"이미지 크기: {dimensions.width}x{dimensions.height}")

        return DecodedImage(
            format=fmt,
            width=dimensions.width,
            height=dimensions.height,
            buffer=self.buffer,
        )


def decode(buffer: bytes) -> DecodedImage:
    """이미지 바이트를 디코딩합니다.

    Raises:
        UnsupportedFormat: 등록된 시그니처와 일치하지 않는 경우
        DimensionDecodeFailed: 헤더에서 크기를 읽을 수 없는 경우
    """
    return ImageDecoder.from_buffer(buffer).decode()
