from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, Field


class ImageFormat(str, Enum):
    """지원하는 이미지 컨테이너 포맷"""
    JPEG = "jpeg"
    PNG = "png"
    GIF = "gif"
    BMP = "bmp"
    WEBP = "webp"
    SVG = "svg"


@dataclass(frozen=True)
class Dimensions:
    """이미지의 크기 정보"""
    width: int
    height: int


@dataclass(frozen=True)
class DecodedImage:
    """포맷, 크기, 원본 바이트를 묶은 디코딩 결과"""
    format: ImageFormat
    width: int
    height: int
    buffer: bytes = field(repr=False)

    @property
    def dimensions(self) -> Dimensions:
        return Dimensions(width=self.width, height=self.height)

    @property
    def data_url(self) -> str:
        """원본 바이트를 인라인 표시용 data URL로 반환합니다."""
        from .image_utils import to_data_url

        return to_data_url(self.buffer, self.format)


class ProbeResult(BaseModel):
    """CLI와 MCP 도구가 JSON으로 내보내는 결과"""
    format: ImageFormat
    width: int
    height: int
    size: int = Field(ge=0, description="원본 바이트 길이")

    @classmethod
    def from_image(cls, image: DecodedImage) -> "ProbeResult":
        return cls(
            format=image.format,
            width=image.width,
            height=image.height,
            size=len(image.buffer),
        )
