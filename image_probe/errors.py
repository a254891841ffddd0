from typing import Optional

from .models import ImageFormat


class ImageProbeError(Exception):
    """사용자가 조치 가능한 오류"""
    pass


class UnsupportedFormat(ImageProbeError):
    """등록된 시그니처와 일치하는 포맷이 없음"""

    def __init__(self, message: str = "지원하지 않거나 유효하지 않은 이미지 포맷입니다"):
        super().__init__(message)


class DimensionDecodeFailed(ImageProbeError):
    """포맷은 인식했지만 헤더에서 크기를 읽을 수 없음"""

    def __init__(self, fmt: ImageFormat, reason: Optional[str] = None):
        self.format = fmt
        self.reason = reason
        message = f"{fmt.value} 이미지 크기를 디코딩하지 못했습니다"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ImageTooLarge(ImageProbeError):
    """이미지가 허용된 최대 크기를 초과함"""

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"이미지 크기 {size} 바이트가 최대 허용치 {limit} 바이트를 초과합니다")


class ImageFetchError(ImageProbeError):
    """URL에서 이미지를 가져오지 못함"""
    pass
