from typing import Optional, Tuple

from .models import ImageFormat


# 선언 순서대로 검사합니다
FORMAT_SIGNATURES: Tuple[Tuple[ImageFormat, bytes], ...] = (
    (ImageFormat.JPEG, bytes([0xFF, 0xD8, 0xFF])),
    (ImageFormat.PNG, bytes([0x89, 0x50, 0x4E, 0x47])),
    (ImageFormat.GIF, bytes([0x47, 0x49, 0x46, 0x38])),
    (ImageFormat.BMP, bytes([0x42, 0x4D])),
    (ImageFormat.WEBP, bytes([0x52, 0x49, 0x46, 0x46])),
    (ImageFormat.SVG, bytes([0x3C, 0x73, 0x76, 0x67])),
)


def matches_signature(buffer: bytes, signature: bytes) -> bool:
    """버퍼가 시그니처로 정확히 시작하는지 확인합니다.

    버퍼가 시그니처보다 짧으면 비교하지 않고 False를 반환합니다.
    """
    if len(buffer) < len(signature):
        return False

    return all(buffer[i] == byte for i, byte in enumerate(signature))


def detect_format(buffer: bytes) -> Optional[ImageFormat]:
    """시그니처로 이미지 포맷을 판별합니다. 일치하는 포맷이 없으면 None."""
    for fmt, signature in FORMAT_SIGNATURES:
        if matches_signature(buffer, signature):
            return fmt
    return None
