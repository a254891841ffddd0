import base64
import os
from pathlib import Path
from typing import Union

import aiohttp

from .errors import ImageFetchError, ImageTooLarge
from .logger import trace
from .models import ImageFormat


DEFAULT_MAX_FILE_SIZE = 50 * 1024 * 1024
DEFAULT_FETCH_TIMEOUT = 30.0
FETCH_CHUNK_SIZE = 64 * 1024

# data URL에 사용할 MIME 타입
MIME_TYPES = {
    ImageFormat.JPEG: "image/jpeg",
    ImageFormat.PNG: "image/png",
    ImageFormat.GIF: "image/gif",
    ImageFormat.BMP: "image/bmp",
    ImageFormat.WEBP: "image/webp",
    ImageFormat.SVG: "image/svg+xml",
}


def get_max_file_size() -> int:
    """읽을 수 있는 이미지의 최대 바이트 수를 반환합니다."""
    value = os.environ.get("IMAGE_PROBE_MAX_FILE_SIZE")
    if not value:
        return DEFAULT_MAX_FILE_SIZE
    try:
        size = int(value)
    except ValueError:
        trace(f"IMAGE_PROBE_MAX_FILE_SIZE 값이 잘못되었습니다: {value!r}, 기본값 사용")
        return DEFAULT_MAX_FILE_SIZE
    if size <= 0:
        trace(f"IMAGE_PROBE_MAX_FILE_SIZE 값이 잘못되었습니다: {value!r}, 기본값 사용")
        return DEFAULT_MAX_FILE_SIZE
    return size


def get_fetch_timeout() -> float:
    """URL 다운로드 타임아웃(초)을 반환합니다."""
    value = os.environ.get("IMAGE_PROBE_FETCH_TIMEOUT")
    if not value:
        return DEFAULT_FETCH_TIMEOUT
    try:
        return float(value)
    except ValueError:
        trace(f"IMAGE_PROBE_FETCH_TIMEOUT 값이 잘못되었습니다: {value!r}, 기본값 사용")
        return DEFAULT_FETCH_TIMEOUT


def to_data_url(buffer: bytes, fmt: ImageFormat) -> str:
    """바이트를 인라인 표시용 base64 data URL로 변환합니다."""
    encoded = base64.b64encode(buffer).decode("utf-8")
    return f"data:{MIME_TYPES[fmt]};base64,{encoded}"


def read_image_file(path: Union[str, Path]) -> bytes:
    """이미지 파일 전체를 읽습니다."""
    path = Path(path)
    limit = get_max_file_size()
    size = path.stat().st_size
    if size > limit:
        raise ImageTooLarge(size, limit)

    with open(path, 'rb') as f:
        buffer = f.read(limit + 1)
    if len(buffer) > limit:
        raise ImageTooLarge(len(buffer), limit)

    trace(f"이미지 파일 읽음: {path} ({len(buffer)} 바이트)")
    return buffer


async def fetch_image(url: str) -> bytes:
    """URL에서 이미지를 내려받습니다."""
    limit = get_max_file_size()
    timeout = aiohttp.ClientTimeout(total=get_fetch_timeout())

    async with aiohttp.ClientSession(timeout=timeout) as session:
        async with session.get(url) as response:
            if response.status >= 300:
                raise ImageFetchError(f"이미지를 가져오지 못했습니다: {url} (HTTP {response.status})")
            if response.content_length is not None and response.content_length > limit:
                raise ImageTooLarge(response.content_length, limit)
            buffer = bytearray()
            async for chunk in response.content.iter_chunked(FETCH_CHUNK_SIZE):
                buffer.extend(chunk)
                # Content-Length 없이 전송되는 경우도 한도를 넘는 즉시 중단
                if len(buffer) > limit:
                    raise ImageTooLarge(len(buffer), limit)

    trace(f"이미지 다운로드됨: {url} ({len(buffer)} 바이트)")
    return bytes(buffer)
