from pathlib import Path
from typing import Union

from .logger import trace
from .models import DecodedImage


DEFAULT_REPORT_PATH = "decoded.html"

HTML_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
    <title>Decoded Image</title>
    <style>
        body {{
            display: flex;
            flex-direction: column;
            align-items: center;
            font-family: Arial, sans-serif;
        }}
        img {{
            max-width: 100%;
            margin: 20px 0;
        }}
        .info {{
            background: #f0f0f0;
            padding: 10px;
            border-radius: 4px;
            margin-bottom: 20px;
        }}
    </style>
</head>
<body>
    <div class="info">
        <p>Format: {format}</p>
        <p>Dimensions: {width}x{height}</p>
    </div>
    <img src="{data_url}" alt="Decoded image">
</body>
</html>
"""


def render_html(image: DecodedImage) -> str:
    """포맷, 크기, 인라인 이미지를 담은 HTML 문서를 만듭니다."""
    return HTML_TEMPLATE.format(
        format=image.format.value,
        width=image.width,
        height=image.height,
        data_url=image.data_url,
    )


def write_html_report(image: DecodedImage, path: Union[str, Path] = DEFAULT_REPORT_PATH) -> Path:
    """HTML 리포트를 파일로 저장하고 경로를 반환합니다."""
    path = Path(path)
    path.write_text(render_html(image), encoding="utf-8")
    trace(f"HTML 리포트 저장됨: {path}")
    return path
