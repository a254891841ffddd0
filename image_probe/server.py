import base64
import binascii
import json
from typing import Any, Dict, List

from mcp.server import Server
from mcp.types import TextContent, Tool

from .decoder import decode
from .errors import ImageProbeError
from .image_utils import fetch_image, read_image_file
from .logger import error, trace
from .models import ProbeResult


TOOLS = [
    Tool(
        name="image_probe_file",
        description="""Detect the format (jpeg, png, gif, bmp, webp, svg) and pixel size of an image file on disk.
Only the file header is parsed; pixel data is never decoded.""",
        inputSchema={
            "type": "object",
            "properties": {
                "path": {"type": "string", "description": "Path of the image file"},
            },
            "required": ["path"],
        },
    ),
    Tool(
        name="image_probe_base64",
        description="""Detect the format and pixel size of base64-encoded image bytes.""",
        inputSchema={
            "type": "object",
            "properties": {
                "data": {"type": "string", "description": "Base64-encoded image file content"},
            },
            "required": ["data"],
        },
    ),
    Tool(
        name="image_probe_url",
        description="""Download an image over HTTP(S) and detect its format and pixel size.""",
        inputSchema={
            "type": "object",
            "properties": {
                "url": {"type": "string", "description": "URL of the image"},
            },
            "required": ["url"],
        },
    ),
]


def _decode_base64(data: str) -> bytes:
    # data URL 형태도 허용
    if data.startswith("data:") and "," in data:
        data = data.split(",", 1)[1]
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ImageProbeError(f"base64 데이터가 유효하지 않습니다: {e}") from e


async def handle_tool_call(name: str, arguments: Dict[str, Any]) -> List[TextContent]:
    """도구 호출을 처리합니다."""
    try:
        trace(f"{name} 호출, 인자: {json.dumps(arguments)[:200]}")

        if name == "image_probe_file":
            buffer = read_image_file(arguments["path"])

        elif name == "image_probe_base64":
            buffer = _decode_base64(arguments["data"])

        elif name == "image_probe_url":
            buffer = await fetch_image(arguments["url"])

        else:
            raise ValueError(f"알 수 없는 도구: {name}")

        image = decode(buffer)
        result = ProbeResult.from_image(image).model_dump_json()

        trace(f"=> {result}")
        return [TextContent(type="text", text=result)]

    except ImageProbeError as e:
        return [TextContent(type="text", text=f"{e}. 문제를 해결하고 다시 시도하세요.")]
    except Exception as e:
        error(f"도구 '{name}' 실패: {str(e)}")
        return [TextContent(type="text", text=f"오류: {str(e)}")]


def create_mcp_server() -> Server:
    """MCP 서버를 생성합니다."""

    server = Server("image-probe")

    @server.list_tools()
    async def handle_list_tools() -> List[Tool]:
        """사용 가능한 도구 목록을 반환합니다."""
        return TOOLS

    @server.call_tool()
    async def handle_call_tool(name: str, arguments: Dict[str, Any]) -> List[TextContent]:
        return await handle_tool_call(name, arguments)

    return server
