#!/usr/bin/env python3
import argparse
import asyncio
import json
import sys

from . import __version__
from .logger import error
from .server import create_mcp_server


async def run_stdio():
    """stdio 모드로 서버 실행"""
    from mcp.server.stdio import stdio_server

    server = create_mcp_server()

    async with stdio_server() as (read_stream, write_stream):
        error("image-probe 서버가 stdio 모드로 실행 중입니다")
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options()
        )


async def async_main(mode: str):
    """메인 비동기 함수"""
    try:
        if mode == "stdio":
            await run_stdio()
        else:
            error(f"알 수 없는 모드: {mode}")
            sys.exit(1)

    except Exception as e:
        error(f"async_main()에서 치명적 오류 발생: {json.dumps(str(e))}")
        raise


def main() -> None:
    """동기 진입점 함수"""
    parser = argparse.ArgumentParser(
        description="Image Probe MCP Server - 이미지 포맷과 크기를 알려주는 MCP 서버",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
사용 예시:
  image-probe-mcp
  image-probe-mcp --mode stdio

  # 로그 파일 지정
  IMAGE_PROBE_LOG_FILE=/tmp/image-probe.log image-probe-mcp
"""
    )

    parser.add_argument(
        "--mode", "-m",
        choices=["stdio"],
        default="stdio",
        help="실행 모드. 기본값: stdio"
    )

    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    args = parser.parse_args()

    asyncio.run(async_main(args.mode))


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        error("키보드 인터럽트로 종료됨")
        sys.exit(0)
    except Exception as e:
        error(f"치명적 오류 발생: {str(e)}")
        sys.exit(1)
