#!/usr/bin/env python3
"""MCP 워크플로우 서버 메인 실행 스크립트

FastMCP 서버를 stdio 전송으로 시작하여 워크플로우 도구들을 제공합니다.
"""

import logging

from dotenv import load_dotenv

from mcp_workflow.config import get_settings
from mcp_workflow.log_utils import configure_logging
from mcp_workflow.tools.server import create_server

# .env 파일 로드 (애플리케이션 시작 시)
load_dotenv()


def main():
    """메인 함수"""
    settings = get_settings()
    configure_logging(settings.log_level)

    logger = logging.getLogger(__name__)
    logger.info(f"MCP 워크플로우 서버 시작 - 도구 접두사: {settings.tool_id_prefix}")

    server = create_server(settings)
    server.run(transport="stdio")


if __name__ == "__main__":
    main()
