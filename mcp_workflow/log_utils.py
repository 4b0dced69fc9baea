"""로깅 유틸리티

컴포넌트별 로거 생성과 기본 로깅 설정을 제공합니다.
구조화된 부가 정보는 LogRecord 의 data 속성으로 전달합니다
(logger.debug("메시지", extra={"data": {...}})).
"""

import logging
import sys
from typing import Union


ROOT_LOGGER_NAME = "mcp_workflow"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def create_component_logger(component_name: str) -> logging.Logger:
    """컴포넌트 이름을 가진 로거를 반환합니다

    Args:
        component_name: 예) "WorkflowNode:GenerateQuestionNode", "Service:InputExtractionService"

    Returns:
        mcp_workflow 계층 아래의 로거
    """
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{component_name}")


def configure_logging(level: Union[str, int] = logging.INFO) -> None:
    """기본 로깅 설정

    stdio 전송을 사용하는 MCP 서버의 표준 출력을 오염시키지 않도록
    모든 로그는 stderr 로 출력합니다.
    """
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )
