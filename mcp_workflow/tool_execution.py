"""도구 실행과 결과 검증

워크플로우 노드가 호스트 에이전트에게 작업을 위임하는 경로를 정의합니다.

- ToolExecutor: 봉투를 받아 검증되지 않은 원시 결과를 돌려주는 실행기
- LangGraphToolExecutor: LangGraph interrupt 로 실행을 일시 중단하고
  호스트가 재개하면서 전달한 값을 결과로 반환
- execute_tool_with_logging: 실행 전후 로깅과 결과 검증 파이프라인
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Type

from langgraph.types import interrupt
from pydantic import BaseModel

from .models import ToolInvocationData


# 원시 결과와 결과 스키마를 받아 검증된 값을 반환하는 사용자 정의 검증기
ResultValidator = Callable[[Any, Type[BaseModel]], Any]


class ToolExecutor(ABC):
    """도구 실행기 인터페이스

    실행 메커니즘(LangGraph interrupt, 테스트용 가짜 실행기 등)을
    노드와 서비스로부터 분리합니다.
    """

    @abstractmethod
    def execute(self, invocation_data: ToolInvocationData) -> Any:
        """작업을 실행하고 원시 결과를 반환합니다"""


class LangGraphToolExecutor(ToolExecutor):
    """LangGraph interrupt 기반 실행기

    interrupt() 는 현재 그래프 실행을 중단하고 페이로드를 호스트에 노출합니다.
    Command(resume=...) 로 재개되면 그 값이 그대로 반환됩니다.
    """

    def execute(self, invocation_data: ToolInvocationData) -> Any:
        return interrupt(invocation_data.to_payload())


def execute_tool_with_logging(
    tool_executor: ToolExecutor,
    logger: logging.Logger,
    invocation_data: ToolInvocationData,
    result_schema: Type[BaseModel],
    validator: Optional[ResultValidator] = None,
) -> Any:
    """도구를 실행하고 결과를 검증합니다

    실행기는 정확히 한 번 호출되며 재시도하지 않습니다.

    Args:
        tool_executor: 작업을 실행할 실행기
        logger: 실행 전후 기록에 사용할 로거
        invocation_data: 작업 봉투
        result_schema: 결과 검증에 사용할 모델
        validator: 사용자 정의 검증기. 지정하면 그 반환값을 그대로 돌려줍니다

    Returns:
        검증된 결과

    Raises:
        pydantic.ValidationError: 원시 결과가 result_schema 와 맞지 않는 경우
    """
    logger.debug(
        "도구 호출 데이터 (실행 전)",
        extra={"data": {"invocation_data": invocation_data.to_payload()}},
    )

    raw_result = tool_executor.execute(invocation_data)

    logger.debug(
        "도구 실행 결과 (실행 후)",
        extra={"data": {"result": raw_result}},
    )

    if validator is not None:
        return validator(raw_result, result_schema)

    validated = result_schema.model_validate(raw_result)
    logger.debug(
        "검증된 도구 결과",
        extra={"data": {"result": validated.model_dump()}},
    )
    return validated
