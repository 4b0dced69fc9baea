"""서비스 기반 클래스

도구 실행기를 통해 호스트 에이전트에게 작업을 위임하는 서비스들의 공통 기반입니다.
"""

import logging
from abc import ABC
from typing import Any, Optional, Type

from pydantic import BaseModel

from ..log_utils import create_component_logger
from ..models import ToolInvocationData
from ..tool_execution import (
    LangGraphToolExecutor,
    ResultValidator,
    ToolExecutor,
    execute_tool_with_logging,
)


class AbstractService(ABC):
    """도구 실행 서비스 기반 클래스

    의존성 역전 원칙: 실행기와 로거는 생성자로 주입받으며,
    주입되지 않으면 LangGraph 실행기와 컴포넌트 로거를 사용합니다.
    """

    def __init__(
        self,
        service_name: str,
        tool_executor: Optional[ToolExecutor] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.service_name = service_name
        self.component_name = f"Service:{service_name}"
        self.tool_executor = tool_executor or LangGraphToolExecutor()
        self.logger = logger or create_component_logger(self.component_name)

    def execute_tool_with_logging(
        self,
        invocation_data: ToolInvocationData,
        result_schema: Type[BaseModel],
        validator: Optional[ResultValidator] = None,
    ) -> Any:
        return execute_tool_with_logging(
            self.tool_executor,
            self.logger,
            invocation_data,
            result_schema,
            validator,
        )
