"""워크플로우 노드 기반 클래스

BaseNode: 이름과 execute(state) 를 가진 그래프 노드
AbstractToolNode: 도구 실행기를 통해 호스트 에이전트에게 작업을 위임하는 노드
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Type

from pydantic import BaseModel

from ..log_utils import create_component_logger
from ..models import ToolInvocationData
from ..tool_execution import (
    LangGraphToolExecutor,
    ResultValidator,
    ToolExecutor,
    execute_tool_with_logging,
)
from .state import WorkflowState


class BaseNode(ABC):
    """그래프 노드 기반 클래스

    execute 는 입력 상태를 변경하지 않고 부분 업데이트만 반환해야 합니다.
    """

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    def execute(self, state: WorkflowState) -> Dict[str, Any]:
        """상태를 받아 부분 업데이트를 반환합니다"""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class AbstractToolNode(BaseNode):
    """도구 실행 노드 기반 클래스"""

    def __init__(
        self,
        name: str,
        tool_executor: Optional[ToolExecutor] = None,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(name)
        self.component_name = f"WorkflowNode:{type(self).__name__}"
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
