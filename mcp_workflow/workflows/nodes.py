"""사용자 입력 수집 노드

단일 책임 원칙에 따라 각 노드는 하나의 작업만 수행하며,
실제 작업은 서비스를 통해 호스트 에이전트에게 위임합니다.

- UserInputExtractionNode: 사용자 입력에서 속성 추출
- GenerateQuestionNode: 첫 번째 미충족 속성에 대한 질문 생성
- GetUserInputNode: 미충족 속성에 대해 사용자 응답 요청
- FailureNode: 치명적 오류를 사용자에게 보고하고 종료
"""

import logging
from typing import Any, Dict, Optional

from ..models import PropertyMetadataCollection
from ..services import GenerateQuestionService, GetInputService, InputExtractionService
from ..tool_execution import ToolExecutor
from ..tools.metadata import FailureResult, WorkflowToolMetadata, create_failure_tool_metadata
from .base import AbstractToolNode
from .state import WorkflowState
from .state_utils import get_unfulfilled_properties, is_missing


DEFAULT_FAILURE_MESSAGE = "워크플로우를 계속 진행할 수 없습니다."


class UserInputExtractionNode(AbstractToolNode):
    """사용자 입력에서 카탈로그 속성을 추출해 상태에 기록하는 노드"""

    def __init__(
        self,
        properties: PropertyMetadataCollection,
        extraction_service: Optional[InputExtractionService] = None,
        tool_executor: Optional[ToolExecutor] = None,
        logger: Optional[logging.Logger] = None,
        name: str = "userInputExtraction",
        user_input_property: str = "user_input",
    ):
        super().__init__(name, tool_executor, logger)
        self.properties = properties
        self.user_input_property = user_input_property
        self.extraction_service = extraction_service or InputExtractionService(
            tool_executor=self.tool_executor
        )

    def execute(self, state: WorkflowState) -> Dict[str, Any]:
        user_input = state.get(self.user_input_property)
        if is_missing(user_input):
            self.logger.debug("추출할 사용자 입력이 없습니다")
            return {}

        result = self.extraction_service.extract_properties(user_input, self.properties)
        return dict(result.extracted_properties)


class GenerateQuestionNode(AbstractToolNode):
    """첫 번째 미충족 속성에 대한 질문을 생성하는 노드"""

    def __init__(
        self,
        properties: PropertyMetadataCollection,
        question_service: Optional[GenerateQuestionService] = None,
        tool_executor: Optional[ToolExecutor] = None,
        logger: Optional[logging.Logger] = None,
        name: str = "generateQuestion",
    ):
        super().__init__(name, tool_executor, logger)
        self.properties = properties
        self.question_service = question_service or GenerateQuestionService(
            tool_executor=self.tool_executor
        )

    def execute(self, state: WorkflowState) -> Dict[str, Any]:
        unfulfilled = get_unfulfilled_properties(state, self.properties)
        if not unfulfilled:
            self.logger.debug("모든 속성이 충족되어 질문을 생성하지 않습니다")
            return {}

        property_name, metadata = next(iter(unfulfilled.items()))
        self.logger.info(f"속성 질문 생성: {property_name}")
        question = self.question_service.generate_question_for_property(property_name, metadata)
        return {"user_input_question": question}


class GetUserInputNode(AbstractToolNode):
    """미충족 속성들에 대해 사용자 응답을 받아오는 노드"""

    def __init__(
        self,
        properties: PropertyMetadataCollection,
        input_service: Optional[GetInputService] = None,
        tool_executor: Optional[ToolExecutor] = None,
        logger: Optional[logging.Logger] = None,
        name: str = "getUserInput",
    ):
        super().__init__(name, tool_executor, logger)
        self.properties = properties
        self.input_service = input_service or GetInputService(tool_executor=self.tool_executor)

    def execute(self, state: WorkflowState) -> Dict[str, Any]:
        unfulfilled = get_unfulfilled_properties(state, self.properties)
        if not unfulfilled:
            self.logger.debug("모든 속성이 충족되어 입력을 요청하지 않습니다")
            return {}

        user_input = self.input_service.get_input(unfulfilled, state.get("user_input_question"))
        return {"user_input": user_input, "user_input_question": None}


class FailureNode(AbstractToolNode):
    """치명적 오류를 사용자에게 보고하는 종료 노드"""

    def __init__(
        self,
        tool_metadata: Optional[WorkflowToolMetadata] = None,
        tool_executor: Optional[ToolExecutor] = None,
        logger: Optional[logging.Logger] = None,
        name: str = "failure",
    ):
        super().__init__(name, tool_executor, logger)
        self.tool_metadata = tool_metadata or create_failure_tool_metadata()

    def execute(self, state: WorkflowState) -> Dict[str, Any]:
        messages = list(state.get("workflow_fatal_error_messages") or []) or [DEFAULT_FAILURE_MESSAGE]
        self.logger.warning(
            "워크플로우 실패 보고",
            extra={"data": {"messages": messages}},
        )
        invocation_data = self.tool_metadata.create_invocation({"messages": messages})
        # 사용자 확인 응답은 형식에 관계없이 받아들입니다
        self.execute_tool_with_logging(
            invocation_data,
            FailureResult,
            validator=lambda raw, schema: raw,
        )
        return {}
