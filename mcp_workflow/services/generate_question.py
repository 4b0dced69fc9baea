"""질문 생성 서비스"""

import logging
from typing import Optional

from ..models import PropertyMetadata
from ..tools.metadata import (
    GenerateQuestionResult,
    WorkflowToolMetadata,
    create_generate_question_tool_metadata,
)
from ..tool_execution import ToolExecutor
from .base import AbstractService


class GenerateQuestionService(AbstractService):
    """속성 하나의 값을 묻는 질문을 호스트 LLM 에게 생성시키는 서비스"""

    def __init__(
        self,
        tool_metadata: Optional[WorkflowToolMetadata] = None,
        tool_executor: Optional[ToolExecutor] = None,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__("GenerateQuestionService", tool_executor, logger)
        self.tool_metadata = tool_metadata or create_generate_question_tool_metadata()

    def generate_question_for_property(
        self,
        property_name: str,
        metadata: PropertyMetadata,
    ) -> str:
        """속성 값을 묻는 질문을 생성합니다

        Raises:
            pydantic.ValidationError: 결과에 문자열 question 이 없는 경우
        """
        invocation_data = self.tool_metadata.create_invocation({
            "property_metadata": {
                "property_name": property_name,
                "friendly_name": metadata.friendly_name,
                "description": metadata.description,
            }
        })
        result = self.execute_tool_with_logging(invocation_data, GenerateQuestionResult)
        return result.question
