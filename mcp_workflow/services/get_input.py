"""사용자 입력 요청 서비스"""

import logging
from typing import Any, Optional

from ..models import PropertyMetadataCollection
from ..tools.metadata import (
    GetInputResult,
    WorkflowToolMetadata,
    create_get_input_tool_metadata,
)
from ..tool_execution import ToolExecutor
from .base import AbstractService


class GetInputService(AbstractService):
    """값이 비어 있는 속성들에 대해 사용자 응답을 받아오는 서비스"""

    def __init__(
        self,
        tool_metadata: Optional[WorkflowToolMetadata] = None,
        tool_executor: Optional[ToolExecutor] = None,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__("GetInputService", tool_executor, logger)
        self.tool_metadata = tool_metadata or create_get_input_tool_metadata()

    def get_input(
        self,
        unfulfilled_properties: PropertyMetadataCollection,
        question: Optional[str] = None,
    ) -> Any:
        """사용자에게 입력을 요청하고 응답 원문을 반환합니다

        Args:
            unfulfilled_properties: 값이 필요한 속성들
            question: 미리 생성된 질문 (선택)

        Returns:
            사용자 응답 (검증되지 않은 원문)
        """
        invocation_data = self.tool_metadata.create_invocation({
            "properties_requiring_input": [
                {
                    "property_name": name,
                    "friendly_name": metadata.friendly_name,
                    "description": metadata.description,
                }
                for name, metadata in unfulfilled_properties.items()
            ],
            "question": question,
        })
        result = self.execute_tool_with_logging(invocation_data, GetInputResult)
        return result.user_utterance
