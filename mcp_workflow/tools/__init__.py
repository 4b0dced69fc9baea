"""MCP 도구 패키지

호스트에 노출되는 도구 메타데이터를 제공합니다.
서버 구성은 mcp_workflow.tools.server 에서 가져옵니다.
"""

from .metadata import (
    DEFAULT_TOOL_ID_PREFIX,
    WorkflowToolMetadata,
    WorkflowToolOutput,
    create_failure_tool_metadata,
    create_generate_question_tool_metadata,
    create_get_input_tool_metadata,
    create_input_extraction_tool_metadata,
    create_orchestrator_tool_metadata,
)

__all__ = [
    "DEFAULT_TOOL_ID_PREFIX",
    "WorkflowToolMetadata",
    "WorkflowToolOutput",
    # 도구 메타데이터 팩토리
    "create_input_extraction_tool_metadata",
    "create_get_input_tool_metadata",
    "create_generate_question_tool_metadata",
    "create_failure_tool_metadata",
    "create_orchestrator_tool_metadata",
]
