"""
LangGraph 기반 MCP 워크플로우 오케스트레이션 엔진

워크플로우 노드는 직접 LLM 을 호출하지 않고, 작업 봉투(ToolInvocationData)를
호스트 에이전트에게 위임합니다. 실행은 LangGraph interrupt 로 중단되고
호스트가 결과를 돌려주면 재개됩니다.
"""

__version__ = "1.0.0"
__author__ = "MCP Workflow Team"

from .config import MCPWorkflowSettings, get_settings
from .models import (
    PropertyMetadata,
    PropertyMetadataCollection,
    ToolInvocationData,
    WorkflowStateData,
)
from .tool_execution import LangGraphToolExecutor, ToolExecutor, execute_tool_with_logging
from .services import GenerateQuestionService, GetInputService, InputExtractionService
from .workflows import WorkflowOrchestrator, create_project_setup_workflow

__all__ = [
    # 환경변수 설정 관리
    "MCPWorkflowSettings",
    "get_settings",
    # 데이터 모델
    "PropertyMetadata",
    "PropertyMetadataCollection",
    "ToolInvocationData",
    "WorkflowStateData",
    # 도구 실행
    "ToolExecutor",
    "LangGraphToolExecutor",
    "execute_tool_with_logging",
    # 서비스
    "InputExtractionService",
    "GenerateQuestionService",
    "GetInputService",
    # 워크플로우
    "WorkflowOrchestrator",
    "create_project_setup_workflow",
]
