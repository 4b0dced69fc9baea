"""워크플로우 패키지

LangGraph 기반의 모바일 프로젝트 설정 워크플로우입니다.

주요 구성요소:
- 오케스트레이터: 워크플로우 실행, 재개, 다음 작업 지시문 생성
- 노드들: 사용자 입력 수집, 플랫폼 설정 검증, 실패 보고
- 라우터들: 상태에 따른 다음 노드 결정
- 상태: 공유 상태 스키마와 유틸리티
"""

from .base import AbstractToolNode, BaseNode
from .executor import WorkflowOrchestrator, create_checkpointer, generate_thread_id
from .graph import create_project_setup_workflow, create_workflow_from_settings
from .nodes import FailureNode, GenerateQuestionNode, GetUserInputNode, UserInputExtractionNode
from .platform import PlatformChecker, PlatformCheckOutcome, SfCliPlatformChecker
from .platform_nodes import ExtractAndroidSetupNode, PlatformCheckNode
from .properties import ANDROID_SETUP_PROPERTIES, WORKFLOW_USER_INPUT_PROPERTIES
from .routers import (
    CheckAndroidSetupExtractedRouter,
    CheckFatalErrorsRouter,
    CheckPropertiesFulfilledRouter,
    CheckSetupValidatedRouter,
)
from .state import WorkflowState, create_initial_state, merge_state_update
from .state_utils import get_unfulfilled_properties, is_missing

__all__ = [
    # 오케스트레이터
    'WorkflowOrchestrator',
    'generate_thread_id',
    'create_checkpointer',
    'create_project_setup_workflow',
    'create_workflow_from_settings',
    # 노드들
    'BaseNode',
    'AbstractToolNode',
    'UserInputExtractionNode',
    'GenerateQuestionNode',
    'GetUserInputNode',
    'FailureNode',
    'PlatformCheckNode',
    'ExtractAndroidSetupNode',
    # 플랫폼 검증기
    'PlatformChecker',
    'PlatformCheckOutcome',
    'SfCliPlatformChecker',
    # 라우터들
    'CheckPropertiesFulfilledRouter',
    'CheckSetupValidatedRouter',
    'CheckAndroidSetupExtractedRouter',
    'CheckFatalErrorsRouter',
    # 상태
    'WorkflowState',
    'create_initial_state',
    'merge_state_update',
    'get_unfulfilled_properties',
    'is_missing',
    # 속성 카탈로그
    'WORKFLOW_USER_INPUT_PROPERTIES',
    'ANDROID_SETUP_PROPERTIES',
]
