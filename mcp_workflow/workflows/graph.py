"""LangGraph StateGraph 워크플로우 구성

노드와 라우터를 연결하여 모바일 프로젝트 설정 워크플로우를 구성합니다.
단일 책임 원칙: 워크플로우 구성만 담당하며, 컴파일과 실행은 오케스트레이터가 담당합니다.
"""

import logging
import os
from typing import Callable, Dict, Optional

from langgraph.graph import END, StateGraph

from ..config.env_config import MCPWorkflowSettings
from ..config.environment import EnvironmentProvider, EnvVarsFileStore, ProcessEnvironment
from ..tool_execution import ToolExecutor
from ..tools.metadata import (
    create_failure_tool_metadata,
    create_generate_question_tool_metadata,
    create_get_input_tool_metadata,
    create_input_extraction_tool_metadata,
)
from ..services import GenerateQuestionService, GetInputService, InputExtractionService
from .nodes import FailureNode, GenerateQuestionNode, GetUserInputNode, UserInputExtractionNode
from .platform import PlatformChecker, SfCliPlatformChecker
from .platform_nodes import ExtractAndroidSetupNode, PlatformCheckNode
from .properties import (
    ANDROID_SETUP_PROPERTIES,
    PLATFORM_ANDROID,
    PLATFORM_IOS,
    WORKFLOW_USER_INPUT_PROPERTIES,
)
from .routers import (
    CheckAndroidSetupExtractedRouter,
    CheckPropertiesFulfilledRouter,
    CheckSetupValidatedRouter,
)
from .state import WorkflowState


# 노드 이름
INITIAL_USER_INPUT_EXTRACTION = "initial_user_input_extraction"
GENERATE_QUESTION = "generate_question"
GET_USER_INPUT = "get_user_input"
USER_INPUT_EXTRACTION = "user_input_extraction"
CHECK_PLATFORM_SETUP = "check_platform_setup"
GET_ANDROID_SETUP = "get_android_setup"
EXTRACT_ANDROID_SETUP = "extract_android_setup"
FAILURE = "failure"


def create_project_setup_workflow(
    tool_id_prefix: Optional[str] = None,
    tool_executor: Optional[ToolExecutor] = None,
    platform_checker: Optional[PlatformChecker] = None,
    environment: Optional[EnvironmentProvider] = None,
    env_vars_store: Optional[EnvVarsFileStore] = None,
    path_exists: Callable[[str], bool] = os.path.isdir,
    api_levels: Optional[Dict[str, str]] = None,
    max_android_setup_attempts: int = 1,
) -> StateGraph:
    """모바일 프로젝트 설정 워크플로우를 생성합니다

    워크플로우 구조:
    START → initial_user_input_extraction → [속성 충족?] → check_platform_setup
                                            ↘ generate_question → get_user_input → user_input_extraction → [속성 충족?]
    check_platform_setup → [설정 검증?] → END
                           ↘ get_android_setup → extract_android_setup → [경로 추출?] → check_platform_setup
                                                                          ↘ get_android_setup (시도 횟수가 남은 경우)
                                                                          ↘ failure → END
                           ↘ failure → END

    Args:
        tool_id_prefix: 호스트에 노출되는 도구 ID 접두사
        tool_executor: 모든 노드가 공유할 실행기 (기본값: LangGraph interrupt)
        platform_checker: 플랫폼 검증기 (기본값: sf CLI)
        environment: 프로세스 환경
        env_vars_store: env_vars 파일 저장소
        path_exists: 경로 존재 확인 함수
        api_levels: 플랫폼별 API 레벨
        max_android_setup_attempts: Android 설정 복구 최대 시도 횟수

    Returns:
        컴파일되지 않은 StateGraph
    """
    logger = logging.getLogger(__name__)

    prefix_kwargs = {"prefix": tool_id_prefix} if tool_id_prefix else {}
    environment = environment or ProcessEnvironment()

    extraction_service = InputExtractionService(
        tool_metadata=create_input_extraction_tool_metadata(**prefix_kwargs),
        tool_executor=tool_executor,
    )
    question_service = GenerateQuestionService(
        tool_metadata=create_generate_question_tool_metadata(**prefix_kwargs),
        tool_executor=tool_executor,
    )
    input_service = GetInputService(
        tool_metadata=create_get_input_tool_metadata(**prefix_kwargs),
        tool_executor=tool_executor,
    )

    # 노드 생성
    initial_extraction = UserInputExtractionNode(
        WORKFLOW_USER_INPUT_PROPERTIES,
        extraction_service=extraction_service,
        tool_executor=tool_executor,
        name=INITIAL_USER_INPUT_EXTRACTION,
    )
    generate_question = GenerateQuestionNode(
        WORKFLOW_USER_INPUT_PROPERTIES,
        question_service=question_service,
        tool_executor=tool_executor,
        name=GENERATE_QUESTION,
    )
    get_user_input = GetUserInputNode(
        WORKFLOW_USER_INPUT_PROPERTIES,
        input_service=input_service,
        tool_executor=tool_executor,
        name=GET_USER_INPUT,
    )
    user_input_extraction = UserInputExtractionNode(
        WORKFLOW_USER_INPUT_PROPERTIES,
        extraction_service=extraction_service,
        tool_executor=tool_executor,
        name=USER_INPUT_EXTRACTION,
    )
    check_platform_setup = PlatformCheckNode(
        platform_checker=platform_checker or SfCliPlatformChecker(),
        environment=environment,
        env_vars_store=env_vars_store,
        api_levels=api_levels,
        path_exists=path_exists,
        name=CHECK_PLATFORM_SETUP,
    )
    get_android_setup = GetUserInputNode(
        ANDROID_SETUP_PROPERTIES,
        input_service=input_service,
        tool_executor=tool_executor,
        name=GET_ANDROID_SETUP,
    )
    extract_android_setup = ExtractAndroidSetupNode(
        extraction_service=extraction_service,
        environment=environment,
        env_vars_store=env_vars_store,
        path_exists=path_exists,
        tool_executor=tool_executor,
        name=EXTRACT_ANDROID_SETUP,
    )
    failure = FailureNode(
        tool_metadata=create_failure_tool_metadata(**prefix_kwargs),
        tool_executor=tool_executor,
        name=FAILURE,
    )

    # 라우터 생성
    properties_router = CheckPropertiesFulfilledRouter(
        CHECK_PLATFORM_SETUP,
        GENERATE_QUESTION,
        WORKFLOW_USER_INPUT_PROPERTIES,
    )
    setup_router = CheckSetupValidatedRouter(
        END,
        GET_ANDROID_SETUP,
        FAILURE,
        max_android_setup_attempts=max_android_setup_attempts,
    )
    android_setup_router = CheckAndroidSetupExtractedRouter(
        CHECK_PLATFORM_SETUP,
        FAILURE,
        retry_node_name=GET_ANDROID_SETUP,
        max_android_setup_attempts=max_android_setup_attempts,
    )

    # StateGraph 생성
    workflow = StateGraph(WorkflowState)

    for node in (
        initial_extraction,
        generate_question,
        get_user_input,
        user_input_extraction,
        check_platform_setup,
        get_android_setup,
        extract_android_setup,
        failure,
    ):
        workflow.add_node(node.name, node.execute)

    # 시작점 설정
    workflow.set_entry_point(INITIAL_USER_INPUT_EXTRACTION)

    # 사용자 입력 수집 루프
    workflow.add_conditional_edges(
        INITIAL_USER_INPUT_EXTRACTION,
        properties_router.execute,
        [CHECK_PLATFORM_SETUP, GENERATE_QUESTION],
    )
    workflow.add_edge(GENERATE_QUESTION, GET_USER_INPUT)
    workflow.add_edge(GET_USER_INPUT, USER_INPUT_EXTRACTION)
    workflow.add_conditional_edges(
        USER_INPUT_EXTRACTION,
        properties_router.execute,
        [CHECK_PLATFORM_SETUP, GENERATE_QUESTION],
    )

    # 플랫폼 설정 검증과 Android 복구
    workflow.add_conditional_edges(
        CHECK_PLATFORM_SETUP,
        setup_router.execute,
        [END, GET_ANDROID_SETUP, FAILURE],
    )
    workflow.add_edge(GET_ANDROID_SETUP, EXTRACT_ANDROID_SETUP)
    workflow.add_conditional_edges(
        EXTRACT_ANDROID_SETUP,
        android_setup_router.execute,
        [CHECK_PLATFORM_SETUP, GET_ANDROID_SETUP, FAILURE],
    )

    workflow.add_edge(FAILURE, END)

    logger.info("프로젝트 설정 워크플로우 구성 완료")
    return workflow


def create_workflow_from_settings(
    settings: MCPWorkflowSettings,
    tool_executor: Optional[ToolExecutor] = None,
    platform_checker: Optional[PlatformChecker] = None,
    environment: Optional[EnvironmentProvider] = None,
) -> StateGraph:
    """설정 값으로 워크플로우를 생성합니다"""
    return create_project_setup_workflow(
        tool_id_prefix=settings.tool_id_prefix,
        tool_executor=tool_executor,
        platform_checker=platform_checker or SfCliPlatformChecker(timeout=settings.platform_check_timeout),
        environment=environment,
        env_vars_store=EnvVarsFileStore(settings.get_env_vars_file_path()),
        api_levels={
            PLATFORM_IOS: settings.ios_api_level,
            PLATFORM_ANDROID: settings.android_api_level,
        },
        max_android_setup_attempts=settings.max_android_setup_attempts,
    )
