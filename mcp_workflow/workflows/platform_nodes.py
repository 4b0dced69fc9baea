"""플랫폼 설정 노드

- PlatformCheckNode: 대상 플랫폼의 개발 환경을 검증
- ExtractAndroidSetupNode: 사용자 응답에서 ANDROID_HOME/JAVA_HOME 을 추출하고 적용

프로세스 환경과 env_vars 파일, 플랫폼 검증기는 모두 생성자로 주입받습니다.
"""

import logging
import os
from typing import Any, Callable, Dict, List, Optional

from ..config.environment import (
    ANDROID_HOME,
    JAVA_HOME,
    EnvironmentProvider,
    EnvVarsFileStore,
    ProcessEnvironment,
)
from ..log_utils import create_component_logger
from ..services import InputExtractionService
from ..tool_execution import ToolExecutor
from .base import AbstractToolNode, BaseNode
from .nodes import UserInputExtractionNode
from .platform import PlatformChecker, SfCliPlatformChecker
from .properties import ANDROID_SETUP_PROPERTIES, PLATFORM_ANDROID, PLATFORM_IOS
from .state import WorkflowState
from .state_utils import fatal_errors, is_missing


DEFAULT_API_LEVELS = {
    PLATFORM_IOS: "17.0",
    PLATFORM_ANDROID: "35",
}


class PlatformCheckNode(BaseNode):
    """플랫폼 개발 환경 검증 노드

    예상 가능한 실패는 예외 대신 valid_platform_setup=False 와
    치명적 오류 메시지로 반환합니다.
    """

    def __init__(
        self,
        platform_checker: Optional[PlatformChecker] = None,
        environment: Optional[EnvironmentProvider] = None,
        env_vars_store: Optional[EnvVarsFileStore] = None,
        api_levels: Optional[Dict[str, str]] = None,
        path_exists: Callable[[str], bool] = os.path.isdir,
        logger: Optional[logging.Logger] = None,
        name: str = "checkPlatformSetup",
    ):
        super().__init__(name)
        self.platform_checker = platform_checker or SfCliPlatformChecker()
        self.environment = environment or ProcessEnvironment()
        self.env_vars_store = env_vars_store
        self.api_levels = api_levels or DEFAULT_API_LEVELS
        self.path_exists = path_exists
        self.logger = logger or create_component_logger(f"WorkflowNode:{type(self).__name__}")

    def execute(self, state: WorkflowState) -> Dict[str, Any]:
        platform = state.get("platform")
        api_level = self.api_levels.get(platform) if isinstance(platform, str) else None
        if not api_level:
            return {"valid_platform_setup": False, **fatal_errors(f"잘못된 플랫폼: {platform}")}

        if platform == PLATFORM_ANDROID and not self._android_environment_ready():
            self.logger.info("Android 개발 환경 변수가 설정되지 않았습니다")
            return {"valid_platform_setup": False}

        outcome = self.platform_checker.check(platform, api_level)
        self.logger.info(
            f"플랫폼 설정 검증 완료 - {platform}: {outcome.all_requirements_met}",
            extra={"data": {"error_messages": outcome.error_messages}},
        )
        return {
            "valid_platform_setup": outcome.all_requirements_met,
            **fatal_errors(*outcome.error_messages),
        }

    def _android_environment_ready(self) -> bool:
        if self._has_android_environment():
            return True
        # 환경에 없으면 env_vars 파일에서 불러옵니다
        if self.env_vars_store is not None:
            self.env_vars_store.load_and_set(self.environment, self.path_exists)
        return self._has_android_environment()

    def _has_android_environment(self) -> bool:
        return not is_missing(self.environment.get(ANDROID_HOME)) and not is_missing(
            self.environment.get(JAVA_HOME)
        )


class ExtractAndroidSetupNode(AbstractToolNode):
    """사용자 응답에서 Android 개발 환경 경로를 추출하는 노드

    존재하는 경로만 상태와 프로세스 환경에 반영하고 env_vars 파일에 저장합니다.
    존재하지 않거나 제공되지 않은 경로는 상태에서 비우고 오류 메시지를 남깁니다.
    실행할 때마다 android_setup_attempts 를 1 증가시킵니다.
    """

    def __init__(
        self,
        extraction_service: Optional[InputExtractionService] = None,
        environment: Optional[EnvironmentProvider] = None,
        env_vars_store: Optional[EnvVarsFileStore] = None,
        path_exists: Callable[[str], bool] = os.path.isdir,
        tool_executor: Optional[ToolExecutor] = None,
        logger: Optional[logging.Logger] = None,
        name: str = "extractAndroidSetup",
    ):
        super().__init__(name, tool_executor, logger)
        self.extraction_node = UserInputExtractionNode(
            ANDROID_SETUP_PROPERTIES,
            extraction_service=extraction_service,
            tool_executor=self.tool_executor,
            logger=self.logger,
            name=f"{name}:extraction",
        )
        self.environment = environment or ProcessEnvironment()
        self.env_vars_store = env_vars_store
        self.path_exists = path_exists

    def execute(self, state: WorkflowState) -> Dict[str, Any]:
        extracted = self.extraction_node.execute(state)

        update: Dict[str, Any] = {
            "android_setup_attempts": (state.get("android_setup_attempts") or 0) + 1,
        }
        error_messages: List[str] = []
        valid_paths: Dict[str, str] = {}

        for property_name, env_name in (("android_home", ANDROID_HOME), ("java_home", JAVA_HOME)):
            path = extracted.get(property_name)
            if is_missing(path):
                # 재시도에서는 이전 시도에서 확인된 경로를 유지합니다
                path = state.get(property_name)
            if is_missing(path):
                update[property_name] = None
                error_messages.append(f"{env_name} 값이 제공되지 않았습니다")
            elif not self.path_exists(path):
                update[property_name] = None
                error_messages.append(f"{env_name} 경로가 존재하지 않습니다: {path}")
            else:
                update[property_name] = path
                valid_paths[env_name] = path
                self.environment.set(env_name, path)

        if valid_paths and self.env_vars_store is not None:
            self.env_vars_store.save(valid_paths)

        if error_messages:
            self.logger.warning(
                "Android 설정 추출 실패",
                extra={"data": {"error_messages": error_messages}},
            )
            update.update(fatal_errors(*error_messages))
        else:
            self.logger.info("Android 설정 추출 완료", extra={"data": valid_paths})

        return update
