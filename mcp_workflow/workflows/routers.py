"""조건부 라우터

현재 상태를 보고 다음에 실행할 노드 이름을 결정합니다.
라우터는 순수 함수처럼 동작합니다. 상태를 변경하지 않고,
같은 상태에 대해 항상 같은 노드 이름을 반환합니다.

값의 '없음' 판단은 state_utils.is_missing 을 공통으로 사용하므로
필드가 없는 경우, None, 빈 문자열이 모두 같은 경로로 라우팅됩니다.
"""

import logging
from typing import Optional

from ..log_utils import create_component_logger
from ..models import PropertyMetadataCollection
from .properties import PLATFORM_ANDROID
from .state import WorkflowState
from .state_utils import get_unfulfilled_properties, is_missing


class CheckPropertiesFulfilledRouter:
    """필수 속성이 모두 채워졌는지에 따라 라우팅합니다"""

    def __init__(
        self,
        properties_fulfilled_node_name: str,
        properties_unfulfilled_node_name: str,
        properties: PropertyMetadataCollection,
        logger: Optional[logging.Logger] = None,
    ):
        self.properties_fulfilled_node_name = properties_fulfilled_node_name
        self.properties_unfulfilled_node_name = properties_unfulfilled_node_name
        self.properties = properties
        self.logger = logger or create_component_logger("CheckPropertiesFulfilledRouter")

    def execute(self, state: WorkflowState) -> str:
        unfulfilled = get_unfulfilled_properties(state, self.properties)
        if unfulfilled:
            self.logger.debug(f"미충족 속성: {', '.join(unfulfilled)}")
            return self.properties_unfulfilled_node_name
        return self.properties_fulfilled_node_name


class CheckSetupValidatedRouter:
    """플랫폼 설정 검증 결과에 따라 라우팅합니다

    - 검증 성공: 준비 완료 노드
    - Android 이고 ANDROID_HOME/JAVA_HOME 경로가 둘 다 없으며 복구 시도 횟수가
      남아 있는 경우: Android 설정 복구 노드
    - 그 외: 실패 노드

    iOS 는 복구 경로가 없습니다.
    """

    def __init__(
        self,
        setup_validated_node_name: str,
        android_setup_node_name: str,
        invalid_setup_node_name: str,
        max_android_setup_attempts: int = 1,
    ):
        self.setup_validated_node_name = setup_validated_node_name
        self.android_setup_node_name = android_setup_node_name
        self.invalid_setup_node_name = invalid_setup_node_name
        self.max_android_setup_attempts = max_android_setup_attempts

    def execute(self, state: WorkflowState) -> str:
        if state.get("valid_platform_setup") is True:
            return self.setup_validated_node_name

        if (
            state.get("platform") == PLATFORM_ANDROID
            and is_missing(state.get("android_home"))
            and is_missing(state.get("java_home"))
            and (state.get("android_setup_attempts") or 0) < self.max_android_setup_attempts
        ):
            return self.android_setup_node_name

        return self.invalid_setup_node_name


class CheckAndroidSetupExtractedRouter:
    """ANDROID_HOME/JAVA_HOME 이 모두 추출되었는지에 따라 라우팅합니다

    경로가 하나라도 없을 때 재시도 노드가 지정되어 있고 복구 시도 횟수가
    남아 있으면 재시도 노드로, 아니면 실패 노드로 이동합니다.
    """

    def __init__(
        self,
        android_setup_extracted_node_name: str,
        failure_node_name: str,
        retry_node_name: Optional[str] = None,
        max_android_setup_attempts: int = 1,
    ):
        self.android_setup_extracted_node_name = android_setup_extracted_node_name
        self.failure_node_name = failure_node_name
        self.retry_node_name = retry_node_name
        self.max_android_setup_attempts = max_android_setup_attempts

    def execute(self, state: WorkflowState) -> str:
        if not is_missing(state.get("android_home")) and not is_missing(state.get("java_home")):
            return self.android_setup_extracted_node_name
        if (
            self.retry_node_name is not None
            and (state.get("android_setup_attempts") or 0) < self.max_android_setup_attempts
        ):
            return self.retry_node_name
        return self.failure_node_name


class CheckFatalErrorsRouter:
    """치명적 오류 메시지 유무에 따라 라우팅합니다"""

    def __init__(
        self,
        success_node_name: str,
        failure_node_name: str,
        logger: Optional[logging.Logger] = None,
    ):
        self.success_node_name = success_node_name
        self.failure_node_name = failure_node_name
        self.logger = logger or create_component_logger("CheckFatalErrorsRouter")

    def execute(self, state: WorkflowState) -> str:
        messages = state.get("workflow_fatal_error_messages")
        if not is_missing(messages):
            self.logger.warning(
                "치명적 오류가 있어 실패 노드로 이동합니다",
                extra={"data": {"messages": messages}},
            )
            return self.failure_node_name
        self.logger.info("치명적 오류 없음")
        return self.success_node_name
