"""조건부 라우터 테스트"""

import copy
import logging

import pytest

from mcp_workflow.workflows.properties import WORKFLOW_USER_INPUT_PROPERTIES
from mcp_workflow.workflows.routers import (
    CheckAndroidSetupExtractedRouter,
    CheckFatalErrorsRouter,
    CheckPropertiesFulfilledRouter,
    CheckSetupValidatedRouter,
)


# 없음으로 취급되는 값들: 필드 없음, None, 빈 문자열
MISSING = object()
MISSING_VALUES = [MISSING, None, ""]


def _with(state, key, value):
    state = dict(state)
    if value is not MISSING:
        state[key] = value
    return state


class TestCheckAndroidSetupExtractedRouter:
    """Android 설정 추출 라우터 테스트 클래스"""

    @pytest.fixture
    def router(self):
        return CheckAndroidSetupExtractedRouter("ready", "failed")

    def test_both_paths_present(self, router):
        """두 경로가 모두 있으면 준비 노드로 이동"""
        state = {"android_home": "/sdk", "java_home": "/jdk"}
        assert router.execute(state) == "ready"

    @pytest.mark.parametrize("value", MISSING_VALUES)
    def test_missing_java_home(self, router, value):
        """JAVA_HOME 이 없으면 실패 노드로 이동"""
        state = _with({"android_home": "/sdk"}, "java_home", value)
        assert router.execute(state) == "failed"

    @pytest.mark.parametrize("value", MISSING_VALUES)
    def test_missing_android_home(self, router, value):
        """ANDROID_HOME 이 없으면 실패 노드로 이동"""
        state = _with({"java_home": "/jdk"}, "android_home", value)
        assert router.execute(state) == "failed"

    def test_does_not_mutate_state(self, router):
        """입력 상태 불변 테스트"""
        state = {"android_home": "/sdk", "java_home": None}
        snapshot = copy.deepcopy(state)

        router.execute(state)
        router.execute(state)

        assert state == snapshot

    @pytest.mark.parametrize("attempts,expected", [
        (MISSING, "retry"),
        (1, "retry"),
        (2, "failed"),
        (3, "failed"),
    ])
    def test_retry_while_attempts_remain(self, attempts, expected):
        """복구 시도 횟수가 남아 있으면 재시도 노드로 이동"""
        router = CheckAndroidSetupExtractedRouter(
            "ready", "failed", retry_node_name="retry", max_android_setup_attempts=2
        )
        state = _with({"android_home": "/sdk", "java_home": None}, "android_setup_attempts", attempts)

        assert router.execute(state) == expected

    def test_retry_not_used_when_paths_present(self):
        """경로가 모두 있으면 재시도 설정과 무관하게 준비 노드로 이동"""
        router = CheckAndroidSetupExtractedRouter(
            "ready", "failed", retry_node_name="retry", max_android_setup_attempts=5
        )
        state = {"android_home": "/sdk", "java_home": "/jdk", "android_setup_attempts": 1}

        assert router.execute(state) == "ready"


class TestCheckSetupValidatedRouter:
    """플랫폼 설정 검증 라우터 테스트 클래스"""

    @pytest.fixture
    def router(self):
        return CheckSetupValidatedRouter("ready", "android_recovery", "failed")

    @pytest.mark.parametrize("platform", ["iOS", "Android"])
    def test_valid_setup(self, router, platform):
        """검증 성공 시 준비 노드로 이동"""
        assert router.execute({"platform": platform, "valid_platform_setup": True}) == "ready"

    @pytest.mark.parametrize("android_home", MISSING_VALUES)
    @pytest.mark.parametrize("java_home", MISSING_VALUES)
    def test_android_recovery_when_both_paths_missing(self, router, android_home, java_home):
        """Android 이고 두 경로가 모두 없으면 복구 노드로 이동"""
        state = {"platform": "Android", "valid_platform_setup": False}
        state = _with(state, "android_home", android_home)
        state = _with(state, "java_home", java_home)
        assert router.execute(state) == "android_recovery"

    def test_android_with_one_path_fails(self, router):
        """경로가 하나라도 있으면 실패 노드로 이동"""
        state = {"platform": "Android", "valid_platform_setup": False, "android_home": "/sdk"}
        assert router.execute(state) == "failed"

    def test_ios_never_recovers(self, router):
        """iOS 는 복구 경로가 없음"""
        assert router.execute({"platform": "iOS", "valid_platform_setup": False}) == "failed"

    @pytest.mark.parametrize("valid", [False, None, MISSING])
    def test_missing_validation_flag_is_invalid(self, router, valid):
        """검증 플래그가 없으면 실패로 취급"""
        state = _with({"platform": "iOS"}, "valid_platform_setup", valid)
        assert router.execute(state) == "failed"

    def test_recovery_attempts_are_bounded(self):
        """복구 시도 횟수 제한 테스트"""
        router = CheckSetupValidatedRouter("ready", "android_recovery", "failed", max_android_setup_attempts=2)
        state = {"platform": "Android", "valid_platform_setup": False}

        assert router.execute(dict(state, android_setup_attempts=1)) == "android_recovery"
        assert router.execute(dict(state, android_setup_attempts=2)) == "failed"


class TestCheckPropertiesFulfilledRouter:
    """속성 충족 라우터 테스트 클래스"""

    @pytest.fixture
    def router(self):
        return CheckPropertiesFulfilledRouter("fulfilled", "unfulfilled", WORKFLOW_USER_INPUT_PROPERTIES)

    def test_all_properties_present(self, router, complete_user_properties):
        """모든 속성 충족 테스트"""
        assert router.execute(complete_user_properties) == "fulfilled"

    @pytest.mark.parametrize("value", MISSING_VALUES)
    def test_missing_property(self, router, complete_user_properties, value):
        """속성 하나라도 없으면 미충족"""
        state = dict(complete_user_properties)
        del state["organization"]
        state = _with(state, "organization", value)
        assert router.execute(state) == "unfulfilled"


class TestCheckFatalErrorsRouter:
    """치명적 오류 라우터 테스트 클래스"""

    @pytest.fixture
    def router(self):
        return CheckFatalErrorsRouter("success", "failure")

    @pytest.mark.parametrize("messages", [MISSING, None, []])
    def test_no_errors(self, router, messages, caplog):
        """오류가 없으면 성공 노드로 이동"""
        with caplog.at_level(logging.INFO, logger="mcp_workflow"):
            assert router.execute(_with({}, "workflow_fatal_error_messages", messages)) == "success"
        assert caplog.records[-1].levelname == "INFO"

    def test_errors(self, router, caplog):
        """오류가 있으면 실패 노드로 이동"""
        with caplog.at_level(logging.INFO, logger="mcp_workflow"):
            assert router.execute({"workflow_fatal_error_messages": ["오류"]}) == "failure"
        assert caplog.records[-1].levelname == "WARNING"
        assert caplog.records[-1].data == {"messages": ["오류"]}
