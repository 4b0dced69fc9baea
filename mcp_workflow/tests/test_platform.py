"""플랫폼 설정 검증 테스트

PlatformCheckNode, ExtractAndroidSetupNode, SfCliPlatformChecker 를 검증합니다.
"""

import copy
import json
import subprocess

import pytest

from mcp_workflow.config import EnvVarsFileStore, ProcessEnvironment
from mcp_workflow.workflows.platform import SfCliPlatformChecker
from mcp_workflow.workflows.platform_nodes import ExtractAndroidSetupNode, PlatformCheckNode


def _sf_output(has_met_all_requirements, tests):
    return json.dumps({
        "outputContent": {"hasMetAllRequirements": has_met_all_requirements, "tests": tests},
        "outputSchema": {},
    })


class TestPlatformCheckNode:
    """플랫폼 검증 노드 테스트 클래스"""

    @pytest.mark.parametrize("platform", [None, "", "Windows", "ios"])
    def test_invalid_platform(self, fake_platform_checker, environment, platform):
        """잘못된 플랫폼 테스트"""
        checker = fake_platform_checker()
        node = PlatformCheckNode(platform_checker=checker, environment=environment)

        update = node.execute({"platform": platform})

        assert update == {
            "valid_platform_setup": False,
            "workflow_fatal_error_messages": [f"잘못된 플랫폼: {platform}"],
        }
        assert checker.calls == []

    def test_ios_success(self, fake_platform_checker, environment):
        """iOS 검증 성공 테스트"""
        checker = fake_platform_checker(True)
        node = PlatformCheckNode(platform_checker=checker, environment=environment)

        update = node.execute({"platform": "iOS"})

        assert update == {"valid_platform_setup": True, "workflow_fatal_error_messages": []}
        assert checker.calls == [("iOS", "17.0")]

    def test_checker_failure_messages(self, fake_platform_checker, environment):
        """검증 실패 메시지 전달 테스트 (빈 메시지는 제외)"""
        checker = fake_platform_checker(False, ["Xcode 가 설치되지 않았습니다", ""])
        node = PlatformCheckNode(
            platform_checker=checker, environment=environment, api_levels={"iOS": "18.0"}
        )

        update = node.execute({"platform": "iOS"})

        assert update["valid_platform_setup"] is False
        assert update["workflow_fatal_error_messages"] == ["Xcode 가 설치되지 않았습니다"]
        assert checker.calls == [("iOS", "18.0")]

    def test_android_without_environment(self, fake_platform_checker, environment):
        """Android 환경 변수 누락 테스트"""
        checker = fake_platform_checker(True)
        node = PlatformCheckNode(platform_checker=checker, environment=environment)

        assert node.execute({"platform": "Android"}) == {"valid_platform_setup": False}
        assert checker.calls == []

    def test_android_environment_loaded_from_file(
        self, fake_platform_checker, environment, android_dirs, tmp_path
    ):
        """env_vars 파일에서 Android 환경 로드 테스트"""
        android_home, java_home = android_dirs
        store = EnvVarsFileStore(str(tmp_path / "env_vars"))
        store.save({"ANDROID_HOME": android_home, "JAVA_HOME": java_home})
        checker = fake_platform_checker(True)
        node = PlatformCheckNode(
            platform_checker=checker, environment=environment, env_vars_store=store
        )

        update = node.execute({"platform": "Android"})

        assert update["valid_platform_setup"] is True
        assert checker.calls == [("Android", "35")]
        assert environment.get("ANDROID_HOME") == android_home
        assert environment.get("JAVA_HOME") == java_home

    def test_does_not_mutate_state(self, fake_platform_checker, environment):
        """입력 상태 불변 테스트"""
        node = PlatformCheckNode(platform_checker=fake_platform_checker(False, ["오류"]), environment=environment)
        state = {"platform": "iOS", "workflow_fatal_error_messages": ["이전 오류"]}
        snapshot = copy.deepcopy(state)

        node.execute(state)

        assert state == snapshot


class TestExtractAndroidSetupNode:
    """Android 설정 추출 노드 테스트 클래스"""

    def test_valid_paths(self, fake_executor, environment, android_dirs, tmp_path):
        """유효한 경로 추출 테스트"""
        android_home, java_home = android_dirs
        store = EnvVarsFileStore(str(tmp_path / "magen" / "env_vars"))
        executor = fake_executor({
            "extracted_properties": {"android_home": android_home, "java_home": java_home}
        })
        node = ExtractAndroidSetupNode(
            tool_executor=executor, environment=environment, env_vars_store=store
        )

        update = node.execute({"user_input": "경로 안내", "android_setup_attempts": 0})

        assert update == {
            "android_setup_attempts": 1,
            "android_home": android_home,
            "java_home": java_home,
        }
        assert environment.get("ANDROID_HOME") == android_home
        assert environment.get("JAVA_HOME") == java_home
        assert store.load() == {"ANDROID_HOME": android_home, "JAVA_HOME": java_home}

    def test_nonexistent_and_missing_paths(self, fake_executor, environment, android_dirs, tmp_path):
        """존재하지 않는 경로와 누락된 경로 테스트"""
        android_home, _ = android_dirs
        missing_java = str(tmp_path / "no-such-jdk")
        executor = fake_executor({
            "extracted_properties": {"android_home": android_home, "java_home": missing_java}
        })
        node = ExtractAndroidSetupNode(tool_executor=executor, environment=environment)

        update = node.execute({"user_input": "경로 안내", "android_setup_attempts": 2})

        assert update["android_setup_attempts"] == 3
        assert update["android_home"] == android_home
        assert update["java_home"] is None
        assert update["workflow_fatal_error_messages"] == [
            f"JAVA_HOME 경로가 존재하지 않습니다: {missing_java}"
        ]
        assert environment.get("JAVA_HOME") is None

    def test_nothing_extracted(self, fake_executor, environment):
        """아무 경로도 추출되지 않은 경우 테스트"""
        executor = fake_executor({"extracted_properties": {}})
        node = ExtractAndroidSetupNode(tool_executor=executor, environment=environment)

        update = node.execute({"user_input": "모르겠어요"})

        assert update["android_home"] is None
        assert update["java_home"] is None
        assert update["android_setup_attempts"] == 1
        assert update["workflow_fatal_error_messages"] == [
            "ANDROID_HOME 값이 제공되지 않았습니다",
            "JAVA_HOME 값이 제공되지 않았습니다",
        ]

    def test_retry_keeps_previous_valid_path(self, fake_executor, environment, android_dirs):
        """재시도 시 이전에 확인된 경로 유지 테스트"""
        android_home, java_home = android_dirs
        executor = fake_executor({"extracted_properties": {"java_home": java_home}})
        node = ExtractAndroidSetupNode(tool_executor=executor, environment=environment)

        update = node.execute({
            "user_input": "JDK 경로입니다",
            "android_home": android_home,
            "android_setup_attempts": 1,
        })

        assert update == {
            "android_setup_attempts": 2,
            "android_home": android_home,
            "java_home": java_home,
        }


class TestSfCliPlatformChecker:
    """sf CLI 플랫폼 검증기 테스트 클래스"""

    def _runner(self, stdout=None, error=None):
        calls = []

        def runner(command, **kwargs):
            calls.append((command, kwargs))
            if error is not None:
                raise error
            return subprocess.CompletedProcess(command, 0, stdout=stdout, stderr="")

        runner.calls = calls
        return runner

    def test_command_and_success(self):
        """명령 구성과 성공 결과 테스트"""
        runner = self._runner(_sf_output(True, [{"title": "Xcode", "hasPassed": True}]))
        checker = SfCliPlatformChecker(timeout=5, runner=runner)

        outcome = checker.check("iOS", "17.0")

        assert outcome.all_requirements_met is True
        assert outcome.error_messages == []
        command, kwargs = runner.calls[0]
        assert command == ["sf", "force", "lightning", "local", "setup", "-p", "ios", "-l", "17.0", "--json"]
        assert kwargs["timeout"] == 5

    def test_failed_requirements(self):
        """실패한 요구사항 메시지 테스트"""
        runner = self._runner(_sf_output(False, [
            {"title": "SDK", "hasPassed": True, "message": "ok"},
            {"title": "Emulator", "hasPassed": False, "message": "에뮬레이터 없음"},
        ]))
        checker = SfCliPlatformChecker(runner=runner)

        outcome = checker.check("Android", "35")

        assert outcome.all_requirements_met is False
        assert len(outcome.error_messages) == 1
        assert outcome.error_messages[0].endswith("에뮬레이터 없음")

    @pytest.mark.parametrize("stdout", ["not json", json.dumps({"outputSchema": {}}), "[]"])
    def test_unparseable_output(self, stdout):
        """해석할 수 없는 출력 테스트"""
        checker = SfCliPlatformChecker(runner=self._runner(stdout))

        outcome = checker.check("iOS", "17.0")

        assert outcome.all_requirements_met is False
        assert outcome.error_messages[0].startswith("명령 출력이 올바른 JSON 이 아닙니다")

    @pytest.mark.parametrize("error", [
        subprocess.TimeoutExpired(["sf"], 20),
        subprocess.CalledProcessError(1, ["sf"]),
        FileNotFoundError("sf"),
    ])
    def test_command_errors(self, error):
        """명령 실행 오류 테스트"""
        checker = SfCliPlatformChecker(runner=self._runner(error=error))

        outcome = checker.check("iOS", "17.0")

        assert outcome.all_requirements_met is False
        assert outcome.error_messages[0].startswith("플랫폼 검증 명령 실행 오류")
