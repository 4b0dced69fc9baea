"""pytest 설정 파일

테스트 환경 설정과 공통 픽스처를 제공합니다.
"""

import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

import pytest

# 프로젝트 루트를 Python 경로에 추가 (pytest용)
project_root = Path(__file__).parent.parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from mcp_workflow.config import MCPWorkflowSettings, ProcessEnvironment
from mcp_workflow.models import ToolInvocationData
from mcp_workflow.tool_execution import ToolExecutor
from mcp_workflow.workflows.platform import PlatformChecker, PlatformCheckOutcome


# pytest-asyncio 설정
pytest_plugins = ('pytest_asyncio',)


class FakeToolExecutor(ToolExecutor):
    """미리 정한 결과를 순서대로 반환하고 호출을 기록하는 실행기

    결과가 예외 인스턴스이면 그 예외를 발생시킵니다.
    """

    def __init__(self, *results: Any):
        self.results: List[Any] = list(results)
        self.calls: List[ToolInvocationData] = []

    def execute(self, invocation_data: ToolInvocationData) -> Any:
        self.calls.append(invocation_data)
        result = self.results.pop(0) if self.results else None
        if isinstance(result, Exception):
            raise result
        return result


class FakePlatformChecker(PlatformChecker):
    """고정된 결과를 반환하는 플랫폼 검증기"""

    def __init__(self, all_requirements_met: bool = True, error_messages: Optional[List[str]] = None):
        self.outcome = PlatformCheckOutcome(all_requirements_met, list(error_messages or []))
        self.calls: List[tuple] = []

    def check(self, platform: str, api_level: str) -> PlatformCheckOutcome:
        self.calls.append((platform, api_level))
        return self.outcome


@pytest.fixture
def fake_executor():
    """FakeToolExecutor 생성 함수 픽스처"""
    return FakeToolExecutor


@pytest.fixture
def fake_platform_checker():
    """FakePlatformChecker 생성 함수 픽스처"""
    return FakePlatformChecker


@pytest.fixture
def environment():
    """os.environ 대신 사용하는 빈 프로세스 환경"""
    return ProcessEnvironment({})


@pytest.fixture
def test_logger():
    """테스트용 로거"""
    return logging.getLogger("mcp_workflow.test")


@pytest.fixture
def android_dirs(tmp_path):
    """실제로 존재하는 ANDROID_HOME/JAVA_HOME 디렉토리"""
    android_home = tmp_path / "android-sdk"
    java_home = tmp_path / "jdk"
    android_home.mkdir()
    java_home.mkdir()
    return str(android_home), str(java_home)


@pytest.fixture
def settings(tmp_path):
    """.env 파일의 영향을 받지 않는 테스트 설정"""
    return MCPWorkflowSettings(_env_file=None, env_vars_dir=str(tmp_path / ".magen"))


@pytest.fixture
def complete_user_properties():
    """모든 사용자 입력 속성이 채워진 추출 결과"""
    return {
        "platform": "iOS",
        "project_name": "MyApp",
        "package_name": "com.example.myapp",
        "organization": "Example Inc",
        "login_host": "https://login.example.com",
    }
