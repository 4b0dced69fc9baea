"""MCP 워크플로우 설정 패키지

환경변수 설정과 프로세스 환경/env_vars 파일 관련 모듈들을 포함합니다.
"""

# 환경변수 설정 모듈
from .env_config import (
    MCPWorkflowSettings,
    get_settings,
    reload_settings,
)

# 프로세스 환경 모듈
from .environment import (
    ANDROID_HOME,
    JAVA_HOME,
    EnvironmentProvider,
    ProcessEnvironment,
    EnvVarsFileStore,
)

__all__ = [
    # 환경변수 설정
    "MCPWorkflowSettings",
    "get_settings",
    "reload_settings",
    # 프로세스 환경
    "ANDROID_HOME",
    "JAVA_HOME",
    "EnvironmentProvider",
    "ProcessEnvironment",
    "EnvVarsFileStore",
]
