"""MCP 워크플로우 환경변수 설정 모듈

모든 환경변수를 중앙에서 관리하고 타입 검증을 제공합니다.
단일 책임 원칙: 환경변수 설정 관리만 담당
"""

import logging
import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field, validator
from pydantic_settings import BaseSettings


CHECKPOINT_BACKENDS = ("sqlite", "memory")


class MCPWorkflowSettings(BaseSettings):
    """MCP 워크플로우 환경변수 설정 클래스

    모든 환경변수는 MCP_WORKFLOW_ 접두사를 가집니다.
    예) MCP_WORKFLOW_LOG_LEVEL=DEBUG
    """

    # 도구 설정
    tool_id_prefix: str = Field(default="magen", description="MCP 도구 ID 접두사")

    # 로깅 설정
    log_level: str = Field(default="INFO", description="로그 레벨")

    # 환경 변수 파일 설정
    env_vars_dir: str = Field(
        default=os.path.join(Path.home(), ".magen"),
        description="env_vars 파일이 저장되는 디렉토리",
    )

    # 플랫폼 설정 검증
    max_android_setup_attempts: int = Field(
        default=1, ge=1, description="Android 설정 복구 최대 시도 횟수"
    )
    platform_check_timeout: float = Field(
        default=20.0, gt=0, description="플랫폼 검증 명령 제한 시간(초)"
    )
    ios_api_level: str = Field(default="17.0", description="검증할 iOS API 레벨")
    android_api_level: str = Field(default="35", description="검증할 Android API 레벨")

    # 체크포인트 저장소 설정
    checkpoint_backend: str = Field(
        default="sqlite", description="워크플로우 체크포인트 저장소 (sqlite 또는 memory)"
    )

    class Config:
        """Pydantic 설정"""
        env_prefix = "MCP_WORKFLOW_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False  # 환경변수 대소문자 구분 안함
        extra = "ignore"  # .env 에 다른 프로젝트 변수가 있어도 무시

    @validator("tool_id_prefix")
    def validate_tool_id_prefix(cls, v):
        """도구 ID 접두사 검증"""
        v = v.strip()
        if not v:
            raise ValueError("도구 ID 접두사는 비어 있을 수 없습니다")
        return v

    @validator("log_level")
    def validate_log_level(cls, v):
        """로그 레벨 검증"""
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"알 수 없는 로그 레벨입니다. 현재 값: {v}")
        return level

    @validator("checkpoint_backend")
    def validate_checkpoint_backend(cls, v):
        """체크포인트 저장소 검증"""
        backend = v.strip().lower()
        if backend not in CHECKPOINT_BACKENDS:
            raise ValueError(f"checkpoint_backend 는 {CHECKPOINT_BACKENDS} 중 하나여야 합니다. 현재 값: {v}")
        return backend

    @validator("env_vars_dir")
    def validate_env_vars_dir(cls, v):
        """env_vars 디렉토리 경로를 절대 경로로 변환"""
        return os.path.abspath(os.path.expanduser(v))

    def get_env_vars_file_path(self) -> str:
        """env_vars 파일 경로 반환

        Returns:
            env_vars 파일의 절대 경로
        """
        return os.path.join(self.env_vars_dir, "env_vars")

    def get_checkpoint_db_path(self) -> str:
        """체크포인트 SQLite 파일 경로 반환"""
        return os.path.join(self.env_vars_dir, "workflow_checkpoints.sqlite")


@lru_cache()
def get_settings() -> MCPWorkflowSettings:
    """환경변수 설정 인스턴스를 반환하는 싱글톤 함수

    Returns:
        MCPWorkflowSettings 인스턴스

    Raises:
        ValueError: 환경변수 값이 잘못된 경우
    """
    try:
        return MCPWorkflowSettings()
    except Exception as e:
        raise ValueError(f"환경변수 설정 로드 실패: {e}")


def reload_settings() -> MCPWorkflowSettings:
    """설정을 다시 로드합니다 (테스트용)

    캐시를 클리어하고 새로운 설정 인스턴스를 생성합니다.
    """
    get_settings.cache_clear()
    return get_settings()
