"""플랫폼 설정 검증기

모바일 개발 환경(SDK, 시뮬레이터/에뮬레이터 요구사항)을 검사하는 협력 객체입니다.
기본 구현은 sf CLI 의 'force lightning local setup' 명령을 실행하고
JSON 출력의 outputContent 를 해석합니다.
"""

import json
import logging
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..log_utils import create_component_logger


@dataclass(frozen=True)
class PlatformCheckOutcome:
    """플랫폼 검증 결과"""
    all_requirements_met: bool
    error_messages: List[str] = field(default_factory=list)


class RequirementResult(BaseModel):
    """sf CLI 가 보고하는 개별 요구사항 검사 결과"""
    model_config = ConfigDict(populate_by_name=True)

    title: str
    has_passed: bool = Field(..., alias="hasPassed")
    message: str = ""


class PlatformCheckReport(BaseModel):
    """sf CLI outputContent 형식"""
    model_config = ConfigDict(populate_by_name=True)

    has_met_all_requirements: bool = Field(..., alias="hasMetAllRequirements")
    tests: List[RequirementResult] = Field(default_factory=list)
    duration: Optional[float] = None


class PlatformChecker(ABC):
    """플랫폼 검증기 인터페이스

    예상 가능한 실패(명령 실패, 시간 초과, 잘못된 출력)는 예외 대신
    all_requirements_met=False 와 오류 메시지로 반환합니다.
    """

    @abstractmethod
    def check(self, platform: str, api_level: str) -> PlatformCheckOutcome:
        """플랫폼 설정을 검사합니다"""


class SfCliPlatformChecker(PlatformChecker):
    """sf CLI 기반 플랫폼 검증기"""

    def __init__(
        self,
        timeout: float = 20.0,
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
        logger: Optional[logging.Logger] = None,
    ):
        self.timeout = timeout
        self.runner = runner
        self.logger = logger or create_component_logger("SfCliPlatformChecker")

    def build_command(self, platform: str, api_level: str) -> List[str]:
        return ["sf", "force", "lightning", "local", "setup", "-p", platform.lower(), "-l", api_level, "--json"]

    def check(self, platform: str, api_level: str) -> PlatformCheckOutcome:
        command = self.build_command(platform, api_level)
        command_text = " ".join(command)

        self.logger.debug("명령 실행 (실행 전)", extra={"data": {"command": command_text}})
        try:
            completed = self.runner(
                command,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=True,
            )
        except (OSError, subprocess.SubprocessError) as e:
            return PlatformCheckOutcome(
                all_requirements_met=False,
                error_messages=[f"플랫폼 검증 명령 실행 오류: {e}"],
            )
        self.logger.debug("명령 실행 (실행 후)", extra={"data": {"output": completed.stdout}})

        return self.parse_output(completed.stdout, command_text)

    @staticmethod
    def parse_output(output: str, command_text: str) -> PlatformCheckOutcome:
        """명령 출력을 해석합니다

        출력은 outputContent 와 outputSchema 를 가진 JSON 객체이며 outputContent 만 사용합니다.
        """
        try:
            report = PlatformCheckReport.model_validate(json.loads(output).get("outputContent"))
        except (TypeError, ValueError, AttributeError, ValidationError) as e:
            return PlatformCheckOutcome(
                all_requirements_met=False,
                error_messages=[f"명령 출력이 올바른 JSON 이 아닙니다: {e}"],
            )

        return PlatformCheckOutcome(
            all_requirements_met=report.has_met_all_requirements,
            error_messages=[
                f'"{command_text}" 플랫폼 설정 검사 실패: {test.message}'
                for test in report.tests
                if not test.has_passed
            ],
        )
