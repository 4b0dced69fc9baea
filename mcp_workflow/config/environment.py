"""프로세스 환경 접근과 env_vars 파일 관리

노드는 os.environ 을 직접 읽지 않고 EnvironmentProvider 를 주입받습니다.
EnvVarsFileStore 는 Android 설정 경로처럼 세션을 넘어 유지해야 하는 값을
KEY=VALUE 형식의 파일로 저장하고 읽습니다.
"""

import logging
import os
from abc import ABC, abstractmethod
from typing import Callable, Dict, Iterable, MutableMapping, Optional

from ..log_utils import create_component_logger


ANDROID_HOME = "ANDROID_HOME"
JAVA_HOME = "JAVA_HOME"
ANDROID_ENV_KEYS = (ANDROID_HOME, JAVA_HOME)


class EnvironmentProvider(ABC):
    """환경 변수 조회/설정 인터페이스"""

    @abstractmethod
    def get(self, name: str) -> Optional[str]:
        """값을 반환합니다. 없으면 None"""

    @abstractmethod
    def set(self, name: str, value: str) -> None:
        """값을 설정합니다"""


class ProcessEnvironment(EnvironmentProvider):
    """현재 프로세스 환경(os.environ) 구현"""

    def __init__(self, environ: Optional[MutableMapping[str, str]] = None):
        self._environ = os.environ if environ is None else environ

    def get(self, name: str) -> Optional[str]:
        return self._environ.get(name)

    def set(self, name: str, value: str) -> None:
        self._environ[name] = value


class EnvVarsFileStore:
    """env_vars 파일 저장소

    파일 형식:
        # 주석
        ANDROID_HOME=/path/to/sdk
        JAVA_HOME=/path/to/jdk
    """

    def __init__(self, file_path: str, logger: Optional[logging.Logger] = None):
        self.file_path = file_path
        self.logger = logger or create_component_logger("EnvVarsFileStore")

    def load(self) -> Dict[str, str]:
        """파일을 읽어 딕셔너리로 반환합니다. 파일이 없거나 읽을 수 없으면 빈 딕셔너리"""
        if not os.path.exists(self.file_path):
            return {}

        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                lines = f.readlines()
        except OSError as e:
            self.logger.warning(f"env_vars 파일 읽기 실패: {e}")
            return {}

        values: Dict[str, str] = {}
        for line in lines:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            key = key.strip()
            if key:
                values[key] = value.strip()
        return values

    def save(self, values: Dict[str, str]) -> None:
        """기존 값과 병합해 파일에 저장합니다

        저장 실패는 경고로만 기록하며 예외를 전파하지 않습니다.
        """
        merged = self.load()
        merged.update({k: v for k, v in values.items() if v})

        try:
            os.makedirs(os.path.dirname(self.file_path) or ".", exist_ok=True)
            with open(self.file_path, "w", encoding="utf-8") as f:
                for key, value in merged.items():
                    f.write(f"{key}={value}\n")
            self.logger.info(f"env_vars 파일 저장 완료: {self.file_path}")
        except OSError as e:
            self.logger.warning(f"env_vars 파일 저장 실패: {e}")

    def load_and_set(
        self,
        environment: EnvironmentProvider,
        path_exists: Callable[[str], bool] = os.path.isdir,
        keys: Iterable[str] = ANDROID_ENV_KEYS,
    ) -> None:
        """파일에 저장된 값 중 경로가 존재하는 것만 환경에 설정합니다

        소문자 키(android_home)도 허용합니다.
        """
        values = self.load()
        for key in keys:
            value = values.get(key) or values.get(key.lower())
            if not value:
                continue
            if path_exists(value):
                environment.set(key, value)
                self.logger.debug(f"env_vars 파일에서 {key} 설정: {value}")
            else:
                self.logger.warning(f"env_vars 파일의 {key} 경로가 존재하지 않습니다: {value}")
