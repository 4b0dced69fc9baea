"""환경변수 설정과 env_vars 파일 테스트"""

import os

import pytest

from mcp_workflow.config import EnvVarsFileStore, MCPWorkflowSettings, get_settings, reload_settings


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """MCP_WORKFLOW_ 환경변수를 지우고 .env 가 없는 디렉토리에서 실행"""
    for key in list(os.environ):
        if key.upper().startswith("MCP_WORKFLOW_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    yield
    get_settings.cache_clear()


class TestMCPWorkflowSettings:
    """환경변수 설정 테스트 클래스"""

    def test_defaults(self, clean_env):
        """기본값 테스트"""
        settings = reload_settings()

        assert settings.tool_id_prefix == "magen"
        assert settings.log_level == "INFO"
        assert settings.max_android_setup_attempts == 1
        assert settings.ios_api_level == "17.0"
        assert settings.android_api_level == "35"
        assert settings.get_env_vars_file_path().endswith(os.path.join(".magen", "env_vars"))
        assert settings.checkpoint_backend == "sqlite"
        assert settings.get_checkpoint_db_path().endswith(
            os.path.join(".magen", "workflow_checkpoints.sqlite")
        )

    def test_environment_overrides(self, clean_env, monkeypatch, tmp_path):
        """환경변수 덮어쓰기 테스트"""
        monkeypatch.setenv("MCP_WORKFLOW_TOOL_ID_PREFIX", "acme")
        monkeypatch.setenv("mcp_workflow_log_level", "debug")
        monkeypatch.setenv("MCP_WORKFLOW_ENV_VARS_DIR", str(tmp_path / "conf"))
        monkeypatch.setenv("MCP_WORKFLOW_MAX_ANDROID_SETUP_ATTEMPTS", "3")

        settings = reload_settings()

        assert settings.tool_id_prefix == "acme"
        assert settings.log_level == "DEBUG"
        assert settings.get_env_vars_file_path() == str(tmp_path / "conf" / "env_vars")
        assert settings.max_android_setup_attempts == 3

    def test_dotenv_file(self, clean_env, tmp_path):
        """.env 파일 로드 테스트"""
        (tmp_path / ".env").write_text("MCP_WORKFLOW_TOOL_ID_PREFIX=dotenv\nOTHER_VALUE=1\n", encoding="utf-8")

        assert reload_settings().tool_id_prefix == "dotenv"

    @pytest.mark.parametrize("key,value", [
        ("MCP_WORKFLOW_LOG_LEVEL", "LOUD"),
        ("MCP_WORKFLOW_MAX_ANDROID_SETUP_ATTEMPTS", "0"),
        ("MCP_WORKFLOW_PLATFORM_CHECK_TIMEOUT", "-1"),
        ("MCP_WORKFLOW_TOOL_ID_PREFIX", "  "),
        ("MCP_WORKFLOW_CHECKPOINT_BACKEND", "redis"),
    ])
    def test_invalid_values(self, clean_env, monkeypatch, key, value):
        """잘못된 값 테스트"""
        monkeypatch.setenv(key, value)

        with pytest.raises(ValueError, match="환경변수 설정 로드 실패"):
            reload_settings()

    def test_settings_are_cached(self, clean_env):
        """싱글톤 캐시 테스트"""
        assert reload_settings() is get_settings()

    def test_direct_construction(self, tmp_path):
        """직접 생성 테스트"""
        settings = MCPWorkflowSettings(_env_file=None, tool_id_prefix="direct", env_vars_dir=str(tmp_path))
        assert settings.get_env_vars_file_path() == str(tmp_path / "env_vars")


class TestEnvVarsFileStore:
    """env_vars 파일 저장소 테스트 클래스"""

    def test_load_missing_file(self, tmp_path):
        """파일이 없을 때 빈 딕셔너리 테스트"""
        assert EnvVarsFileStore(str(tmp_path / "env_vars")).load() == {}

    def test_load_parses_lines(self, tmp_path):
        """파일 형식 해석 테스트"""
        path = tmp_path / "env_vars"
        path.write_text(
            "# 주석\n\nANDROID_HOME=/opt/sdk\nJAVA_HOME = /opt/jdk \nOPTS=a=b\nbroken line\n",
            encoding="utf-8",
        )

        assert EnvVarsFileStore(str(path)).load() == {
            "ANDROID_HOME": "/opt/sdk",
            "JAVA_HOME": "/opt/jdk",
            "OPTS": "a=b",
        }

    def test_save_merges_existing_values(self, tmp_path):
        """기존 값과 병합 저장 테스트"""
        store = EnvVarsFileStore(str(tmp_path / "nested" / "env_vars"))
        store.save({"ANDROID_HOME": "/old/sdk", "OTHER": "keep"})

        store.save({"ANDROID_HOME": "/new/sdk", "JAVA_HOME": "/jdk"})

        assert store.load() == {"ANDROID_HOME": "/new/sdk", "OTHER": "keep", "JAVA_HOME": "/jdk"}

    def test_load_and_set_only_existing_paths(self, tmp_path, environment, android_dirs):
        """존재하는 경로만 환경에 설정 테스트"""
        android_home, _ = android_dirs
        path = tmp_path / "env_vars"
        path.write_text(f"android_home={android_home}\nJAVA_HOME={tmp_path / 'missing'}\n", encoding="utf-8")

        EnvVarsFileStore(str(path)).load_and_set(environment)

        assert environment.get("ANDROID_HOME") == android_home
        assert environment.get("JAVA_HOME") is None
