#!/usr/bin/env python3
"""MCP 워크플로우 패키지 메인 엔트리포인트

python -m mcp_workflow 명령으로 실행 가능한 CLI 인터페이스를 제공합니다.
"""

import sys
import argparse
import subprocess
from pathlib import Path


def run_tests():
    """테스트 실행"""
    print("🧪 MCP 워크플로우 테스트 실행")

    project_root = Path(__file__).parent.parent

    result = subprocess.run([
        sys.executable, "-m", "pytest",
        "mcp_workflow/tests/",
        "-v", "--tb=short"
    ], cwd=project_root)
    return result.returncode


def run_server():
    """서버 실행"""
    print("🚀 MCP 워크플로우 서버 시작", file=sys.stderr)

    project_root = Path(__file__).parent.parent
    main_script = project_root / "main.py"

    try:
        result = subprocess.run([sys.executable, str(main_script)], cwd=project_root)
        return result.returncode
    except OSError as e:
        print(f"서버 실행 실패: {e}", file=sys.stderr)
        return 1


def show_help():
    """도움말 표시"""
    help_text = """
🤖 MCP 워크플로우 CLI

사용법:
  python -m mcp_workflow [command]

명령어:
  test     모든 테스트 실행
  server   MCP 워크플로우 서버 시작 (stdio)
  help     이 도움말 표시

예시:
  python -m mcp_workflow test          # 테스트 실행
  python -m mcp_workflow server        # 서버 시작
  python -m mcp_workflow               # 도움말 표시
"""
    print(help_text)


def main():
    """메인 함수"""
    parser = argparse.ArgumentParser(
        description="MCP 워크플로우 CLI",
        add_help=False  # 커스텀 help 사용
    )
    parser.add_argument(
        "command",
        nargs="?",
        choices=["test", "server", "help"],
        default="help",
        help="실행할 명령어"
    )

    args = parser.parse_args()

    if args.command == "test":
        return run_tests()
    elif args.command == "server":
        return run_server()
    else:
        show_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
