"""워크플로우 오케스트레이터

LangGraph 워크플로우를 체크포인터와 함께 실행하고, 실행이 interrupt 로 중단되면
호스트 에이전트가 다음에 호출할 도구와 입력을 담은 지시문을 만들어 반환합니다.

호출 흐름:
1. 호스트가 user_input (첫 요청 또는 직전 도구 결과)과 workflow_state_data 를 전달
2. thread_id 에 중단된 작업이 있으면 Command(resume=user_input) 로 재개,
   없으면 새 실행을 시작
3. 다시 중단되면 interrupt 페이로드로 다음 작업 지시문 생성, 끝나면 종료 메시지 반환

SOLID 원칙을 준수하여 오케스트레이터는 실행과 지시문 생성만 담당합니다.
"""

import json
import logging
import os
import random
import sqlite3
import time
from typing import Any, Dict, Optional

from langgraph.checkpoint.base import BaseCheckpointSaver
from langgraph.checkpoint.memory import MemorySaver
from langgraph.checkpoint.sqlite import SqliteSaver
from langgraph.graph import StateGraph
from langgraph.types import Command

from ..config.env_config import MCPWorkflowSettings
from ..models import WorkflowStateData
from .state import create_initial_state


logger = logging.getLogger(__name__)

WORKFLOW_COMPLETED_MESSAGE = (
    "The workflow has concluded. No further workflow actions are forthcoming."
)


def generate_thread_id() -> str:
    """새 워크플로우 세션 ID 를 생성합니다 (mmw-<밀리초>-<난수>)"""
    suffix = "".join(random.choices("abcdefghijklmnopqrstuvwxyz0123456789", k=6))
    return f"mmw-{int(time.time() * 1000)}-{suffix}"


def parse_workflow_state_data(value: Any) -> Optional[WorkflowStateData]:
    """호스트가 돌려준 워크플로우 상태를 해석합니다. 형식이 맞지 않으면 None"""
    if isinstance(value, WorkflowStateData):
        return value
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            return None
    if isinstance(value, dict) and isinstance(value.get("thread_id"), str) and value["thread_id"]:
        return WorkflowStateData(thread_id=value["thread_id"])
    return None


def create_checkpointer(settings: MCPWorkflowSettings) -> BaseCheckpointSaver:
    """설정에 맞는 체크포인터를 생성합니다

    - sqlite: env_vars_dir 아래 SQLite 파일에 저장하여 서버 재시작 후에도 세션을 재개
    - memory: 프로세스 메모리에만 보관 (테스트용)

    Args:
        settings: 환경변수 설정

    Returns:
        LangGraph 체크포인터
    """
    if settings.checkpoint_backend == "memory":
        return MemorySaver()

    db_path = settings.get_checkpoint_db_path()
    os.makedirs(os.path.dirname(db_path), exist_ok=True)
    # 연결은 서버 수명 동안 유지됩니다
    connection = sqlite3.connect(db_path, check_same_thread=False)
    logger.info(f"SQLite 체크포인터 사용: {db_path}")
    return SqliteSaver(connection)


class WorkflowOrchestrator:
    """워크플로우 오케스트레이터

    단일 책임 원칙: 워크플로우 실행, 재개, 다음 작업 지시문 생성만 담당
    체크포인터를 주입하지 않으면 프로세스 메모리에 세션 상태를 보관합니다.
    """

    def __init__(
        self,
        workflow: StateGraph,
        checkpointer: Optional[BaseCheckpointSaver] = None,
        orchestrator_tool_id: str = "magen-orchestrator",
    ):
        self.checkpointer = checkpointer or MemorySaver()
        self.compiled_workflow = workflow.compile(checkpointer=self.checkpointer)
        self.orchestrator_tool_id = orchestrator_tool_id
        self._logger = logger

    def process_request(
        self,
        user_input: Any = None,
        workflow_state_data: Any = None,
    ) -> Dict[str, str]:
        """요청을 처리하고 다음 작업 지시문을 반환합니다

        Args:
            user_input: 사용자의 첫 요청 또는 직전 도구의 결과
            workflow_state_data: 직전 응답에서 받은 워크플로우 상태 (없으면 새 세션)

        Returns:
            {"orchestration_instructions_prompt": 지시문}

        Raises:
            RuntimeError: 실행이 중단되었는데 interrupt 페이로드가 없는 경우
        """
        state_data = parse_workflow_state_data(workflow_state_data)
        if state_data is None:
            state_data = WorkflowStateData(thread_id=generate_thread_id())
            self._logger.info(f"새 워크플로우 세션 시작 - thread_id: {state_data.thread_id}")

        config = {"configurable": {"thread_id": state_data.thread_id}}

        if self._get_pending_interrupt(config) is not None:
            self._logger.info(f"중단된 워크플로우 재개 - thread_id: {state_data.thread_id}")
            self.compiled_workflow.invoke(Command(resume=user_input), config)
        else:
            self._logger.info(f"워크플로우 실행 시작 - thread_id: {state_data.thread_id}")
            self.compiled_workflow.invoke(create_initial_state(user_input), config)

        snapshot = self.compiled_workflow.get_state(config)
        if not snapshot.next:
            self._logger.info(f"워크플로우 종료 - thread_id: {state_data.thread_id}")
            return {"orchestration_instructions_prompt": WORKFLOW_COMPLETED_MESSAGE}

        payload = self._get_pending_interrupt(config)
        if payload is None:
            raise RuntimeError(
                f"워크플로우가 중단되었지만 interrupt 데이터가 없습니다: {snapshot.next}"
            )

        return {
            "orchestration_instructions_prompt": self.create_orchestration_prompt(payload, state_data)
        }

    def get_state(self, thread_id: str) -> Dict[str, Any]:
        """세션의 현재 워크플로우 상태 값을 반환합니다"""
        snapshot = self.compiled_workflow.get_state({"configurable": {"thread_id": thread_id}})
        return dict(snapshot.values or {})

    def _get_pending_interrupt(self, config: Dict[str, Any]) -> Optional[Any]:
        snapshot = self.compiled_workflow.get_state(config)
        for task in snapshot.tasks:
            if task.interrupts:
                return task.interrupts[0].value
        return None

    def create_orchestration_prompt(
        self,
        payload: Dict[str, Any],
        workflow_state_data: WorkflowStateData,
    ) -> str:
        """interrupt 페이로드로 호스트 에이전트용 지시문을 생성합니다"""
        llm_metadata = payload.get("llm_metadata", {})
        tool_name = llm_metadata.get("name")
        state_json = json.dumps(workflow_state_data.model_dump())

        sections = [
            "# ROLE",
            "You are a workflow orchestration agent. Follow the instructions below exactly.",
            "",
            "# TASK",
            f"Invoke the `{tool_name}` tool. {llm_metadata.get('description', '')}".rstrip(),
            "",
            "## Input schema",
            "```json",
            json.dumps(llm_metadata.get("input_schema", {}), indent=2, ensure_ascii=False),
            "```",
            "",
            "## Input values",
            "```json",
            json.dumps(payload.get("input", {}), indent=2, ensure_ascii=False),
            "```",
            "",
            "Also pass this exact `workflow_state_data` to the tool:",
            f"`{state_json}`",
        ]

        if payload.get("result_schema"):
            sections += [
                "",
                "## Expected result",
                "Produce a result matching this JSON schema:",
                "```json",
                json.dumps(payload["result_schema"], indent=2, ensure_ascii=False),
                "```",
            ]

        sections += [
            "",
            "# POST-TASK",
            f"After completing the task, call the `{self.orchestrator_tool_id}` tool with the "
            "result as `user_input` and the same `workflow_state_data`:",
            f"`{state_json}`",
        ]
        return "\n".join(sections)
