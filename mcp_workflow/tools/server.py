"""MCP 워크플로우 서버

FastMCP 서버에 오케스트레이터 도구와 안내(guidance) 도구들을 등록합니다.

- 오케스트레이터 도구: 워크플로우를 시작/재개하고 다음 작업 지시문을 반환
- 안내 도구: 호스트 LLM 이 수행할 작업 설명과 결과 스키마를 반환하며,
  결과는 다시 오케스트레이터 도구로 전달하도록 안내
"""

import json
import logging
from typing import Any, Dict, List, Optional

from mcp.server.fastmcp import FastMCP

from ..config.env_config import MCPWorkflowSettings, get_settings
from ..models import WorkflowStateData
from ..workflows.executor import WorkflowOrchestrator, create_checkpointer
from ..workflows.graph import create_workflow_from_settings
from .metadata import (
    PropertyRequiringInput,
    PropertyToExtract,
    QuestionPropertyMetadata,
    WorkflowToolOutput,
    create_failure_tool_metadata,
    create_generate_question_tool_metadata,
    create_get_input_tool_metadata,
    create_input_extraction_tool_metadata,
    create_orchestrator_tool_metadata,
)


logger = logging.getLogger(__name__)


def build_guidance_output(
    task_prompt: str,
    result_schema: str,
    workflow_state_data: WorkflowStateData,
    orchestrator_tool_id: str,
) -> Dict[str, str]:
    """안내 도구의 표준 출력을 생성합니다

    Args:
        task_prompt: 호스트 LLM 이 수행할 작업 설명
        result_schema: 결과가 따라야 하는 JSON 스키마 문자열
        workflow_state_data: 오케스트레이터에게 그대로 돌려줄 상태
        orchestrator_tool_id: 결과를 전달할 오케스트레이터 도구 ID
    """
    state_json = json.dumps(workflow_state_data.model_dump())
    prompt = "\n".join([
        task_prompt,
        "",
        "Format your result as JSON matching the `result_schema` field of this response.",
        "",
        "# POST-TASK",
        f"Call the `{orchestrator_tool_id}` tool with your JSON result as `user_input` "
        f"and this exact `workflow_state_data`: `{state_json}`",
    ])
    return WorkflowToolOutput(prompt_for_llm=prompt, result_schema=result_schema).model_dump()


def create_server(
    settings: Optional[MCPWorkflowSettings] = None,
    orchestrator: Optional[WorkflowOrchestrator] = None,
) -> FastMCP:
    """워크플로우 도구가 등록된 FastMCP 서버를 생성합니다

    Args:
        settings: 환경변수 설정 (기본값: get_settings())
        orchestrator: 워크플로우 오케스트레이터 (기본값: 설정으로 생성)

    Returns:
        FastMCP 서버 인스턴스
    """
    settings = settings or get_settings()
    prefix = settings.tool_id_prefix

    orchestrator_metadata = create_orchestrator_tool_metadata(prefix)
    extraction_metadata = create_input_extraction_tool_metadata(prefix)
    get_input_metadata = create_get_input_tool_metadata(prefix)
    question_metadata = create_generate_question_tool_metadata(prefix)
    failure_metadata = create_failure_tool_metadata(prefix)
    orchestrator_tool_id = orchestrator_metadata.tool_id

    if orchestrator is None:
        orchestrator = WorkflowOrchestrator(
            create_workflow_from_settings(settings),
            checkpointer=create_checkpointer(settings),
            orchestrator_tool_id=orchestrator_tool_id,
        )

    server = FastMCP("MCP Workflow")

    @server.tool(name=orchestrator_tool_id, description=orchestrator_metadata.description)
    def orchestrate(
        user_input: Any = None,
        workflow_state_data: Optional[WorkflowStateData] = None,
    ) -> Dict[str, str]:
        """워크플로우를 시작하거나 재개합니다"""
        return orchestrator.process_request(user_input, workflow_state_data)

    @server.tool(name=extraction_metadata.tool_id, description=extraction_metadata.description)
    def input_extraction(
        user_utterance: Any,
        properties_to_extract: List[PropertyToExtract],
        result_schema: str,
        workflow_state_data: WorkflowStateData,
    ) -> Dict[str, str]:
        """사용자 입력에서 속성 추출 작업을 안내합니다"""
        properties = "\n".join(
            f"- `{p.property_name}`: {p.description}" for p in properties_to_extract
        )
        task_prompt = "\n".join([
            "# TASK",
            "Extract the following properties from the user input.",
            "Use null for any property the input does not mention. Do not guess.",
            "",
            properties,
            "",
            "## User input",
            json.dumps(user_utterance, ensure_ascii=False),
        ])
        return build_guidance_output(task_prompt, result_schema, workflow_state_data, orchestrator_tool_id)

    @server.tool(name=get_input_metadata.tool_id, description=get_input_metadata.description)
    def get_input(
        properties_requiring_input: List[PropertyRequiringInput],
        workflow_state_data: WorkflowStateData,
        question: Optional[str] = None,
    ) -> Dict[str, str]:
        """사용자 입력 요청 작업을 안내합니다"""
        properties = "\n".join(
            f"- {p.friendly_name}: {p.description}" for p in properties_requiring_input
        )
        lines = [
            "# TASK",
            "Ask the user to provide the following information and wait for the answer.",
            "",
            properties,
        ]
        if question:
            lines += ["", f"Suggested question: {question}"]
        lines += ["", "Return the user's answer verbatim as `user_utterance`."]
        result_schema = json.dumps(get_input_metadata.result_schema.model_json_schema())
        return build_guidance_output("\n".join(lines), result_schema, workflow_state_data, orchestrator_tool_id)

    @server.tool(name=question_metadata.tool_id, description=question_metadata.description)
    def generate_question(
        property_metadata: QuestionPropertyMetadata,
        workflow_state_data: WorkflowStateData,
    ) -> Dict[str, str]:
        """속성 질문 생성 작업을 안내합니다"""
        task_prompt = "\n".join([
            "# TASK",
            "Write one short, friendly question asking the user for this value:",
            f"- {property_metadata.friendly_name} (`{property_metadata.property_name}`): "
            f"{property_metadata.description}",
        ])
        result_schema = json.dumps(question_metadata.result_schema.model_json_schema())
        return build_guidance_output(task_prompt, result_schema, workflow_state_data, orchestrator_tool_id)

    @server.tool(name=failure_metadata.tool_id, description=failure_metadata.description)
    def report_failure(
        messages: List[str],
        workflow_state_data: WorkflowStateData,
    ) -> Dict[str, str]:
        """워크플로우 실패 보고 작업을 안내합니다"""
        task_prompt = "\n".join(
            ["# TASK", "Tell the user the workflow cannot continue because of these errors:", ""]
            + [f"- {message}" for message in messages]
        )
        result_schema = json.dumps(failure_metadata.result_schema.model_json_schema())
        return build_guidance_output(task_prompt, result_schema, workflow_state_data, orchestrator_tool_id)

    logger.info(f"MCP 워크플로우 서버 생성 완료 - 도구 접두사: {prefix}")
    return server
