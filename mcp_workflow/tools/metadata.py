"""워크플로우 도구 메타데이터

호스트 에이전트에게 노출되는 도구들의 식별자, 설명, 입력/결과 형태를 정의합니다.
각 도구의 입력 모델은 비즈니스 입력만 담고, MCP 도구로 노출될 때는
서버가 workflow_state_data 인자를 함께 요구합니다.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel, Field, StrictStr

from ..models import ToolInvocationData, WorkflowStateData


DEFAULT_TOOL_ID_PREFIX = "magen"


@dataclass(frozen=True)
class WorkflowToolMetadata:
    """워크플로우 도구 하나의 메타데이터"""
    tool_id: str
    title: str
    description: str
    input_schema: Type[BaseModel]
    result_schema: Type[BaseModel]

    def create_invocation(
        self,
        input: Dict[str, Any],
        result_schema: Optional[Type[BaseModel]] = None,
    ) -> ToolInvocationData:
        """이 도구를 대상으로 하는 작업 봉투를 생성합니다

        Args:
            input: 비즈니스 입력 값 (input_schema 로 검증됨)
            result_schema: 호출마다 달라지는 결과 형태. 없으면 도구 기본값 사용
        """
        return ToolInvocationData.create(
            name=self.tool_id,
            description=self.description,
            input_schema=self.input_schema,
            input=input,
            result_schema=result_schema or self.result_schema,
        )


class WorkflowToolOutput(BaseModel):
    """안내(guidance) 도구의 표준 출력"""
    prompt_for_llm: str = Field(..., description="호스트 LLM 이 수행할 작업 안내")
    result_schema: str = Field(..., description="작업 결과가 따라야 하는 JSON 스키마")


# 입력 추출
class PropertyToExtract(BaseModel):
    property_name: str = Field(..., description="추출할 속성 이름")
    description: str = Field(..., description="속성 설명")


class InputExtractionInput(BaseModel):
    user_utterance: Any = Field(..., description="속성을 추출할 사용자 입력")
    properties_to_extract: List[PropertyToExtract] = Field(
        ..., description="추출 대상 속성 목록"
    )
    result_schema: str = Field(..., description="결과가 따라야 하는 JSON 스키마 문자열")


class ExtractionResult(BaseModel):
    """입력 추출 서비스의 최종 결과 (검증을 통과한 속성만 포함)"""
    extracted_properties: Dict[str, Any] = Field(default_factory=dict)


# 사용자 입력 요청
class PropertyRequiringInput(BaseModel):
    property_name: str
    friendly_name: str
    description: str


class GetInputInput(BaseModel):
    properties_requiring_input: List[PropertyRequiringInput] = Field(
        ..., description="사용자에게 값을 물어봐야 하는 속성 목록"
    )
    question: Optional[str] = Field(default=None, description="사용자에게 보여줄 질문")


class GetInputResult(BaseModel):
    user_utterance: Any = Field(..., description="사용자의 응답 원문")


# 질문 생성
class QuestionPropertyMetadata(BaseModel):
    property_name: str
    friendly_name: str
    description: str


class GenerateQuestionInput(BaseModel):
    property_metadata: QuestionPropertyMetadata = Field(
        ..., description="질문을 만들 대상 속성"
    )


class GenerateQuestionResult(BaseModel):
    question: StrictStr = Field(..., description="사용자에게 보여줄 질문")


# 실패 보고
class FailureInput(BaseModel):
    messages: List[str] = Field(..., description="사용자에게 보고할 오류 메시지")


class FailureResult(BaseModel):
    acknowledged: Optional[Any] = None


# 오케스트레이터
class OrchestratorInput(BaseModel):
    user_input: Optional[Any] = Field(
        default=None, description="직전 작업의 결과 또는 사용자의 첫 요청"
    )
    workflow_state_data: Optional[WorkflowStateData] = Field(
        default=None, description="직전 응답에서 받은 워크플로우 상태 (첫 호출에서는 생략)"
    )


class OrchestratorOutput(BaseModel):
    orchestration_instructions_prompt: str


def create_input_extraction_tool_metadata(prefix: str = DEFAULT_TOOL_ID_PREFIX) -> WorkflowToolMetadata:
    return WorkflowToolMetadata(
        tool_id=f"{prefix}-input-extraction",
        title="Input Extraction",
        description="사용자 입력에서 구조화된 속성 값을 추출합니다",
        input_schema=InputExtractionInput,
        result_schema=ExtractionResult,
    )


def create_get_input_tool_metadata(prefix: str = DEFAULT_TOOL_ID_PREFIX) -> WorkflowToolMetadata:
    return WorkflowToolMetadata(
        tool_id=f"{prefix}-get-input",
        title="Get User Input",
        description="아직 값이 없는 속성에 대해 사용자에게 입력을 요청합니다",
        input_schema=GetInputInput,
        result_schema=GetInputResult,
    )


def create_generate_question_tool_metadata(prefix: str = DEFAULT_TOOL_ID_PREFIX) -> WorkflowToolMetadata:
    return WorkflowToolMetadata(
        tool_id=f"{prefix}-generate-question",
        title="Generate Question",
        description="속성 하나의 값을 묻는 자연어 질문을 생성합니다",
        input_schema=GenerateQuestionInput,
        result_schema=GenerateQuestionResult,
    )


def create_failure_tool_metadata(prefix: str = DEFAULT_TOOL_ID_PREFIX) -> WorkflowToolMetadata:
    return WorkflowToolMetadata(
        tool_id=f"{prefix}-failure",
        title="Workflow Failure",
        description="워크플로우를 계속할 수 없는 이유를 사용자에게 알립니다",
        input_schema=FailureInput,
        result_schema=FailureResult,
    )


def create_orchestrator_tool_metadata(prefix: str = DEFAULT_TOOL_ID_PREFIX) -> WorkflowToolMetadata:
    return WorkflowToolMetadata(
        tool_id=f"{prefix}-orchestrator",
        title="Workflow Orchestrator",
        description="워크플로우를 시작하거나 재개하고 다음 작업 지시를 반환합니다",
        input_schema=OrchestratorInput,
        result_schema=OrchestratorOutput,
    )
