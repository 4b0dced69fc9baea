"""MCP 워크플로우 데이터 모델

워크플로우 전반에서 공유하는 데이터 모델을 정의합니다.
- 속성 메타데이터 (추출 대상 속성의 타입, 설명, 표시 이름)
- 도구 호출 봉투 (ToolInvocationData)
- 워크플로우 상태 왕복 데이터 (WorkflowStateData)

단일 책임 원칙: 데이터 구조와 그 검증만 담당합니다.
"""

from dataclasses import dataclass
from functools import cached_property
from typing import Annotated, Any, Dict, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, TypeAdapter


# 공백만 있는 문자열은 허용하지 않는 문자열 타입
NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


@dataclass(frozen=True)
class PropertyMetadata:
    """추출 가능한 단일 속성의 메타데이터

    단일 책임 원칙: 속성 하나의 검증 규칙과 설명만을 담당

    Attributes:
        value_type: pydantic 이 검증할 수 있는 타입 어노테이션
        description: LLM 에게 전달되는 속성 설명
        friendly_name: 사용자에게 보여줄 이름
    """
    value_type: Any
    description: str
    friendly_name: str

    @cached_property
    def adapter(self) -> TypeAdapter:
        return TypeAdapter(self.value_type)

    def validate(self, value: Any) -> Any:
        """값을 엄격하게 검증합니다

        Raises:
            pydantic.ValidationError: 값이 타입 또는 제약 조건을 만족하지 않는 경우
        """
        return self.adapter.validate_python(value)

    def json_schema(self) -> Dict[str, Any]:
        return self.adapter.json_schema()


# 속성 이름 -> 메타데이터
PropertyMetadataCollection = Dict[str, PropertyMetadata]


class WorkflowStateData(BaseModel):
    """호스트와 오케스트레이터 사이를 왕복하는 워크플로우 상태 데이터"""
    thread_id: str = Field(..., description="워크플로우 세션 식별자")


class LLMMetadata(BaseModel):
    """호스트 에이전트에게 노출되는 도구 정보"""
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    name: str
    description: str
    input_schema: Type[BaseModel]


@dataclass(frozen=True)
class ToolInvocationData:
    """워크플로우가 호스트 에이전트에게 요청하는 단일 작업 봉투

    생성 이후 변경되지 않습니다. 입력 값은 create() 에서 input_schema 로 검증된
    후에만 봉투에 담깁니다.
    """
    llm_metadata: LLMMetadata
    input: Dict[str, Any]
    result_schema: Optional[Type[BaseModel]] = None

    @classmethod
    def create(
        cls,
        name: str,
        description: str,
        input_schema: Type[BaseModel],
        input: Dict[str, Any],
        result_schema: Optional[Type[BaseModel]] = None,
    ) -> "ToolInvocationData":
        """입력을 검증하고 봉투를 생성합니다

        Args:
            name: 작업(도구) 이름
            description: 작업 설명
            input_schema: 입력 형태를 정의하는 모델
            input: 입력 값
            result_schema: 기대하는 결과 형태

        Returns:
            검증된 입력을 담은 ToolInvocationData

        Raises:
            pydantic.ValidationError: 입력이 input_schema 와 맞지 않는 경우
        """
        validated = input_schema.model_validate(input)
        return cls(
            llm_metadata=LLMMetadata(
                name=name,
                description=description,
                input_schema=input_schema,
            ),
            input=validated.model_dump(mode="json"),
            result_schema=result_schema,
        )

    def to_payload(self) -> Dict[str, Any]:
        """직렬화 가능한 딕셔너리로 변환합니다 (LangGraph interrupt 페이로드)"""
        return {
            "llm_metadata": {
                "name": self.llm_metadata.name,
                "description": self.llm_metadata.description,
                "input_schema": self.llm_metadata.input_schema.model_json_schema(),
            },
            "input": self.input,
            "result_schema": (
                self.result_schema.model_json_schema() if self.result_schema else None
            ),
        }
