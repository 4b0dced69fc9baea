"""입력 추출 서비스

자유 형식의 사용자 입력에서 카탈로그에 정의된 속성 값을 추출합니다.

검증은 두 단계로 이루어집니다.
1. 관대한 단계: 결과의 구조(extracted_properties 객체)만 강제합니다.
   각 속성 값은 타입이 맞지 않아도 원래 값 그대로 통과하고,
   알 수 없는 속성도 버리지 않고 남겨 둡니다.
2. 엄격한 단계: null 은 건너뛰고, 알 수 없는 속성은 경고와 함께 버리고,
   나머지 값은 속성 메타데이터로 다시 검증해 통과한 값만 결과에 담습니다.

속성 값 하나가 잘못되었다고 추출 전체가 실패하지는 않습니다.
"""

import json
import logging
from typing import Annotated, Any, Dict, List, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, ValidationError, WrapValidator, create_model

from ..models import PropertyMetadataCollection
from ..tools.metadata import (
    ExtractionResult,
    WorkflowToolMetadata,
    create_input_extraction_tool_metadata,
)
from ..tool_execution import ToolExecutor
from .base import AbstractService


def _fallback_to_input(value: Any, handler) -> Any:
    """검증에 실패하면 입력 값을 그대로 반환합니다"""
    try:
        return handler(value)
    except ValidationError:
        return value


class InputExtractionService(AbstractService):
    """사용자 입력에서 속성을 추출하는 서비스"""

    def __init__(
        self,
        tool_metadata: Optional[WorkflowToolMetadata] = None,
        tool_executor: Optional[ToolExecutor] = None,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__("InputExtractionService", tool_executor, logger)
        self.tool_metadata = tool_metadata or create_input_extraction_tool_metadata()

    def extract_properties(
        self,
        user_input: Any,
        properties: PropertyMetadataCollection,
    ) -> ExtractionResult:
        """사용자 입력에서 속성 값을 추출합니다

        Args:
            user_input: 사용자 입력 (문자열 또는 구조화된 값)
            properties: 추출 대상 속성 카탈로그

        Returns:
            카탈로그에 있고 검증을 통과한 속성만 담은 ExtractionResult

        Raises:
            pydantic.ValidationError: 결과에 extracted_properties 객체가 없는 경우
        """
        self.logger.debug(
            "사용자 입력에서 속성 추출 시작",
            extra={"data": {"properties": list(properties)}},
        )

        properties_to_extract = [
            {"property_name": name, "description": metadata.description}
            for name, metadata in properties.items()
        ]
        result_schema = self.build_result_schema(properties)

        invocation_data = self.tool_metadata.create_invocation(
            {
                "user_utterance": user_input,
                "properties_to_extract": properties_to_extract,
                "result_schema": json.dumps(result_schema.model_json_schema(), ensure_ascii=False),
            },
            result_schema=result_schema,
        )

        return self.execute_tool_with_logging(
            invocation_data,
            result_schema,
            validator=lambda raw, schema: self._validate_extraction_result(raw, schema, properties),
        )

    @staticmethod
    def build_result_schema(properties: PropertyMetadataCollection) -> Type[BaseModel]:
        """관대한 단계의 결과 모델을 생성합니다

        각 속성은 선택 필드이며, 값이 검증에 실패하면 원래 값이 그대로 남습니다.
        정의되지 않은 속성도 허용합니다.
        """
        fields = {
            name: (
                Annotated[Optional[metadata.value_type], WrapValidator(_fallback_to_input)],
                Field(default=None, description=metadata.description),
            )
            for name, metadata in properties.items()
        }
        extracted_properties_model = create_model(
            "ExtractedProperties",
            __config__=ConfigDict(extra="allow", protected_namespaces=()),
            **fields,
        )
        return create_model(
            "InputExtractionResult",
            extracted_properties=(
                extracted_properties_model,
                Field(..., description="추출된 속성 값. 찾지 못한 속성은 null"),
            ),
        )

    def _validate_extraction_result(
        self,
        raw_result: Any,
        result_schema: Type[BaseModel],
        properties: PropertyMetadataCollection,
    ) -> ExtractionResult:
        validated = result_schema.model_validate(raw_result)
        extracted = validated.extracted_properties

        candidates: Dict[str, Any] = {
            name: getattr(extracted, name) for name in type(extracted).model_fields
        }
        candidates.update(extracted.model_extra or {})

        valid_properties: Dict[str, Any] = {}
        invalid_properties: List[Dict[str, Any]] = []

        for name, value in candidates.items():
            if value is None:
                self.logger.debug(f"추출되지 않은 속성 건너뜀: {name}")
                continue

            metadata = properties.get(name)
            if metadata is None:
                self.logger.warning(
                    "추출 결과에 알 수 없는 속성이 있습니다",
                    extra={"data": {"property_name": name}},
                )
                continue

            try:
                valid_properties[name] = metadata.validate(value)
            except ValidationError as e:
                invalid_properties.append({
                    "property_name": name,
                    "value": value,
                    "errors": e.errors(include_url=False),
                })

        if invalid_properties:
            self.logger.warning(
                "일부 속성이 검증에 실패했습니다",
                extra={"data": {"invalid_properties": invalid_properties}},
            )

        self.logger.info(
            "속성 추출 완료",
            extra={"data": {"extracted_count": len(valid_properties)}},
        )
        return ExtractionResult(extracted_properties=valid_properties)
