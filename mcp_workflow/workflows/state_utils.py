"""워크플로우 상태 유틸리티

라우터와 노드가 공통으로 사용하는 상태 조회 함수들입니다.
"""

from typing import Any, Dict, List, Mapping

from ..models import PropertyMetadataCollection


def is_missing(value: Any) -> bool:
    """값이 비어 있는지 판단합니다

    없음(None), 빈 문자열, 공백 문자열, 빈 컬렉션은 모두 같은 '없음'으로 취급합니다.
    False 와 0 은 값이 있는 것으로 봅니다.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


def get_unfulfilled_properties(
    state: Mapping[str, Any],
    properties: PropertyMetadataCollection,
) -> PropertyMetadataCollection:
    """상태에 값이 없는 속성만 카탈로그 순서대로 반환합니다"""
    return {
        name: metadata
        for name, metadata in properties.items()
        if is_missing(state.get(name))
    }


def fatal_errors(*messages: str) -> Dict[str, List[str]]:
    """치명적 오류 메시지를 담은 부분 업데이트를 생성합니다 (빈 메시지는 제외)"""
    items: List[str] = [m for m in messages if m]
    return {"workflow_fatal_error_messages": items}
