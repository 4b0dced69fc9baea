"""워크플로우 상태 정의

LangGraph 그래프가 공유하는 상태 스키마입니다.
스칼라 필드는 마지막으로 쓴 값이 남고, 리스트 필드는 operator.add 리듀서로 이어 붙습니다.
노드는 상태를 직접 수정하지 않고 변경할 필드만 담은 부분 업데이트를 반환합니다.
"""

import operator
from typing import Annotated, Any, Dict, List, Optional, TypedDict


class WorkflowState(TypedDict, total=False):
    """프로젝트 설정 워크플로우 상태"""
    # 사용자 입력
    user_input: Any
    user_input_question: Optional[str]

    # 사용자에게서 수집하는 프로젝트 속성
    platform: Optional[str]
    project_name: Optional[str]
    package_name: Optional[str]
    organization: Optional[str]
    login_host: Optional[str]

    # 플랫폼 설정 검증
    valid_platform_setup: Optional[bool]
    android_home: Optional[str]
    java_home: Optional[str]
    android_setup_attempts: int

    # 치명적 오류 메시지 (누적)
    workflow_fatal_error_messages: Annotated[List[str], operator.add]


# 리듀서로 이어 붙이는 필드
ACCUMULATED_FIELDS = ("workflow_fatal_error_messages",)


def create_initial_state(user_input: Any = None, **overrides: Any) -> WorkflowState:
    """초기 워크플로우 상태를 생성합니다

    Args:
        user_input: 사용자의 첫 요청
        overrides: 추가로 설정할 필드

    Returns:
        초기화된 WorkflowState
    """
    state: WorkflowState = {
        "user_input": user_input,
        "android_setup_attempts": 0,
        "workflow_fatal_error_messages": [],
    }
    state.update(overrides)
    return state


def merge_state_update(state: WorkflowState, update: Optional[Dict[str, Any]]) -> WorkflowState:
    """부분 업데이트를 상태에 병합한 새 상태를 반환합니다

    LangGraph 실행기의 병합 규칙과 같습니다. 입력 상태는 변경하지 않습니다.
    """
    merged: Dict[str, Any] = dict(state)
    for key, value in (update or {}).items():
        if key in ACCUMULATED_FIELDS:
            merged[key] = list(merged.get(key) or []) + list(value or [])
        else:
            merged[key] = value
    return merged
