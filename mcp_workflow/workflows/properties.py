"""워크플로우 속성 카탈로그

사용자 입력에서 추출할 속성들의 타입과 설명입니다.
카탈로그의 키는 WorkflowState 의 필드 이름과 같아야 합니다.
"""

from typing import Literal

from ..models import NonEmptyStr, PropertyMetadata, PropertyMetadataCollection


PLATFORM_IOS = "iOS"
PLATFORM_ANDROID = "Android"

Platform = Literal["iOS", "Android"]


WORKFLOW_USER_INPUT_PROPERTIES: PropertyMetadataCollection = {
    "platform": PropertyMetadata(
        value_type=Platform,
        description="모바일 앱을 만들 대상 플랫폼. 'iOS' 또는 'Android'",
        friendly_name="플랫폼",
    ),
    "project_name": PropertyMetadata(
        value_type=NonEmptyStr,
        description="생성할 모바일 앱 프로젝트 이름",
        friendly_name="프로젝트 이름",
    ),
    "package_name": PropertyMetadata(
        value_type=NonEmptyStr,
        description="앱의 패키지 식별자 (예: com.example.myapp)",
        friendly_name="패키지 이름",
    ),
    "organization": PropertyMetadata(
        value_type=NonEmptyStr,
        description="앱을 소유한 조직 또는 회사 이름",
        friendly_name="조직",
    ),
    "login_host": PropertyMetadata(
        value_type=NonEmptyStr,
        description="앱이 로그인에 사용할 호스트 URL (예: https://login.example.com)",
        friendly_name="로그인 호스트",
    ),
}


ANDROID_SETUP_PROPERTIES: PropertyMetadataCollection = {
    "android_home": PropertyMetadata(
        value_type=NonEmptyStr,
        description="Android SDK 가 설치된 디렉토리 경로 (ANDROID_HOME)",
        friendly_name="Android SDK 경로",
    ),
    "java_home": PropertyMetadata(
        value_type=NonEmptyStr,
        description="JDK 가 설치된 디렉토리 경로 (JAVA_HOME)",
        friendly_name="Java 경로",
    ),
}
