"""서비스 패키지

호스트 에이전트에게 작업을 위임하는 서비스들입니다.
"""

from .base import AbstractService
from .generate_question import GenerateQuestionService
from .get_input import GetInputService
from .input_extraction import InputExtractionService

__all__ = [
    "AbstractService",
    "InputExtractionService",
    "GenerateQuestionService",
    "GetInputService",
]
