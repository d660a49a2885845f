"""
기술적 지표 라이브러리 예외 클래스 정의

시계열 조작과 지표 계산 중 발생할 수 있는 오류 상황을 정의합니다.
"""

from typing import Optional, Dict, Any


class TechnicalAnalysisError(Exception):
    """기술적 지표 라이브러리 기본 예외 클래스"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        기본 예외 초기화

        Args:
            message: 오류 메시지
            details: 오류 관련 부가 정보
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.__class__.__name__}: {self.message} {self.details}"
        return f"{self.__class__.__name__}: {self.message}"


class InvalidValueError(TechnicalAnalysisError, ValueError):
    """매개변수나 입력값이 허용 범위를 벗어난 경우"""

    def __init__(self, message: str = "허용되지 않는 값", **kwargs):
        super().__init__(message, **kwargs)


# 범위 초과 오류는 잘못된 값 오류와 동일하게 취급
ValueOutOfRangeError = InvalidValueError


class UnsupportedOperationError(TechnicalAnalysisError, TypeError):
    """추가 전용 시계열에서 허용되지 않는 변경 연산"""

    def __init__(self, message: str = "지원하지 않는 연산", **kwargs):
        super().__init__(message, **kwargs)


class IndexOutOfRangeError(TechnicalAnalysisError, IndexError):
    """시계열 범위를 벗어난 위치 접근"""

    def __init__(self, message: str = "인덱스 범위 초과", **kwargs):
        super().__init__(message, **kwargs)


class FlatRangeError(TechnicalAnalysisError, ArithmeticError):
    """KDJ 윈도우 최고가와 최저가가 같아 RSV를 계산할 수 없는 경우"""

    def __init__(self, message: str = "최고가와 최저가가 같습니다", **kwargs):
        super().__init__(message, **kwargs)


__all__ = [
    'TechnicalAnalysisError',
    'InvalidValueError',
    'ValueOutOfRangeError',
    'UnsupportedOperationError',
    'IndexOutOfRangeError',
    'FlatRangeError',
]
