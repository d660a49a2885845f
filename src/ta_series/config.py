"""
기술적 지표 라이브러리 설정 모듈

환경 변수(.env 포함)를 통해 설정을 로드하고 라이브러리 전체에서 사용할 수 있는
중앙 집중식 설정을 제공합니다. 지표 생성자의 기본 매개변수도 여기서 결정됩니다.
"""

import logging
from typing import List, Optional

from decouple import config

# KDJ에서 최고가 == 최저가일 때 RSV 처리 방식
FLAT_RANGE_PROPAGATE = "propagate"
FLAT_RANGE_RAISE = "raise"
FLAT_RANGE_POLICIES = (FLAT_RANGE_PROPAGATE, FLAT_RANGE_RAISE)


class Settings:
    """라이브러리 설정 클래스"""

    # =============================================================================
    # 로깅 설정
    # =============================================================================
    LOG_LEVEL: str = config("LOG_LEVEL", default="INFO")
    LOG_FORMAT: str = config(
        "LOG_FORMAT",
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    # =============================================================================
    # MACD 기본 매개변수
    # =============================================================================
    MACD_SHORT_TERM: float = config("MACD_SHORT_TERM", default=12, cast=float)
    MACD_LONG_TERM: float = config("MACD_LONG_TERM", default=26, cast=float)
    MACD_MID_TERM: float = config("MACD_MID_TERM", default=9, cast=float)

    # =============================================================================
    # KDJ 기본 매개변수
    # =============================================================================
    KDJ_N_DAYS: int = config("KDJ_N_DAYS", default=9, cast=int)
    KDJ_K_DAYS: int = config("KDJ_K_DAYS", default=3, cast=int)
    KDJ_D_DAYS: int = config("KDJ_D_DAYS", default=3, cast=int)
    KDJ_FLAT_RANGE_POLICY: str = config("KDJ_FLAT_RANGE_POLICY", default=FLAT_RANGE_PROPAGATE)

    @classmethod
    def log_level_value(cls) -> Optional[int]:
        """LOG_LEVEL 이름을 logging 레벨 값으로 변환 (알 수 없으면 None)"""
        value = logging.getLevelName(str(cls.LOG_LEVEL).upper())
        return value if isinstance(value, int) else None


# 전역 설정 인스턴스
settings = Settings()


def get_settings() -> Settings:
    """설정 인스턴스 반환"""
    return settings


# 설정 검증
def validate_settings() -> List[str]:
    """설정 유효성 검증 및 경고 메시지 반환"""
    warnings = []

    if settings.log_level_value() is None:
        warnings.append(f"알 수 없는 LOG_LEVEL입니다: {settings.LOG_LEVEL}")

    if settings.KDJ_FLAT_RANGE_POLICY not in FLAT_RANGE_POLICIES:
        warnings.append(
            f"KDJ_FLAT_RANGE_POLICY는 {FLAT_RANGE_POLICIES} 중 하나여야 합니다: "
            f"{settings.KDJ_FLAT_RANGE_POLICY}"
        )

    for name in ("KDJ_N_DAYS", "KDJ_K_DAYS", "KDJ_D_DAYS"):
        if getattr(settings, name) < 1:
            warnings.append(f"{name}는 1 이상이어야 합니다")

    for name in ("MACD_SHORT_TERM", "MACD_LONG_TERM", "MACD_MID_TERM"):
        if getattr(settings, name) <= 0:
            warnings.append(f"{name}는 0보다 커야 합니다")

    if settings.MACD_SHORT_TERM >= settings.MACD_LONG_TERM:
        warnings.append("MACD_SHORT_TERM이 MACD_LONG_TERM보다 크거나 같습니다")

    return warnings


def configure_logging(level: Optional[str] = None) -> None:
    """
    라이브러리 사용 애플리케이션을 위한 로깅 설정

    라이브러리 자체는 import 시점에 로깅을 설정하지 않습니다.

    Args:
        level: 로그 레벨 이름 (None이면 LOG_LEVEL 설정 사용)
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    logging.basicConfig(level=level_name, format=settings.LOG_FORMAT)
