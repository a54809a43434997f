"""
節入り(절입일) 근사 데이터
- 월주: 어느 절기 구간인지 (寅月=0 ... 丑月=11)
- 연주 / 九星: 立春(2/4) 이전이면 전년도
- 시각 정밀도 없음 (일 단위 근사, 매년 동일)
"""
from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class SolarTermInfo:
    """절기 정보"""
    name: str           # 절기 이름
    month_index: int    # 월지 인덱스 (0=寅月, 1=卯月, ..., 11=丑月)
    approx_month: int   # 대략적인 양력 월
    approx_day: int     # 대략적인 양력 일


# 월주는 12절(節)만 사용
SOLAR_TERMS_ENTRY = (
    SolarTermInfo("立春", 0, 2, 4),
    SolarTermInfo("啓蟄", 1, 3, 6),
    SolarTermInfo("清明", 2, 4, 5),
    SolarTermInfo("立夏", 3, 5, 6),
    SolarTermInfo("芒種", 4, 6, 6),
    SolarTermInfo("小暑", 5, 7, 7),
    SolarTermInfo("立秋", 6, 8, 8),
    SolarTermInfo("白露", 7, 9, 8),
    SolarTermInfo("寒露", 8, 10, 8),
    SolarTermInfo("立冬", 9, 11, 7),
    SolarTermInfo("大雪", 10, 12, 7),
    SolarTermInfo("小寒", 11, 1, 6),
)

# 양력 월 → 그 달에 들어오는 절기
_TERM_BY_MONTH: Dict[int, SolarTermInfo] = {t.approx_month: t for t in SOLAR_TERMS_ENTRY}

LICHUN_MONTH = 2
LICHUN_DAY = 4


def is_before_lichun(month: int, day: Optional[int]) -> bool:
    """
    立春 이전 여부
    day 미지정이면 2월은 立春 이후로 본다
    """
    if month < LICHUN_MONTH:
        return True
    if month == LICHUN_MONTH and day is not None and day < LICHUN_DAY:
        return True
    return False


def get_lichun_adjusted_year(year: int, month: int, day: Optional[int] = None) -> int:
    """立春 보정된 연도"""
    return year - 1 if is_before_lichun(month, day) else year


def get_solar_term_month_index(year: int, month: int, day: int) -> Tuple[int, int]:
    """
    절기 기준 월지 인덱스

    Returns:
        (월지인덱스, 立春보정연도)
        - 월지인덱스: 0=寅, 1=卯, ..., 10=子, 11=丑
    """
    term = _TERM_BY_MONTH[month]
    month_idx = term.month_index
    if day < term.approx_day:
        month_idx = (month_idx - 1) % 12
    return month_idx, get_lichun_adjusted_year(year, month, day)
