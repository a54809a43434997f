"""
60갑자 / 命式 계산 (FourPillarsEngine)
- 천간(10개) × 지지(12개)
- 일주: 1900-01-01 = 甲戌日 기준 일수 차이
- 연주: 立春 보정 연도, 1984년 = 甲子年 기준
- 월주: 절입일 근사 + 연두법(五虎遁)
- 시주: 일간 기준 (五鼠遁), 오행 집계에는 포함하지 않음
"""
from typing import Dict, List, Optional, Tuple

from dreamcard.models.schemas import ElementBalance, FourPillars, Pillar, PillarElement
from dreamcard.services.day_stem import day_stem_index, days_since_epoch
from dreamcard.services.solar_terms import get_solar_term_month_index

# 천간 (10개)
HEAVENLY_STEMS = ["甲", "乙", "丙", "丁", "戊", "己", "庚", "辛", "壬", "癸"]

# 지지 (12개)
EARTHLY_BRANCHES = ["子", "丑", "寅", "卯", "辰", "巳", "午", "未", "申", "酉", "戌", "亥"]

ELEMENTS = ("wood", "fire", "earth", "metal", "water")

# 천간-오행 매핑
STEM_ELEMENTS = {
    "甲": "wood", "乙": "wood",
    "丙": "fire", "丁": "fire",
    "戊": "earth", "己": "earth",
    "庚": "metal", "辛": "metal",
    "壬": "water", "癸": "water",
}

# 지지-오행 매핑
BRANCH_ELEMENTS = {
    "子": "water", "丑": "earth", "寅": "wood", "卯": "wood",
    "辰": "earth", "巳": "fire", "午": "fire", "未": "earth",
    "申": "metal", "酉": "metal", "戌": "earth", "亥": "water",
}

ELEMENT_INFO = {
    "wood": {"name": "木", "character": "成長・発展", "color": "#2ecc71"},
    "fire": {"name": "火", "character": "情熱・活動", "color": "#e74c3c"},
    "earth": {"name": "土", "character": "安定・信頼", "color": "#f39c12"},
    "metal": {"name": "金", "character": "強さ・決断", "color": "#95a5a6"},
    "water": {"name": "水", "character": "柔軟・知性", "color": "#3498db"},
}

# 1900-01-01 일지 = 戌(10)
DAY_BRANCH_OFFSET = 10

# 1984 = 甲子年 → (year - 4)
YEAR_CYCLE_OFFSET = 4

# 연간 → 寅月 천간 (甲己→丙, 乙庚→戊, 丙辛→庚, 丁壬→壬, 戊癸→甲)
YEAR_TO_MONTH_START = {
    0: 2, 1: 4, 2: 6, 3: 8, 4: 0,
    5: 2, 6: 4, 7: 6, 8: 8, 9: 0,
}

# 일간 → 子時 천간 (甲己→甲, 乙庚→丙, 丙辛→戊, 丁壬→庚, 戊癸→壬)
DAY_TO_HOUR_START = {
    0: 0, 1: 2, 2: 4, 3: 6, 4: 8,
    5: 0, 6: 2, 7: 4, 8: 6, 9: 8,
}


class GanjiCalculator:
    """60갑자 계산기"""

    # ===== 연주 계산 =====
    @staticmethod
    def calc_year_ganji(adjusted_year: int) -> Tuple[int, int]:
        """
        연주 (立春 보정된 연도 기준)

        Returns:
            (천간인덱스, 지지인덱스)
        """
        return (adjusted_year - YEAR_CYCLE_OFFSET) % 10, (adjusted_year - YEAR_CYCLE_OFFSET) % 12

    # ===== 월주 계산 =====
    @staticmethod
    def calc_month_ganji(year_stem_idx: int, month_idx: int) -> Tuple[int, int]:
        """
        월주 (연두법)

        Args:
            year_stem_idx: 연간 인덱스
            month_idx: 절기 월 인덱스 (0=寅, ..., 11=丑)
        """
        stem_idx = (YEAR_TO_MONTH_START[year_stem_idx] + month_idx) % 10
        branch_idx = (2 + month_idx) % 12  # 寅=2부터 시작
        return stem_idx, branch_idx

    # ===== 일주 계산 =====
    @staticmethod
    def calc_day_ganji(year: int, month: int, day: int) -> Tuple[int, int]:
        """일주: 천간은 日干 계산과 동일, 지지는 같은 일수에 오프셋"""
        days = days_since_epoch(year, month, day)
        return day_stem_index(year, month, day), (days + DAY_BRANCH_OFFSET) % 12

    # ===== 시주 계산 =====
    @staticmethod
    def calc_hour_ganji(day_stem_idx: int, hour: int) -> Tuple[int, int]:
        """
        시주 (2시간 단위, 23시~00:59 = 子時)
        """
        branch_idx = GanjiCalculator.get_hour_branch_index(hour)
        stem_idx = (DAY_TO_HOUR_START[day_stem_idx] + branch_idx) % 10
        return stem_idx, branch_idx

    @staticmethod
    def get_hour_branch_index(hour: int) -> int:
        """시간 → 지지 인덱스"""
        if hour == 23:
            return 0
        return (hour + 1) // 2


def get_ganji_str(stem_idx: int, branch_idx: int) -> str:
    return f"{HEAVENLY_STEMS[stem_idx]}{EARTHLY_BRANCHES[branch_idx]}"


def make_pillar(stem_idx: int, branch_idx: int) -> Pillar:
    stem = HEAVENLY_STEMS[stem_idx]
    branch = EARTHLY_BRANCHES[branch_idx]
    return Pillar(
        pillar=get_ganji_str(stem_idx, branch_idx),
        stem_index=stem_idx,
        branch_index=branch_idx,
        element=PillarElement(
            stem=stem,
            stem_element=STEM_ELEMENTS[stem],
            branch=branch,
            branch_element=BRANCH_ELEMENTS[branch],
            primary=STEM_ELEMENTS[stem],
        ),
    )


def calc_element_balance(pillars: List[Pillar]) -> ElementBalance:
    """기둥들의 천간/지지 오행 개수"""
    counts: Dict[str, int] = {e: 0 for e in ELEMENTS}
    for p in pillars:
        counts[p.element.stem_element] += 1
        counts[p.element.branch_element] += 1
    return ElementBalance(**counts)


def dominant_elements(balance: ElementBalance, n: int = 2) -> List[Tuple[str, int]]:
    """많은 순 상위 n개 (동수면 木火土金水 순)"""
    counts = balance.model_dump()
    ranked = sorted(ELEMENTS, key=lambda e: (-counts[e], ELEMENTS.index(e)))
    return [(e, counts[e]) for e in ranked[:n]]


def calc_four_pillars(year: int, month: int, day: int, hour: Optional[int] = None) -> FourPillars:
    """생년월일(+시) → 命式"""
    month_idx, adjusted_year = get_solar_term_month_index(year, month, day)

    year_stem, year_branch = GanjiCalculator.calc_year_ganji(adjusted_year)
    month_stem, month_branch = GanjiCalculator.calc_month_ganji(year_stem, month_idx)
    day_stem, day_branch = GanjiCalculator.calc_day_ganji(year, month, day)

    year_pillar = make_pillar(year_stem, year_branch)
    month_pillar = make_pillar(month_stem, month_branch)
    day_pillar = make_pillar(day_stem, day_branch)

    hour_pillar = None
    if hour is not None:
        hour_pillar = make_pillar(*GanjiCalculator.calc_hour_ganji(day_stem, hour))

    return FourPillars(
        year_pillar=year_pillar,
        month_pillar=month_pillar,
        day_pillar=day_pillar,
        hour_pillar=hour_pillar,
        element_balance=calc_element_balance([year_pillar, month_pillar, day_pillar]),
    )
