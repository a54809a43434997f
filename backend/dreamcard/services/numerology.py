"""
数秘術 ライフパスナンバー (NumerologyCalculator)
- YYYYMMDD 전 자리 합 → 한 자리가 될 때까지 반복
- 중간 합이 11/22/33 (マスターナンバー) 이면 거기서 멈춤
"""
from dataclasses import dataclass
from typing import Dict

from dreamcard.models.schemas import NumerologyProfile

MASTER_NUMBERS = frozenset({11, 22, 33})


@dataclass(frozen=True)
class LifePathInfo:
    name: str
    character: str
    mission: str


LIFE_PATH_INFO: Dict[int, LifePathInfo] = {
    1: LifePathInfo("リーダータイプ", "自主独立", "先駆者・開拓者"),
    2: LifePathInfo("サポートタイプ", "繊細・協調", "調和・平和"),
    3: LifePathInfo("表現タイプ", "自由・楽しさ", "創造性・喜び"),
    4: LifePathInfo("実現タイプ", "安定・現実的", "基礎構築"),
    5: LifePathInfo("体験タイプ", "変化・柔軟", "成長・多様性"),
    6: LifePathInfo("愛と共感タイプ", "包容力・責任", "奉仕・教導"),
    7: LifePathInfo("分析タイプ", "洞察・専門性", "真理探究"),
    8: LifePathInfo("成功タイプ", "力強さ・現実感", "達成・成功"),
    9: LifePathInfo("包括タイプ", "器の広さ・理解", "完成・貢献"),
    11: LifePathInfo("マスターナンバー11", "直感・精神性", "啓蒙・直感知識"),
    22: LifePathInfo("マスターナンバー22", "建設・実現力", "大規模実現"),
    33: LifePathInfo("マスターナンバー33", "教師・愛", "人類への愛"),
}


def digit_sum(n: int) -> int:
    return sum(int(d) for d in str(abs(n)))


def reduce_number(n: int) -> int:
    """한 자리 또는 마스터 넘버까지 축약"""
    while n > 9 and n not in MASTER_NUMBERS:
        n = digit_sum(n)
    return n


def calc_life_path_number(year: int, month: int, day: int) -> int:
    return reduce_number(digit_sum(int(f"{year}{month:02d}{day:02d}")))


def calc_birthday_number(month: int, day: int) -> int:
    """誕生数: 월+일, 10 이상이면 1회만 축약 (마스터 넘버 유지)"""
    total = month + day
    if total >= 10 and total not in MASTER_NUMBERS:
        return total % 10 + total // 10
    return total


def analyze_numerology(year: int, month: int, day: int) -> NumerologyProfile:
    number = calc_life_path_number(year, month, day)
    info = LIFE_PATH_INFO[number]
    return NumerologyProfile(
        life_path_number=number,
        name=info.name,
        character=info.character,
        mission=info.mission,
        birthday_number=calc_birthday_number(month, day),
    )
