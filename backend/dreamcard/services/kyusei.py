"""
九星気学 本命星 (NineStarKiCalculator)

本命星 = 11 - (立春 보정 연도의 숫자근)   (1..9 로 순환)
- 숫자근: 각 자리 합을 한 자리가 될 때까지 반복
- 2000년 = 九紫火星, 1999년 = 一白水星 (9년 주기 역순)
- 立春(2/4) 이전 출생은 전년도 별
"""
from dataclasses import dataclass
from typing import Dict, Optional

from dreamcard.models.schemas import NineStarProfile
from dreamcard.services.solar_terms import get_lichun_adjusted_year

STAR_BASE = 11

FIRE_GROUP = "fire"
EARTH_GROUP = "earth"
WATER_GROUP = "water"


@dataclass(frozen=True)
class StarInfo:
    name: str
    character: str
    type: str


KYUSEI_STARS: Dict[int, StarInfo] = {
    1: StarInfo("一白水星", "柔軟・知性的", WATER_GROUP),
    2: StarInfo("二黒土星", "安定・母性的", EARTH_GROUP),
    3: StarInfo("三碧木星", "活動・成長", FIRE_GROUP),
    4: StarInfo("四緑木星", "穏やか・調和", WATER_GROUP),
    5: StarInfo("五黄土星", "リーダー・統率", EARTH_GROUP),
    6: StarInfo("六白金星", "誠実・責任感", WATER_GROUP),
    7: StarInfo("七赤金星", "社交・楽観的", FIRE_GROUP),
    8: StarInfo("八白土星", "誠実・着実", EARTH_GROUP),
    9: StarInfo("九紫火星", "知性・情熱", FIRE_GROUP),
}


def digital_root(n: int) -> int:
    n = abs(n)
    while n >= 10:
        n = sum(int(d) for d in str(n))
    return n


def star_number(adjusted_year: int) -> int:
    """보정 연도 → 본명성 번호 (1-9)"""
    return (STAR_BASE - digital_root(adjusted_year) - 1) % 9 + 1


def calc_honmeisei(year: int, month: int, day: Optional[int] = None) -> NineStarProfile:
    """출생 연/월(/일) → 本命星"""
    number = star_number(get_lichun_adjusted_year(year, month, day))
    info = KYUSEI_STARS[number]
    return NineStarProfile(
        number=number,
        star_name=info.name,
        character=info.character,
        type=info.type,
    )
