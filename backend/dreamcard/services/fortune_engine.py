"""
占術 통합 진단 엔진 (FortuneDiagnosisEngine)
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
四柱推命(오행 분포) + 九星気学(系統) + 数秘術(ライフパス)
→ 夢タイプ 9종 ScoreVector (allScores)
→ primary / secondary (점수 내림차순, 동점은 우선순위)
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
생년월일만의 순수 함수 (난수/외부 I/O/현재시각 없음)
"""
import logging
from typing import Dict, List, Optional, Tuple

from dreamcard.models.schemas import (
    BirthDate,
    DreamTypeResult,
    DreamTypeScore,
    ElementBalance,
    FortuneDiagnosisResult,
    FortuneSummary,
    NineStarProfile,
    NumerologyProfile,
)
from dreamcard.services.archetypes import (
    Archetype,
    get_dream_type,
    priority_rank,
    scores_to_json,
    zero_scores,
)
from dreamcard.services.ganji import calc_four_pillars
from dreamcard.services.kyusei import EARTH_GROUP, FIRE_GROUP, WATER_GROUP, calc_honmeisei
from dreamcard.services.numerology import analyze_numerology

logger = logging.getLogger(__name__)

A = Archetype

# 오행 1개당 가산점
ELEMENT_WEIGHTS: Dict[str, Tuple[Tuple[Archetype, float], ...]] = {
    "fire": ((A.PHOENIX, 2), (A.DRAGON, 1.5)),
    "metal": ((A.SHARK, 2), (A.KITSUNE, 1.5)),
    "wood": ((A.PEGASUS, 2), (A.DEER, 1.5)),
    "earth": ((A.ELEPHANT, 2),),
    "water": ((A.TURTLE, 2), (A.WOLF, 1.5)),
}

# 九星 系統 가산점
STAR_GROUP_POINTS: Dict[str, Dict[Archetype, int]] = {
    FIRE_GROUP: {A.PHOENIX: 3, A.PEGASUS: 2, A.DRAGON: 2},
    EARTH_GROUP: {A.ELEPHANT: 3, A.TURTLE: 2, A.DEER: 1},
    WATER_GROUP: {A.KITSUNE: 3, A.WOLF: 2, A.TURTLE: 1},
}

# ライフパスナンバー 가산점
LIFE_PATH_POINTS: Dict[int, Dict[Archetype, int]] = {
    1: {A.DRAGON: 3, A.SHARK: 2, A.PHOENIX: 1},
    2: {A.WOLF: 3, A.DEER: 2, A.TURTLE: 1},
    3: {A.PEGASUS: 3, A.PHOENIX: 2, A.KITSUNE: 1},
    4: {A.ELEPHANT: 3, A.TURTLE: 2, A.SHARK: 1},
    5: {A.PEGASUS: 2, A.KITSUNE: 2, A.PHOENIX: 1},
    6: {A.DEER: 3, A.WOLF: 2, A.ELEPHANT: 1},
    7: {A.KITSUNE: 3, A.TURTLE: 2, A.WOLF: 1},
    8: {A.DRAGON: 3, A.SHARK: 2, A.ELEPHANT: 1},
    9: {A.WOLF: 3, A.PEGASUS: 1, A.KITSUNE: 1},
    11: {A.PEGASUS: 3, A.KITSUNE: 2, A.WOLF: 1},
    22: {A.DRAGON: 3, A.ELEPHANT: 2, A.SHARK: 1},
    33: {A.DEER: 3, A.WOLF: 2, A.PEGASUS: 1},
}


class DreamTypeMapper:
    """占術 데이터 → 夢タイプ 스코어"""

    @staticmethod
    def score(
        balance: ElementBalance,
        kyusei: NineStarProfile,
        numerology: NumerologyProfile,
    ) -> Dict[Archetype, float]:
        scores = zero_scores()

        counts = balance.model_dump()
        for element, weights in ELEMENT_WEIGHTS.items():
            for archetype, weight in weights:
                scores[archetype] += counts[element] * weight

        for archetype, points in STAR_GROUP_POINTS.get(kyusei.type, {}).items():
            scores[archetype] += points

        for archetype, points in LIFE_PATH_POINTS.get(numerology.life_path_number, {}).items():
            scores[archetype] += points

        return scores

    @staticmethod
    def rank(scores: Dict[Archetype, float]) -> List[Archetype]:
        """점수 내림차순, 동점은 우선순위"""
        return sorted(scores, key=lambda a: (-scores[a], priority_rank(a)))

    @staticmethod
    def to_result(scores: Dict[Archetype, float]) -> DreamTypeResult:
        ranking = [_score_entry(a, scores[a]) for a in DreamTypeMapper.rank(scores)]
        return DreamTypeResult(
            primary=ranking[0],
            secondary=ranking[1],
            all_scores=scores_to_json(scores),
            ranking=ranking,
        )


def _score_entry(archetype: Archetype, score: float) -> DreamTypeScore:
    info = get_dream_type(archetype)
    return DreamTypeScore(
        type=archetype.value,
        name=info.fortune_name,
        character=info.fortune_character,
        description=info.fortune_description,
        color=info.color,
        score=score,
    )


class FortuneDiagnosisEngine:
    """四柱推命・九星気学・数秘術 통합"""

    @staticmethod
    def diagnose(year: int, month: int, day: int, hour: Optional[int] = None) -> FortuneDiagnosisResult:
        bazi = calc_four_pillars(year, month, day, hour)
        kyusei = calc_honmeisei(year, month, day)
        numerology = analyze_numerology(year, month, day)

        scores = DreamTypeMapper.score(bazi.element_balance, kyusei, numerology)
        dream_type = DreamTypeMapper.to_result(scores)

        logger.info(
            f"[Fortune] {year}-{month:02d}-{day:02d} | "
            f"{bazi.year_pillar.pillar}/{bazi.month_pillar.pillar}/{bazi.day_pillar.pillar} | "
            f"star={kyusei.number} lpn={numerology.life_path_number} | "
            f"primary={dream_type.primary.type} secondary={dream_type.secondary.type}"
        )

        return FortuneDiagnosisResult(
            birth_date=BirthDate(year=year, month=month, day=day, hour=hour),
            bazi=bazi,
            kyusei=kyusei,
            numerology=numerology,
            dream_type=dream_type,
            summary=FortuneSummary(
                primary_dream_type=dream_type.primary.name,
                primary_character=dream_type.primary.character,
                primary_description=dream_type.primary.description,
                secondary_dream_type=dream_type.secondary.name,
                kyusei_name=kyusei.star_name,
                kyusei_character=kyusei.character,
                life_path_number=numerology.life_path_number,
                life_path_name=numerology.name,
                life_path_mission=numerology.mission,
            ),
        )

    @staticmethod
    def all_scores(result: FortuneDiagnosisResult) -> Dict[Archetype, float]:
        """결과 JSON 스코어 → Archetype 키 ScoreVector"""
        return {Archetype(k): v for k, v in result.dream_type.all_scores.items()}
