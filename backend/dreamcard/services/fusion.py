"""
설문 × 占術 스코어 통합 (ClassificationFusion)

combined = 설문 * 0.6 + 占術 * 0.4
- 두 벡터의 스케일 정규화 없음 (그대로 가중합)
- 최고점과 float 오차 범위 내 동점 → 우선순위
"""
import math
from typing import Dict, Mapping

from dreamcard.services.archetypes import PRIORITY, Archetype

QUESTIONNAIRE_WEIGHT = 0.6
FORTUNE_WEIGHT = 0.4

_REL_TOL = 1e-9
_ABS_TOL = 1e-9


def combine_scores(
    questionnaire: Mapping[Archetype, float],
    fortune: Mapping[Archetype, float],
) -> Dict[Archetype, float]:
    return {
        a: questionnaire.get(a, 0) * QUESTIONNAIRE_WEIGHT + fortune.get(a, 0) * FORTUNE_WEIGHT
        for a in PRIORITY
    }


def pick_top(scores: Mapping[Archetype, float]) -> Archetype:
    """최고점 타입 (근사 동점은 우선순위 앞쪽)"""
    best = max(scores.get(a, 0) for a in PRIORITY)
    return next(
        a for a in PRIORITY
        if math.isclose(scores.get(a, 0), best, rel_tol=_REL_TOL, abs_tol=_ABS_TOL)
    )


def fuse(
    questionnaire: Mapping[Archetype, float],
    fortune: Mapping[Archetype, float],
) -> Archetype:
    return pick_top(combine_scores(questionnaire, fortune))
