"""
설문 × 占術 통합 테스트
"""
import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dreamcard.models.schemas import QuizAnswer
from dreamcard.services.archetypes import PRIORITY, Archetype, zero_scores
from dreamcard.services.fortune_engine import FortuneDiagnosisEngine
from dreamcard.services.fusion import combine_scores, fuse, pick_top
from dreamcard.services.questions import calculate_result, calculate_scores


def vector(**kwargs):
    scores = zero_scores()
    for k, v in kwargs.items():
        scores[Archetype(k)] = v
    return scores


class TestCombine:
    def test_weights(self):
        combined = combine_scores(vector(phoenix=10), vector(phoenix=5, turtle=20))
        assert combined[Archetype.PHOENIX] == pytest.approx(8.0)
        assert combined[Archetype.TURTLE] == pytest.approx(8.0)
        assert set(combined) == set(PRIORITY)

    def test_disagreement_fortune_wins(self):
        """설문 deer 1점 vs 占術 elephant 7점 → 0.6 vs 2.8"""
        q = vector(deer=1)
        f = vector(elephant=7, deer=1.5)
        combined = combine_scores(q, f)
        expected = max(PRIORITY, key=lambda a: (combined[a], -PRIORITY.index(a)))
        assert fuse(q, f) == expected == Archetype.ELEPHANT

    def test_disagreement_questionnaire_wins(self):
        q = vector(shark=10)
        f = vector(turtle=12)
        # shark 6.0 vs turtle 4.8
        assert fuse(q, f) == Archetype.SHARK


class TestPickTop:
    def test_float_tie_uses_priority(self):
        """2*0.6 = 1.2, 3*0.4 = 1.2000000000000002 → 동점 취급 → phoenix"""
        assert 2 * 0.6 != 3 * 0.4
        assert fuse(vector(phoenix=2), vector(kitsune=3)) == Archetype.PHOENIX

    def test_exact_tie(self):
        assert pick_top(vector(wolf=3, turtle=3)) == Archetype.TURTLE

    def test_all_zero(self):
        assert pick_top(zero_scores()) == Archetype.PHOENIX


class TestEndToEnd:
    """2000-01-01 + phoenix 선택지 8개 + 자유 응답 2개"""

    def test_phoenix_case(self):
        answers = [QuizAnswer(question_id=1, answer_id="1a")] * 8 + [
            QuizAnswer(question_id=4, text_answer="世界中を旅したい"),
            QuizAnswer(question_id=7, text_answer="家族"),
        ]
        q = calculate_scores(answers)
        assert calculate_result(answers) == Archetype.PHOENIX
        assert q[Archetype.PHOENIX] == 24

        f = FortuneDiagnosisEngine.all_scores(FortuneDiagnosisEngine.diagnose(2000, 1, 1))
        combined = combine_scores(q, f)
        assert combined[Archetype.PHOENIX] == pytest.approx(24 * 0.6 + 4 * 0.4)
        assert combined[Archetype.ELEPHANT] == pytest.approx(7 * 0.4)
        assert fuse(q, f) == Archetype.PHOENIX
