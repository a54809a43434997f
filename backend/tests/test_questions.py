"""
설문 스코어 + 동점 처리 테스트
"""
import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dreamcard.models.schemas import QuizAnswer
from dreamcard.services.archetypes import PRIORITY, Archetype
from dreamcard.services.questions import (
    QUESTIONS,
    answer_hash,
    calculate_result,
    calculate_scores,
    canonical_answer_key,
    extract_text_answers,
    get_question,
)


def ans(question_id, answer_id=None, text=None):
    return QuizAnswer(question_id=question_id, answer_id=answer_id, text_answer=text)


class TestQuestionBank:
    """문항 카탈로그"""

    def test_ten_questions(self):
        assert len(QUESTIONS) == 10
        assert [q.id for q in QUESTIONS] == list(range(1, 11))

    def test_text_questions(self):
        """4, 7번만 자유 입력"""
        text_ids = [q.id for q in QUESTIONS if q.type == "text"]
        assert text_ids == [4, 7]

    def test_choice_points_positive(self):
        for q in QUESTIONS:
            for opt in q.options:
                assert opt.points
                assert all(p > 0 for _, p in opt.points)

    def test_alias_input(self):
        """camelCase 입력도 허용"""
        a = QuizAnswer(**{"questionId": 1, "answerId": "1a"})
        assert a.question_id == 1
        assert a.answer_id == "1a"


class TestCalculateScores:
    """ScoreVector 집계"""

    def test_single_answer(self):
        scores = calculate_scores([ans(1, "1b")])
        assert scores[Archetype.KITSUNE] == 2
        assert scores[Archetype.WOLF] == 1
        assert sum(scores.values()) == 3

    def test_all_keys_present(self):
        scores = calculate_scores([])
        assert set(scores) == set(PRIORITY)
        assert all(v == 0 for v in scores.values())

    def test_text_answer_ignored(self):
        scores = calculate_scores([ans(4, text="世界中を旅したい"), ans(7, text="家族")])
        assert all(v == 0 for v in scores.values())

    @pytest.mark.parametrize("answer", [
        ans(99, "99a"),       # 없는 질문
        ans(1, "2a"),         # 다른 질문의 선택지
        ans(4, "4a"),         # text 질문에 선택지
        ans(1),               # answerId 없음
    ])
    def test_unknown_reference_ignored(self, answer):
        base = calculate_scores([ans(1, "1a")])
        assert calculate_scores([ans(1, "1a"), answer]) == base

    def test_duplicates_accumulate(self):
        scores = calculate_scores([ans(1, "1a")] * 8)
        assert scores[Archetype.PHOENIX] == 24


class TestTieBreak:
    """동점 처리 (우선순위 + 응답 해시)"""

    def test_empty_answers_default(self):
        """전부 0점 → 9종 동점 → 해시 0 → 우선순위 첫 번째"""
        assert canonical_answer_key([]) == ""
        assert answer_hash([]) == 0
        assert calculate_result([]) == Archetype.PHOENIX

    def test_unique_max(self):
        assert calculate_result([ans(2, "2b")]) == Archetype.DEER

    def test_two_way_tie(self):
        """phoenix 3 vs deer 3 → "1:1a,2:2b" 해시 홀수 → deer"""
        answers = [ans(1, "1a"), ans(2, "2b")]
        assert canonical_answer_key(answers) == "1:1a,2:2b"
        assert answer_hash(answers) % 2 == 1
        assert calculate_result(answers) == Archetype.DEER

    def test_order_independent(self):
        a = [ans(1, "1a"), ans(2, "2b")]
        b = [ans(2, "2b"), ans(1, "1a")]
        assert calculate_result(a) == calculate_result(b)

    def test_incidental_answers_do_not_change_result(self):
        """자유 응답/잘못된 참조가 섞여도 같은 결과"""
        base = [ans(1, "1a"), ans(2, "2b")]
        noisy = [
            ans(4, text="起業したい"),
            ans(2, "2b"),
            ans(99, "zz"),
            ans(1, "1a"),
            ans(7, text="健康"),
        ]
        assert canonical_answer_key(noisy) == canonical_answer_key(base)
        assert calculate_result(noisy) == calculate_result(base)

    def test_hash_32bit(self):
        answers = [ans(q.id, q.options[0].id) for q in QUESTIONS if q.options]
        h = answer_hash(answers)
        assert 0 <= h <= 0xFFFFFFFF

    def test_deterministic(self):
        answers = [ans(q.id, q.options[-1].id) for q in QUESTIONS if q.options]
        results = {calculate_result(answers) for _ in range(5)}
        assert len(results) == 1


class TestTextAnswers:
    def test_extract_with_question_text(self):
        answers = [ans(1, "1a"), ans(4, text="世界中を旅したい")]
        out = extract_text_answers(answers)
        assert out == [(get_question(4).text, "世界中を旅したい")]
