"""
診断 설문 + 점수 집계 (QuestionnaireScorer)
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
- 10문항 (choice 8 + text 2)
- choice 선택지마다 夢タイプ별 포인트
- text 응답은 점수에 참여하지 않음 (메시지 생성용)
- 최고점 동점 → 우선순위 + 응답 해시로 결정 (재현 가능)
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
"""
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from dreamcard.models.schemas import QuizAnswer
from dreamcard.services.archetypes import Archetype, order_by_priority, zero_scores

logger = logging.getLogger(__name__)

A = Archetype

CHOICE = "choice"
TEXT = "text"


@dataclass(frozen=True)
class QuestionOption:
    id: str
    text: str
    points: Tuple[Tuple[Archetype, int], ...]


@dataclass(frozen=True)
class Question:
    id: int
    type: str
    text: str
    options: Tuple[QuestionOption, ...] = ()
    placeholder: Optional[str] = None

    def find_option(self, answer_id: str) -> Optional[QuestionOption]:
        for opt in self.options:
            if opt.id == answer_id:
                return opt
        return None

    def to_dict(self) -> dict:
        data = {"id": self.id, "type": self.type, "text": self.text}
        if self.type == CHOICE:
            data["options"] = [
                {"id": o.id, "text": o.text, "points": {a.value: p for a, p in o.points}}
                for o in self.options
            ]
        else:
            data["placeholder"] = self.placeholder
        return data


def _opt(option_id: str, text: str, **points: int) -> QuestionOption:
    return QuestionOption(option_id, text, tuple((Archetype(k), v) for k, v in points.items()))


QUESTIONS: Tuple[Question, ...] = (
    Question(1, CHOICE, "困難に直面したとき、あなたはどうしますか？", (
        _opt("1a", "何度でも立ち上がって挑戦する", phoenix=3),
        _opt("1b", "直感を信じて別の道を探す", kitsune=2, wolf=1),
        _opt("1c", "高い視点から状況を見直す", pegasus=2, dragon=1),
        _opt("1d", "焦らず時間をかけて解決する", turtle=2, elephant=1),
    )),
    Question(2, CHOICE, "理想の休日の過ごし方は？", (
        _opt("2a", "新しい場所を冒険する", shark=2, pegasus=1),
        _opt("2b", "自然の中でゆっくり過ごす", deer=3),
        _opt("2c", "仲間と一緒に盛り上がる", wolf=2, phoenix=1),
        _opt("2d", "静かに読書や勉強をする", dragon=2, kitsune=1),
    )),
    Question(3, CHOICE, "あなたが大切にしている価値観は？", (
        _opt("3a", "情熱と再挑戦", phoenix=2, shark=1),
        _opt("3b", "自由と理想", pegasus=2, wolf=1),
        _opt("3c", "安定と繁栄", elephant=2, turtle=1),
        _opt("3d", "調和と成長", deer=2, dragon=1),
    )),
    Question(4, TEXT, "あなたの叶えたい夢は何ですか？",
             placeholder="例：起業して自分の会社を作りたい、世界中を旅したい、など"),
    Question(5, CHOICE, "友人からよく言われることは？", (
        _opt("5a", "頼りになる、信頼できる", elephant=2, turtle=1),
        _opt("5b", "不思議な魅力がある", kitsune=2, deer=1),
        _opt("5c", "一緒にいると元気が出る", phoenix=2, wolf=1),
        _opt("5d", "夢が大きい、理想が高い", pegasus=2, dragon=1),
    )),
    Question(6, CHOICE, "夢を叶えるために最も大切なことは？", (
        _opt("6a", "諦めない強い心", phoenix=2, shark=1),
        _opt("6b", "直感を信じる勇気", kitsune=2, wolf=1),
        _opt("6c", "仲間との絆", wolf=2, deer=1),
        _opt("6d", "長期的な計画", turtle=2, dragon=1),
    )),
    Question(7, TEXT, "今、あなたが一番大切にしていることは何ですか？",
             placeholder="例：家族、仕事、健康、趣味、など"),
    Question(8, CHOICE, "ストレスを感じたときの対処法は？", (
        _opt("8a", "体を動かしてスッキリする", shark=2, phoenix=1),
        _opt("8b", "自然の中でリフレッシュ", deer=2, turtle=1),
        _opt("8c", "信頼できる人に話を聞いてもらう", wolf=2, elephant=1),
        _opt("8d", "静かに自分と向き合う", kitsune=2, dragon=1),
    )),
    Question(9, CHOICE, "あなたの強みは？", (
        _opt("9a", "リーダーシップと影響力", dragon=2, wolf=1),
        _opt("9b", "共感力と癒しの力", deer=2, kitsune=1),
        _opt("9c", "集中力と突破力", shark=2, phoenix=1),
        _opt("9d", "忍耐力と安定感", turtle=2, elephant=1),
    )),
    Question(10, CHOICE, "5年後、どんな自分でいたい？", (
        _opt("10a", "大きな夢を叶えている自分", phoenix=2, dragon=1),
        _opt("10b", "自由に世界を飛び回る自分", pegasus=2, shark=1),
        _opt("10c", "大切な人を幸せにしている自分", wolf=2, elephant=1),
        _opt("10d", "穏やかで充実した日々を送る自分", deer=2, turtle=1),
    )),
)

_QUESTION_BY_ID: Dict[int, Question] = {q.id: q for q in QUESTIONS}


def get_question(question_id: int) -> Optional[Question]:
    return _QUESTION_BY_ID.get(question_id)


# 롤링 해시 (h*31 + c) mod 2^32
HASH_MULTIPLIER = 31
HASH_MASK = 0xFFFFFFFF


def _lookup(answer: QuizAnswer) -> Optional[QuestionOption]:
    if not answer.answer_id:
        return None
    question = _QUESTION_BY_ID.get(answer.question_id)
    if question is None or question.type != CHOICE:
        return None
    return question.find_option(answer.answer_id)


def _resolve(answer: QuizAnswer) -> Optional[QuestionOption]:
    """응답 → 선택지. 알 수 없는 참조는 경고 후 None"""
    option = _lookup(answer)
    if option is None and answer.answer_id:
        logger.warning(
            f"[Quiz] 알 수 없는 선택지 참조 무시: question_id={answer.question_id} answer_id={answer.answer_id}"
        )
    return option


def calculate_scores(answers: Sequence[QuizAnswer]) -> Dict[Archetype, float]:
    """설문 ScoreVector (9종 전부 포함)"""
    scores = zero_scores()
    for answer in answers:
        option = _resolve(answer)
        if option is None:
            continue
        for archetype, points in option.points:
            scores[archetype] += points
    return scores


def canonical_answer_key(answers: Sequence[QuizAnswer]) -> str:
    """
    동점 해시용 정규화 문자열
    - 유효한 choice 응답만, "questionId:answerId" 중복 제거 후 정렬
    """
    pairs = {
        f"{a.question_id}:{a.answer_id}"
        for a in answers
        if _lookup(a) is not None
    }
    return ",".join(sorted(pairs))


def answer_hash(answers: Sequence[QuizAnswer]) -> int:
    h = 0
    for ch in canonical_answer_key(answers):
        h = (h * HASH_MULTIPLIER + ord(ch)) & HASH_MASK
    return h


def top_candidates(scores: Dict[Archetype, float]) -> List[Archetype]:
    """최고점 타입들 (우선순위 순)"""
    max_score = max(scores.values())
    return order_by_priority(a for a, s in scores.items() if s == max_score)


def break_tie(tied: Sequence[Archetype], answers: Sequence[QuizAnswer]) -> Archetype:
    ordered = order_by_priority(tied)
    if len(ordered) == 1:
        return ordered[0]
    return ordered[answer_hash(answers) % len(ordered)]


def calculate_result(answers: Sequence[QuizAnswer]) -> Archetype:
    """설문만으로 판정한 夢タイプ"""
    scores = calculate_scores(answers)
    tied = top_candidates(scores)
    result = break_tie(tied, answers)
    if len(tied) > 1:
        logger.info(f"[Quiz] 동점 {len(tied)}종 {[a.value for a in tied]} => {result.value}")
    return result


def extract_text_answers(answers: Sequence[QuizAnswer]) -> List[Tuple[str, str]]:
    """(질문 텍스트, 자유 응답) 목록"""
    out = []
    for a in answers:
        if not a.text_answer:
            continue
        question = _QUESTION_BY_ID.get(a.question_id)
        out.append((question.text if question else "", a.text_answer))
    return out
