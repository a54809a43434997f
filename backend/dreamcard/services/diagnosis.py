"""
夢タイプ 진단 오케스트레이션
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
1. 설문 스코어 → result_type
2. (생년월일 있으면) 日干 + 占術 엔진 → 0.6/0.4 통합 → 최종 타입
3. 개인화 메시지 (LLM, 실패시 fallback)
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
"""
import logging
from datetime import date
from typing import Optional, Sequence

from dreamcard.models.schemas import (
    BirthDate,
    DiagnoseResult,
    FortuneDiagnosisResult,
    QuizAnswer,
)
from dreamcard.services.archetypes import get_dream_type, scores_to_json
from dreamcard.services.cache import cache_service
from dreamcard.services.day_stem import calc_day_stem
from dreamcard.services.fortune_engine import FortuneDiagnosisEngine
from dreamcard.services.fusion import combine_scores, pick_top
from dreamcard.services.message_generator import message_generator
from dreamcard.services.questions import calculate_result, calculate_scores, extract_text_answers

logger = logging.getLogger(__name__)


class InvalidBirthDateError(ValueError):
    """달력상 존재하지 않는 날짜 (예: 2월 30일)"""

    def __init__(self, birth_date: BirthDate, reason: str):
        self.birth_date = birth_date
        self.reason = reason
        super().__init__(f"invalid birth date {birth_date.year}-{birth_date.month}-{birth_date.day}: {reason}")


def validate_birth_date(birth_date: BirthDate) -> date:
    try:
        return date(birth_date.year, birth_date.month, birth_date.day)
    except ValueError as e:
        raise InvalidBirthDateError(birth_date, str(e)) from e


def compute_fortune(birth_date: BirthDate) -> FortuneDiagnosisResult:
    """占術 결과 (생년월일+시 단위 캐시)"""
    validate_birth_date(birth_date)
    return cache_service.get_or_compute_fortune(
        birth_date.year,
        birth_date.month,
        birth_date.day,
        birth_date.hour,
        FortuneDiagnosisEngine.diagnose,
    )


async def run_diagnosis(
    name: str,
    birth_date: Optional[BirthDate],
    answers: Sequence[QuizAnswer],
) -> DiagnoseResult:
    scores = calculate_scores(answers)
    result_type = calculate_result(answers)

    final_type = result_type
    day_stem = None
    fortune = None
    combined = None

    if birth_date is not None:
        fortune = compute_fortune(birth_date)
        day_stem = calc_day_stem(birth_date.year, birth_date.month, birth_date.day).to_schema()
        combined = combine_scores(scores, FortuneDiagnosisEngine.all_scores(fortune))
        final_type = pick_top(combined)

    logger.info(
        f"[Diagnose] answers={len(answers)} | quiz={result_type.value} | "
        f"fortune={fortune.dream_type.primary.type if fortune else '-'} | final={final_type.value}"
    )

    message = await message_generator.generate(
        user_name=name,
        archetype=final_type,
        day_stem=day_stem,
        fortune=fortune,
        text_answers=extract_text_answers(answers),
        scores=scores,
    )

    info = get_dream_type(final_type)
    return DiagnoseResult(
        dream_type=final_type.value,
        type_name=info.name,
        type_name_en=info.name_en,
        display_name=info.display_name,
        icon=info.icon,
        color=info.color,
        frame_color=info.frame_color,
        card_image=info.card_image,
        element=info.element,
        keywords=list(info.keywords),
        personality=info.personality,
        description=info.description,
        strengths=list(info.strengths),
        advice=info.advice,
        personalized_message=message.text,
        message_source=message.source,
        result_type=result_type.value,
        scores=scores_to_json(scores),
        combined_scores=scores_to_json(combined) if combined is not None else None,
        day_stem=day_stem,
        fortune=fortune,
    )
