"""
/diagnose 엔드포인트 - 夢タイプ 진단

흐름:
1. 설문 스코어 (질문 10개, choice 8 + text 2)
2. 생년월일 있으면 占術 (四柱推命・九星気学・数秘術) 통합 0.6/0.4
3. 개인화 메시지 (OpenAI, 실패시 fallback)
"""
from fastapi import APIRouter, HTTPException
from typing import List
import logging

from dreamcard.models.schemas import (
    DiagnoseRequest,
    DiagnoseResponse,
    ErrorResponse,
    FortuneDiagnosisResult,
    FortuneRequest,
    QuestionOut,
)
from dreamcard.services import get_cache_service
from dreamcard.services.archetypes import DREAM_TYPES, PRIORITY
from dreamcard.services.diagnosis import InvalidBirthDateError, compute_fortune, run_diagnosis
from dreamcard.services.questions import QUESTIONS

logger = logging.getLogger(__name__)
router = APIRouter()


def _invalid_birth_date(e: InvalidBirthDateError) -> HTTPException:
    logger.warning(f"[Diagnose] {e}")
    return HTTPException(
        status_code=400,
        detail={
            "error_code": "INVALID_BIRTH_DATE",
            "message": "存在しない日付です。生年月日を確認してください。",
            "detail": e.reason
        }
    )


@router.post(
    "/diagnose",
    response_model=DiagnoseResponse,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse}
    },
    summary="夢タイプ診断 (설문 + 占術 통합)",
    description="""
설문 응답과 (선택) 생년월일로 9종 夢タイプ 중 하나를 판정합니다.

**판정 규칙:**
- 설문만: 최고점 타입 (동점은 우선순위 + 응답 해시)
- 생년월일 포함: `설문 * 0.6 + 占術 * 0.4` 최고점 (동점은 우선순위)

**개인화 메시지:**
- OpenAI 호출 실패/키 없음 → 카탈로그 기반 fallback (`message_source=fallback_*`)
    """
)
async def diagnose(request: DiagnoseRequest):
    try:
        result = await run_diagnosis(request.name, request.birth_date, request.answers)
    except InvalidBirthDateError as e:
        raise _invalid_birth_date(e)

    return DiagnoseResponse(success=True, result=result)


@router.post(
    "/fortune",
    response_model=FortuneDiagnosisResult,
    responses={400: {"model": ErrorResponse}},
    summary="占術 통합 진단 (생년월일만)"
)
async def fortune(request: FortuneRequest):
    try:
        return compute_fortune(request.birth_date)
    except InvalidBirthDateError as e:
        raise _invalid_birth_date(e)


@router.get("/diagnose/questions", response_model=List[QuestionOut], summary="설문 문항")
async def get_questions():
    return [q.to_dict() for q in QUESTIONS]


@router.get("/diagnose/types", summary="夢タイプ 카탈로그 (우선순위 순)")
async def get_types():
    return [DREAM_TYPES[a].to_dict() for a in PRIORITY]


@router.get("/diagnose/cache-stats", summary="占術 캐시 통계")
async def cache_stats():
    return get_cache_service().get_stats()
