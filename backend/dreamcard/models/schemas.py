"""
Pydantic 스키마 정의
夢タイプ 진단 API 요청/응답 모델
"""
from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any


# ============ 입력 ============

class BirthDate(BaseModel):
    """생년월일 (범위만 검증, 달력 유효성은 라우터에서 확인)"""
    year: int = Field(..., ge=1, le=9999, description="출생 년도 (양력)")
    month: int = Field(..., ge=1, le=12, description="출생 월")
    day: int = Field(..., ge=1, le=31, description="출생 일")
    hour: Optional[int] = Field(None, ge=0, le=23, description="출생 시간 (0-23시, 선택)")


class QuizAnswer(BaseModel):
    """설문 응답 1건"""
    question_id: int = Field(..., alias="questionId", description="질문 ID")
    answer_id: Optional[str] = Field(None, alias="answerId", description="선택지 ID (choice 질문)")
    text_answer: Optional[str] = Field(None, alias="textAnswer", max_length=1000, description="자유 입력 (text 질문)")

    class Config:
        populate_by_name = True


class DiagnoseRequest(BaseModel):
    """진단 요청"""
    name: str = Field(..., min_length=1, max_length=50, description="이름/닉네임")
    birth_date: Optional[BirthDate] = Field(None, alias="birthDate", description="생년월일 (없으면 설문만으로 판정)")
    answers: List[QuizAnswer] = Field(default_factory=list, description="설문 응답 목록")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "name": "さくら",
                "birthDate": {"year": 2000, "month": 1, "day": 1},
                "answers": [
                    {"questionId": 1, "answerId": "1a"},
                    {"questionId": 4, "textAnswer": "世界中を旅したい"},
                ],
            }
        }


class FortuneRequest(BaseModel):
    """占術만 계산"""
    birth_date: BirthDate = Field(..., alias="birthDate")

    class Config:
        populate_by_name = True


# ============ 四柱推命 ============

class HeavenlyStem(BaseModel):
    """日干 (十干 1개)"""
    stem: str = Field(..., description="천간 한자 (甲~癸)")
    element: str = Field(..., description="오행 (wood/fire/earth/metal/water)")
    polarity: str = Field(..., description="음양 (yang/yin)")
    keywords: List[str]
    description: str


class PillarElement(BaseModel):
    """기둥의 천간/지지 오행"""
    stem: str
    stem_element: str
    branch: str
    branch_element: str
    primary: str


class Pillar(BaseModel):
    """기둥 (년/월/일/시주)"""
    pillar: str = Field(..., description="간지 2글자 (예: 戊午)")
    stem_index: int = Field(..., description="천간 인덱스 (0-9)")
    branch_index: int = Field(..., description="지지 인덱스 (0-11)")
    element: PillarElement


class ElementBalance(BaseModel):
    """오행 분포 (년/월/일주 6글자 기준)"""
    wood: int = 0
    fire: int = 0
    earth: int = 0
    metal: int = 0
    water: int = 0


class FourPillars(BaseModel):
    """命式"""
    year_pillar: Pillar
    month_pillar: Pillar
    day_pillar: Pillar
    hour_pillar: Optional[Pillar] = Field(None, description="시주 (시간 미입력시 None, 오행 집계 제외)")
    element_balance: ElementBalance


# ============ 九星気学 / 数秘術 ============

class NineStarProfile(BaseModel):
    """本命星"""
    number: int = Field(..., ge=1, le=9)
    star_name: str
    character: str
    type: str = Field(..., description="系統 (fire/earth/water)")


class NumerologyProfile(BaseModel):
    """ライフパスナンバー"""
    life_path_number: int
    name: str
    character: str
    mission: str
    birthday_number: int


# ============ 夢タイプ 스코어 ============

class DreamTypeScore(BaseModel):
    type: str
    name: str
    character: str
    description: str
    color: str
    score: float


class DreamTypeResult(BaseModel):
    primary: DreamTypeScore
    secondary: DreamTypeScore
    all_scores: Dict[str, float]
    ranking: List[DreamTypeScore]


class FortuneSummary(BaseModel):
    primary_dream_type: str
    primary_character: str
    primary_description: str
    secondary_dream_type: str
    kyusei_name: str
    kyusei_character: str
    life_path_number: int
    life_path_name: str
    life_path_mission: str


class FortuneDiagnosisResult(BaseModel):
    """占術 통합 진단 결과"""
    birth_date: BirthDate
    bazi: FourPillars
    kyusei: NineStarProfile
    numerology: NumerologyProfile
    dream_type: DreamTypeResult
    summary: FortuneSummary


# ============ /diagnose 응답 ============

class DiagnoseResult(BaseModel):
    dream_type: str = Field(..., description="최종 夢タイプ ID")
    type_name: str
    type_name_en: str
    display_name: str
    icon: str
    color: str
    frame_color: str
    card_image: str
    element: str
    keywords: List[str]
    personality: str
    description: str
    strengths: List[str]
    advice: str
    personalized_message: str
    message_source: str = Field(..., description="LLM 모델명 또는 fallback_*")

    result_type: str = Field(..., description="설문만으로 판정한 타입")
    scores: Dict[str, float] = Field(..., description="설문 ScoreVector")
    combined_scores: Optional[Dict[str, float]] = Field(None, description="설문 0.6 + 占術 0.4")
    day_stem: Optional[HeavenlyStem] = None
    fortune: Optional[FortuneDiagnosisResult] = None


class DiagnoseResponse(BaseModel):
    success: bool = True
    result: DiagnoseResult


# ============ 카탈로그 ============

class QuestionOptionOut(BaseModel):
    id: str
    text: str
    points: Dict[str, int]


class QuestionOut(BaseModel):
    id: int
    type: str
    text: str
    options: Optional[List[QuestionOptionOut]] = None
    placeholder: Optional[str] = None


# ============ 에러 응답 ============

class ErrorResponse(BaseModel):
    """에러 응답"""
    success: bool = False
    error_code: str
    message: str
    detail: Optional[Any] = None
