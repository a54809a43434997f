"""
개인화 메시지 생성기
- 夢タイプ 카탈로그 + 占術 결과 + 자유 응답 → 프롬프트
- OpenAI Chat Completions (재시도 + 백오프)
- 키 없음/실패 → 카탈로그 문구 기반 fallback (예외 전파 없음)
"""
import asyncio
import logging
import random
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import httpx
from openai import APIConnectionError, APIError, AsyncOpenAI, AuthenticationError, RateLimitError

from dreamcard.config import get_settings
from dreamcard.models.schemas import FortuneDiagnosisResult, HeavenlyStem
from dreamcard.services.archetypes import DREAM_TYPES, Archetype, DreamType
from dreamcard.services.fortune_engine import DreamTypeMapper
from dreamcard.services.ganji import ELEMENT_INFO, dominant_elements
from dreamcard.services.openai_key import get_openai_api_key, key_fingerprint, key_tail

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "あなたは「引き寄せノート」の専門家で、きんまん先生の夢タイプ診断を担当しています。"

POLARITY_JA = {"yang": "陽", "yin": "陰"}
STAR_GROUP_JA = {"fire": "火系", "earth": "土系", "water": "水系"}


@dataclass
class PersonalizedMessage:
    text: str
    source: str  # 모델명 또는 fallback_<코드>

    @property
    def is_fallback(self) -> bool:
        return self.source.startswith("fallback")


class LLMCallError(Exception):
    """재시도 후에도 LLM 호출 실패"""


def build_prompt(
    user_name: str,
    dream_type: DreamType,
    day_stem: Optional[HeavenlyStem],
    fortune: Optional[FortuneDiagnosisResult],
    text_answers: Sequence[Tuple[str, str]],
    scores: Dict[Archetype, float],
) -> str:
    """프롬프트 조립 (순수 함수)"""
    sections: List[str] = []

    sections.append(
        f"【ユーザー情報】\n"
        f"名前: {user_name}\n"
        f"診断結果: {dream_type.name}（{dream_type.name_en}）\n"
        f"タイプの特徴: {'、'.join(dream_type.keywords)}\n"
        f"{dream_type.description}"
    )

    if day_stem is not None:
        sections.append(
            f"【四柱推命データ（日干）】\n"
            f"日干: {day_stem.stem}（{ELEMENT_INFO[day_stem.element]['name']}・{POLARITY_JA[day_stem.polarity]}）\n"
            f"性格キーワード: {'、'.join(day_stem.keywords)}\n"
            f"四柱推命的特徴: {day_stem.description}"
        )

    if fortune is not None:
        dominant = "、".join(
            f"{ELEMENT_INFO[e]['name']}({n})" for e, n in dominant_elements(fortune.bazi.element_balance)
        )
        sections.append(
            f"【統合占術データ】\n"
            f"◆ 四柱推命（命式）\n"
            f"  年柱: {fortune.bazi.year_pillar.pillar}\n"
            f"  月柱: {fortune.bazi.month_pillar.pillar}\n"
            f"  日柱: {fortune.bazi.day_pillar.pillar}\n"
            f"  五行バランス: {dominant} が強い\n"
            f"◆ 九星気学\n"
            f"  本命星: {fortune.kyusei.star_name}\n"
            f"  特性: {fortune.kyusei.character}\n"
            f"  系統: {STAR_GROUP_JA.get(fortune.kyusei.type, fortune.kyusei.type)}\n"
            f"◆ 数秘術\n"
            f"  ライフパスナンバー: {fortune.numerology.life_path_number}\n"
            f"  タイプ: {fortune.numerology.name}\n"
            f"  使命: {fortune.numerology.mission}\n"
            f"◆ 占術診断スコア\n"
            f"  主要タイプ: {fortune.dream_type.primary.name}（スコア{fortune.dream_type.primary.score:.1f}）\n"
            f"  副次タイプ: {fortune.dream_type.secondary.name}（スコア{fortune.dream_type.secondary.score:.1f}）"
        )

    answers_text = "\n\n".join(f"Q: {q}\nA: {a}" for q, a in text_answers)
    sections.append(f"【ユーザーの回答】\n{answers_text or '記述式の回答はありませんでした。'}")

    top3 = DreamTypeMapper.rank(dict(scores))[:3]
    sections.append(
        "【診断スコア（質問回答）】\n"
        + "\n".join(f"{DREAM_TYPES[a].name}: {scores[a]:g}点" for a in top3)
    )

    sections.append(
        f"【指示】\n"
        f"上記の情報を基に、{user_name}さんに寄り添った、温かく励ましのメッセージを200〜300文字で作成してください。\n"
        f"1. {user_name}さんの夢や大切にしていることへの共感\n"
        f"2. {dream_type.name}としての強みや可能性\n"
        f"3. 占術データを自然に織り交ぜながら、その人の本質的な強みを肯定する\n"
        f"4. 引き寄せノートの具体的なアドバイス\n"
        f"5. 前向きで希望に満ちた言葉\n"
        f"絵文字は使わず、純粋な日本語で書いてください。"
    )

    return "\n\n".join(sections)


def fallback_message(user_name: str, dream_type: DreamType) -> str:
    return (
        f"{user_name}さん、あなたの夢タイプは「{dream_type.name}」です。\n\n"
        f"{dream_type.description}\n\n"
        f"引き寄せノートには、あなたの夢や大切にしていることを書き出してみてください。"
        f"{dream_type.name}としてのあなたの強みを活かして、素敵な未来を引き寄せていきましょう。"
    )


def _clean(text: str) -> str:
    return re.sub(r"\n{3,}", "\n\n", text.strip())


class MessageGenerator:
    """OpenAI 기반 개인화 메시지 (실패시 fallback)"""

    def _get_client(self, api_key: str) -> AsyncOpenAI:
        settings = get_settings()
        logger.debug("OpenAI client fp=%s tail=%s", key_fingerprint(api_key), key_tail(api_key))
        return AsyncOpenAI(
            api_key=api_key,
            timeout=httpx.Timeout(float(settings.llm_timeout), connect=10.0),
            max_retries=0
        )

    def _backoff(self, attempt: int) -> float:
        settings = get_settings()
        delay = min(settings.llm_retry_base_delay * (2 ** attempt), settings.llm_retry_max_delay)
        return delay * random.uniform(0.5, 1.5)

    async def _wait(self, attempt: int, reason: str):
        """다음 시도 전 대기 (마지막 시도 후에는 대기 없음)"""
        if attempt + 1 >= get_settings().llm_max_retries:
            return
        delay = self._backoff(attempt)
        logger.warning(f"[LLM] {reason} | Waiting {delay:.1f}s")
        await asyncio.sleep(delay)

    async def _call_llm(self, api_key: str, prompt: str) -> str:
        settings = get_settings()
        last_error: Optional[Exception] = None

        try:
            client = self._get_client(api_key)
        except Exception as e:
            raise LLMCallError(f"client init failed: {type(e).__name__}") from e

        async with client:
            for attempt in range(settings.llm_max_retries):
                try:
                    logger.info(f"[LLM] Attempt {attempt + 1}/{settings.llm_max_retries} | Model: {settings.openai_model}")
                    response = await client.chat.completions.create(
                        model=settings.openai_model,
                        messages=[
                            {"role": "system", "content": SYSTEM_PROMPT},
                            {"role": "user", "content": prompt},
                        ],
                        max_tokens=settings.message_max_output_tokens,
                        temperature=settings.message_temperature,
                    )
                    content = ""
                    if response.choices:
                        content = response.choices[0].message.content or ""
                    if content.strip():
                        return _clean(content)
                    last_error = LLMCallError("empty completion")
                    await self._wait(attempt, "EMPTY_COMPLETION")

                except AuthenticationError as e:
                    logger.error(f"[LLM] AUTH_ERROR (401) | {str(e)[:200]}")
                    raise LLMCallError("authentication failed") from e

                except (RateLimitError, APIConnectionError) as e:
                    last_error = e
                    await self._wait(attempt, type(e).__name__)

                except APIError as e:
                    last_error = e
                    logger.error(f"[LLM] API_ERROR | {str(e)[:200]}")
                    await self._wait(attempt, "API_ERROR")

                except Exception as e:
                    last_error = e
                    logger.error(f"[LLM] UNEXPECTED_ERROR | Type: {type(e).__name__} | {str(e)[:200]}")
                    await self._wait(attempt, "UNEXPECTED_ERROR")

        logger.error(f"[LLM] ALL_RETRIES_FAILED | Last error: {type(last_error).__name__}")
        raise LLMCallError(f"failed after {settings.llm_max_retries} attempts: {type(last_error).__name__}")

    async def generate(
        self,
        user_name: str,
        archetype: Archetype,
        day_stem: Optional[HeavenlyStem],
        fortune: Optional[FortuneDiagnosisResult],
        text_answers: Sequence[Tuple[str, str]],
        scores: Dict[Archetype, float],
    ) -> PersonalizedMessage:
        dream_type = DREAM_TYPES[archetype]

        try:
            api_key = get_openai_api_key()
        except RuntimeError as e:
            logger.warning(f"[MESSAGE] API key error: {e}")
            return PersonalizedMessage(fallback_message(user_name, dream_type), "fallback_NO_API_KEY")

        prompt = build_prompt(user_name, dream_type, day_stem, fortune, text_answers, scores)
        try:
            text = await self._call_llm(api_key, prompt)
        except LLMCallError as e:
            logger.error(f"[MESSAGE] Failed | {e}")
            return PersonalizedMessage(fallback_message(user_name, dream_type), "fallback_LLM_ERROR")

        logger.info(f"[MESSAGE] Success | type={archetype.value} | chars={len(text)}")
        return PersonalizedMessage(text, get_settings().openai_model)


message_generator = MessageGenerator()
