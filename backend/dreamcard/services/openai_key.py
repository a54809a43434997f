"""
OpenAI API Key 관리
- 복붙 실수 방지: 따옴표/공백/숨은 문자 제거
- 로그에는 fingerprint + tail만
"""
import hashlib
import logging
import os
import re

from dreamcard.config import get_settings

logger = logging.getLogger(__name__)

# zero-width, BOM, NBSP
_INVISIBLES = ["\u200b", "\ufeff", "\xa0"]


def get_openai_api_key() -> str:
    """
    환경변수(우선) 또는 설정에서 키를 읽고 정규화.
    비어 있으면 RuntimeError
    """
    k = os.getenv("OPENAI_API_KEY") or get_settings().openai_api_key or ""

    k = k.strip().strip('"').strip("'")
    for ch in _INVISIBLES:
        k = k.replace(ch, "")
    k = re.sub(r"\s+", "", k)

    if k.lower().startswith("bearer"):
        k = k[6:]

    if not k:
        raise RuntimeError("OPENAI_API_KEY is empty")

    if not k.startswith("sk-"):
        logger.warning(
            "OPENAI_API_KEY doesn't start with 'sk-'. fp=%s tail=%s",
            key_fingerprint(k), key_tail(k)
        )

    return k


def key_fingerprint(k: str) -> str:
    """키 노출 없이 동일성 확인용 (12자)"""
    if not k:
        return "(empty)"
    return hashlib.sha256(k.encode("utf-8")).hexdigest()[:12]


def key_tail(k: str, n: int = 6) -> str:
    return k[-n:] if k else "(empty)"
