"""
개인화 메시지 생성 테스트 (LLM 호출은 모킹)
"""
import asyncio
import httpx
import pytest
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch
from openai import APIConnectionError, AuthenticationError

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dreamcard.config import get_settings
from dreamcard.services import message_generator as mg
from dreamcard.services.archetypes import DREAM_TYPES, Archetype, zero_scores
from dreamcard.services.day_stem import calc_day_stem
from dreamcard.services.fortune_engine import FortuneDiagnosisEngine
from dreamcard.services.message_generator import (
    LLMCallError,
    MessageGenerator,
    build_prompt,
    fallback_message,
)


def _no_key():
    raise RuntimeError("OPENAI_API_KEY is empty")


@pytest.fixture
def context():
    scores = zero_scores()
    scores[Archetype.PHOENIX] = 5
    scores[Archetype.WOLF] = 2
    return dict(
        user_name="さくら",
        day_stem=calc_day_stem(2000, 1, 1).to_schema(),
        fortune=FortuneDiagnosisEngine.diagnose(2000, 1, 1),
        text_answers=[("あなたの叶えたい夢は何ですか？", "世界中を旅したい")],
        scores=scores,
    )


class TestBuildPrompt:
    def test_contains_all_sections(self, context):
        prompt = build_prompt(dream_type=DREAM_TYPES[Archetype.PHOENIX], **context)
        assert "さくら" in prompt
        assert "鳳凰タイプ" in prompt
        assert "日干: 戊" in prompt
        assert "己卯" in prompt and "丙子" in prompt and "戊午" in prompt
        assert "一白水星" in prompt
        assert "ライフパスナンバー: 4" in prompt
        assert "世界中を旅したい" in prompt
        assert "火(2)、土(2)" in prompt

    def test_without_fortune(self, context):
        context.update(day_stem=None, fortune=None, text_answers=[])
        prompt = build_prompt(dream_type=DREAM_TYPES[Archetype.WOLF], **context)
        assert "統合占術データ" not in prompt
        assert "日干" not in prompt
        assert "記述式の回答はありませんでした" in prompt

    def test_pure(self, context):
        dt = DREAM_TYPES[Archetype.DEER]
        assert build_prompt(dream_type=dt, **context) == build_prompt(dream_type=dt, **context)


class TestGenerate:
    def test_no_api_key_fallback(self, context):
        with patch.object(mg, "get_openai_api_key", _no_key):
            msg = asyncio.run(MessageGenerator().generate(archetype=Archetype.PHOENIX, **context))
        assert msg.source == "fallback_NO_API_KEY"
        assert msg.is_fallback
        assert msg.text == fallback_message("さくら", DREAM_TYPES[Archetype.PHOENIX])

    def test_llm_error_fallback(self, context):
        with patch.object(mg, "get_openai_api_key", return_value="sk-test"), \
                patch.object(MessageGenerator, "_call_llm", AsyncMock(side_effect=LLMCallError("boom"))):
            msg = asyncio.run(MessageGenerator().generate(archetype=Archetype.TURTLE, **context))
        assert msg.source == "fallback_LLM_ERROR"
        assert DREAM_TYPES[Archetype.TURTLE].name in msg.text

    def test_success(self, context):
        with patch.object(mg, "get_openai_api_key", return_value="sk-test"), \
                patch.object(MessageGenerator, "_call_llm", AsyncMock(return_value="素敵な未来を。")):
            msg = asyncio.run(MessageGenerator().generate(archetype=Archetype.DRAGON, **context))
        assert msg.text == "素敵な未来を。"
        assert msg.source == get_settings().openai_model
        assert not msg.is_fallback


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 재시도 루프 (클라이언트 모킹)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
_REQUEST = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")


def completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class FakeClient:
    """chat.completions.create 응답을 순서대로 반환 (예외면 raise, 마지막 값 반복)"""

    def __init__(self, *results):
        self.results = list(results)
        self.calls = 0
        self.closed = False
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    async def _create(self, **kwargs):
        self.calls += 1
        result = self.results[min(self.calls, len(self.results)) - 1]
        if isinstance(result, Exception):
            raise result
        return result

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        self.closed = True


@pytest.fixture
def sleeps(monkeypatch):
    """재시도 3회, 대기 없음, 지터 고정"""
    monkeypatch.setattr(get_settings(), "llm_max_retries", 3)
    monkeypatch.setattr(get_settings(), "llm_retry_base_delay", 1.0)
    monkeypatch.setattr(get_settings(), "llm_retry_max_delay", 8.0)
    monkeypatch.setattr(mg, "get_openai_api_key", lambda: "sk-test")
    monkeypatch.setattr(mg, "random", SimpleNamespace(uniform=lambda a, b: 1.0))
    sleep = AsyncMock()
    monkeypatch.setattr(mg, "asyncio", SimpleNamespace(sleep=sleep))
    return sleep


def run_with(client, context, archetype=Archetype.PHOENIX):
    with patch.object(MessageGenerator, "_get_client", return_value=client):
        return asyncio.run(MessageGenerator().generate(archetype=archetype, **context))


class TestRetryLoop:
    def test_backoff_exponential_capped(self, sleeps):
        gen = MessageGenerator()
        assert [gen._backoff(i) for i in range(5)] == [1.0, 2.0, 4.0, 8.0, 8.0]

    def test_connection_error_retries_then_fallback(self, sleeps, context):
        client = FakeClient(APIConnectionError(request=_REQUEST))
        msg = run_with(client, context)
        assert client.calls == 3
        assert msg.source == "fallback_LLM_ERROR"
        # 마지막 시도 후에는 대기하지 않음
        assert [c.args[0] for c in sleeps.await_args_list] == [1.0, 2.0]
        assert client.closed

    def test_auth_error_stops_immediately(self, sleeps, context):
        error = AuthenticationError(
            "invalid api key",
            response=httpx.Response(401, request=_REQUEST),
            body=None,
        )
        client = FakeClient(error)
        msg = run_with(client, context)
        assert client.calls == 1
        assert sleeps.await_count == 0
        assert msg.source == "fallback_LLM_ERROR"
        assert client.closed

    def test_empty_completion_retried(self, sleeps, context):
        client = FakeClient(completion("   "), completion("夢を信じて。\n\n\n\n一歩ずつ。"))
        msg = run_with(client, context)
        assert client.calls == 2
        assert sleeps.await_count == 1
        assert msg.text == "夢を信じて。\n\n一歩ずつ。"
        assert not msg.is_fallback

    def test_empty_completion_exhausted(self, sleeps, context):
        client = FakeClient(completion(None))
        msg = run_with(client, context)
        assert client.calls == 3
        assert msg.source == "fallback_LLM_ERROR"

    def test_no_choices_falls_back(self, sleeps, context):
        client = FakeClient(SimpleNamespace(choices=[]))
        msg = run_with(client, context, Archetype.WOLF)
        assert client.calls == 3
        assert msg.is_fallback
        assert msg.text == fallback_message("さくら", DREAM_TYPES[Archetype.WOLF])

    def test_unexpected_error_falls_back(self, sleeps, context):
        client = FakeClient(ValueError("bad payload"))
        msg = run_with(client, context)
        assert client.calls == 3
        assert msg.source == "fallback_LLM_ERROR"

    def test_recovers_after_unexpected_error(self, sleeps, context):
        client = FakeClient(ValueError("bad payload"), completion("素敵な未来を。"))
        msg = run_with(client, context)
        assert client.calls == 2
        assert msg.text == "素敵な未来を。"

    def test_client_init_error_falls_back(self, sleeps, context):
        with patch.object(MessageGenerator, "_get_client", side_effect=TypeError("bad timeout")):
            msg = asyncio.run(MessageGenerator().generate(archetype=Archetype.PHOENIX, **context))
        assert msg.source == "fallback_LLM_ERROR"
