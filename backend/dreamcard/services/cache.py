"""
캐시 서비스
- 占術 결과는 생년월일(+시)의 순수 함수 → 동일 입력 캐싱
- 메모리 기반 TTL
"""
from typing import Callable, Optional
from cachetools import TTLCache
import hashlib
import json

from dreamcard.config import get_settings
from dreamcard.models.schemas import FortuneDiagnosisResult


class CacheService:
    """
    캐시 전략:
    1. 占術 결과: TTL (기본 24시간), 값은 날짜별 고정
    2. 개인화 메시지: 캐시 안 함 (LLM 응답은 매번 다름)
    """

    def __init__(self):
        settings = get_settings()
        self.fortune_cache = TTLCache(
            maxsize=settings.cache_max_size,
            ttl=settings.cache_ttl_seconds
        )
        self._hits = 0
        self._misses = 0

    def _make_key(self, *args) -> str:
        key_str = json.dumps(args, sort_keys=True)
        return hashlib.md5(key_str.encode()).hexdigest()

    def get_fortune(self, year: int, month: int, day: int, hour: Optional[int] = None) -> Optional[FortuneDiagnosisResult]:
        key = self._make_key("fortune", year, month, day, hour)
        result = self.fortune_cache.get(key)

        if result is not None:
            self._hits += 1
        else:
            self._misses += 1

        return result

    def set_fortune(self, year: int, month: int, day: int, hour: Optional[int], data: FortuneDiagnosisResult):
        key = self._make_key("fortune", year, month, day, hour)
        self.fortune_cache[key] = data

    def get_or_compute_fortune(
        self,
        year: int,
        month: int,
        day: int,
        hour: Optional[int],
        compute: Callable[[int, int, int, Optional[int]], FortuneDiagnosisResult],
    ) -> FortuneDiagnosisResult:
        cached = self.get_fortune(year, month, day, hour)
        if cached is not None:
            return cached
        result = compute(year, month, day, hour)
        self.set_fortune(year, month, day, hour, result)
        return result

    def get_stats(self) -> dict:
        total = self._hits + self._misses
        hit_rate = (self._hits / total * 100) if total > 0 else 0

        return {
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": f"{hit_rate:.1f}%",
            "fortune_cache_size": len(self.fortune_cache),
        }

    def clear(self):
        self.fortune_cache.clear()
        self._hits = 0
        self._misses = 0


# 싱글톤 인스턴스
cache_service = CacheService()
