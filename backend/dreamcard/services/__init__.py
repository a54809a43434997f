# services package - lazy imports (캐시 초기화는 실제 사용 시점)

_cache_service = None

def get_cache_service():
    global _cache_service
    if _cache_service is None:
        from dreamcard.services.cache import cache_service as _cache
        _cache_service = _cache
    return _cache_service
