"""
Dream Card 夢タイプ診断 - Main App
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
- 설문 + 占術 (四柱推命・九星気学・数秘術) 통합 판정
- 개인화 메시지 (OpenAI, fallback 내장)
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
"""
import os
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dreamcard import __version__
from dreamcard.config import get_settings
from dreamcard.routers import diagnose
from dreamcard.services import get_cache_service
from dreamcard.services.archetypes import DREAM_TYPES
from dreamcard.services.questions import QUESTIONS

settings = get_settings()

logging.basicConfig(level=logging.DEBUG if settings.debug else logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(title="Dream Card Diagnosis", version=__version__, debug=settings.debug)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(diagnose.router, prefix="/api/v1", tags=["Diagnose"])


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/")
async def root():
    return {"service": "Dream Card Diagnosis", "status": "running", "version": __version__}


@app.on_event("startup")
async def startup():
    logger.info(f"━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━")
    logger.info(f"🚀 Dream Card 진단 서버 시작 (v{__version__})")
    logger.info(f"   夢タイプ: {len(DREAM_TYPES)}종 | 설문: {len(QUESTIONS)}문항")
    logger.info(f"   Model: {settings.openai_model} | Cache TTL: {settings.cache_ttl_seconds}s")
    logger.info(f"━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━")


@app.get("/ready")
async def ready():
    """
    서버 준비 상태 확인

    Returns:
        - catalogs: 夢タイプ/설문 카탈로그 로드 여부
        - openai: OpenAI API 키 설정 여부 (없으면 fallback 메시지)
    """
    checks = {
        "dream_types": len(DREAM_TYPES),
        "questions": len(QUESTIONS),
        "debug": settings.debug,
        "openai": bool(os.getenv("OPENAI_API_KEY") or settings.openai_api_key),
        "cache": get_cache_service().get_stats(),
    }
    return {"status": "ready" if checks["openai"] else "partial", "checks": checks}


@app.exception_handler(Exception)
async def error_handler(request: Request, exc: Exception):
    logger.error(f"Error: {exc}")
    return JSONResponse(status_code=500, content={"error": str(exc)[:100]})


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=int(os.getenv("PORT", settings.port)))
