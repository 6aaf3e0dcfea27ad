"""FastAPIアプリケーションのエントリポイント。

アプリケーションのライフサイクル管理、ミドルウェア設定、
ルーティング、例外ハンドラ登録を行う。
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncGenerator

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lifelog.api.deps import get_current_user
from lifelog.api.routes.router import router as api_router
from lifelog.config import get_settings
from lifelog.core.exceptions import register_exception_handlers
from lifelog.database import engine
from lifelog.schemas.auth import CheckAuthResponse, CurrentUser

logger = logging.getLogger(__name__)

settings = get_settings()

API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """アプリケーションのライフサイクルを管理する。

    起動時にログ設定を行い、シャットダウン時にDBエンジンを破棄する。

    Args:
        app: FastAPIアプリケーションインスタンス。
    """
    # --- 起動処理 ---
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Application startup (environment=%s)", settings.ENVIRONMENT)

    yield

    # --- シャットダウン処理 ---
    logger.info("Application shutdown")

    await engine.dispose()
    logger.info("Database engine disposed")


app = FastAPI(
    title="LifeLog API",
    description="日々のアクティビティ・気分・エネルギーを記録し分析するAPI",
    version=API_VERSION,
    lifespan=lifespan,
)

# ---------------------------------------------------------------------------
# ミドルウェア
# ---------------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

# ---------------------------------------------------------------------------
# 例外ハンドラ
# ---------------------------------------------------------------------------
register_exception_handlers(app, debug=settings.is_development)

# ---------------------------------------------------------------------------
# ルーティング
# ---------------------------------------------------------------------------
app.include_router(api_router, prefix="/api")


@app.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """ヘルスチェックエンドポイント。"""
    return {
        "status": "healthy",
        "message": "LifeLog API is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.get("/api/check-auth", response_model=CheckAuthResponse, tags=["auth"])
async def check_auth(
    current_user: CurrentUser = Depends(get_current_user),
) -> CheckAuthResponse:
    """トークンが有効であれば復元したユーザーを返す。"""
    return CheckAuthResponse(user=current_user)


@app.get("/", tags=["health"])
async def index() -> dict[str, Any]:
    """APIの概要と主要エンドポイントを返す。"""
    return {
        "message": "Welcome to LifeLog API",
        "version": API_VERSION,
        "endpoints": {
            "auth": "/api/auth",
            "activities": "/api/activities",
            "analytics": "/api/activities/analytics",
            "health": "/health",
        },
    }


def run() -> None:
    """uvicornでAPIサーバーを起動する。"""
    uvicorn.run("lifelog.main:app", host=settings.HOST, port=settings.PORT)
