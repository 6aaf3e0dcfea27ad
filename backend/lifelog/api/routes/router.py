"""API ルーター集約モジュール。

各ドメインのルーターを統合し、プレフィックスとタグを設定する。
"""

from __future__ import annotations

from fastapi import APIRouter

from lifelog.api.routes.activities import router as activities_router
from lifelog.api.routes.auth import router as auth_router

router = APIRouter()

router.include_router(
    auth_router,
    prefix="/auth",
    tags=["auth"],
)

router.include_router(
    activities_router,
    prefix="/activities",
    tags=["activities"],
)
