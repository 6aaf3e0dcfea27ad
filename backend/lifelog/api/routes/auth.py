"""認証エンドポイント。

ユーザー登録、ログイン、プロフィール取得のAPIを提供する。
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from lifelog.api.deps import get_current_user, get_session
from lifelog.config import Settings, get_settings
from lifelog.schemas.auth import (
    AuthData,
    CurrentUser,
    UserLoginRequest,
    UserRegisterRequest,
)
from lifelog.schemas.common import ApiResponse
from lifelog.services.auth_service import (
    authenticate_user,
    build_auth_data,
    register_user,
)

router = APIRouter()


@router.post(
    "/register",
    response_model=ApiResponse[AuthData],
    status_code=201,
    summary="ユーザー登録",
)
async def register(
    request: UserRegisterRequest,
    session: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[AuthData]:
    """新規ユーザーを登録し、アクセストークンを発行する。

    Args:
        request: ユーザー登録リクエスト。
        session: データベースセッション。
        settings: アプリケーション設定。

    Returns:
        トークンとユーザー情報を含むレスポンス。
    """
    user = await register_user(session=session, request=request, settings=settings)
    return ApiResponse(
        message="Registration successful",
        data=build_auth_data(user, settings),
    )


@router.post(
    "/login",
    response_model=ApiResponse[AuthData],
    summary="ログイン",
)
async def login(
    request: UserLoginRequest,
    session: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[AuthData]:
    """メールアドレスとパスワードでログインし、アクセストークンを発行する。

    Args:
        request: ログインリクエスト。
        session: データベースセッション。
        settings: アプリケーション設定。

    Returns:
        トークンとユーザー情報を含むレスポンス。
    """
    user = await authenticate_user(
        session=session,
        email=request.email,
        password=request.password,
    )
    return ApiResponse(
        message="Login successful",
        data=build_auth_data(user, settings),
    )


@router.get(
    "/profile",
    response_model=ApiResponse[CurrentUser],
    summary="プロフィール取得",
)
async def profile(
    current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[CurrentUser]:
    """トークンから復元した現在のユーザーをそのまま返す。"""
    return ApiResponse(data=current_user)
