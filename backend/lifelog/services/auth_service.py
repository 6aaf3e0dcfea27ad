"""認証サービスモジュール。

ユーザー登録、認証、トークン生成のビジネスロジックを提供する。
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from lifelog.config import Settings
from lifelog.core.exceptions import AuthenticationError, ConflictError, ValidationError
from lifelog.core.security import (
    MAX_PASSWORD_BYTES,
    create_access_token,
    hash_password,
    password_too_long,
    verify_password,
)
from lifelog.models import User
from lifelog.schemas.auth import AuthData, UserRegisterRequest, UserResponse

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


async def register_user(
    session: AsyncSession,
    request: UserRegisterRequest,
    settings: Settings,
) -> User:
    """新規ユーザーを登録する。

    Args:
        session: データベースセッション。
        request: ユーザー登録リクエスト。
        settings: アプリケーション設定（bcryptコスト）。

    Returns:
        作成されたUserオブジェクト。

    Raises:
        ValidationError: パスワードがbcryptの上限バイト数を超える場合。
        ConflictError: メールアドレスが既に登録済みの場合。
    """
    if password_too_long(request.password):
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")

    # 既存ユーザーチェック
    stmt = select(User.id).where(User.email == request.email)
    result = await session.execute(stmt)
    if result.scalar_one_or_none() is not None:
        raise ConflictError("Email is already registered")

    # ユーザー作成
    user = User(
        name=request.name,
        email=request.email,
        password_hash=hash_password(request.password, rounds=settings.BCRYPT_ROUNDS),
    )
    session.add(user)
    try:
        await session.commit()
    except IntegrityError:
        # 同時登録でユニーク制約に抵触した場合
        await session.rollback()
        raise ConflictError("Email is already registered")
    await session.refresh(user)

    logger.info("Registered user_id=%s", user.id)
    return user


async def authenticate_user(
    session: AsyncSession,
    email: str,
    password: str,
) -> User:
    """メールアドレスとパスワードで認証する。

    どちらが誤っているかは区別せず、同一のメッセージで失敗させる。

    Args:
        session: データベースセッション。
        email: メールアドレス。
        password: 平文パスワード。

    Returns:
        認証済みUserオブジェクト。

    Raises:
        AuthenticationError: ユーザーが存在しない、またはパスワードが不正の場合。
    """
    stmt = select(User).where(User.email == email)
    result = await session.execute(stmt)
    user = result.scalar_one_or_none()

    if user is None or not verify_password(password, user.password_hash):
        logger.warning("Failed login attempt for email=%s", email)
        raise AuthenticationError(INVALID_CREDENTIALS)

    return user


def build_auth_data(user: User, settings: Settings) -> AuthData:
    """ユーザーに対するアクセストークンを発行し、レスポンスデータを組み立てる。

    Args:
        user: 認証済みまたは新規作成されたユーザー。
        settings: アプリケーション設定。

    Returns:
        トークンと公開ユーザー情報。
    """
    token = create_access_token(user_id=user.id, email=user.email, settings=settings)
    return AuthData(token=token, user=UserResponse.model_validate(user))
