"""FastAPI依存性注入モジュール。

Bearerトークンの検証と現在のユーザー取得を提供する。
トークンは署名と有効期限のみで検証し、サーバー側のセッションは持たない。
データベースセッションは ``lifelog.database.get_session`` を再利用する。
"""

from __future__ import annotations

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError

from lifelog.config import Settings, get_settings
from lifelog.core.exceptions import AuthenticationError
from lifelog.core.security import verify_token
from lifelog.database import get_session  # noqa: F401 – re-export for convenience
from lifelog.schemas.auth import CurrentUser

# ---------------------------------------------------------------------------
# OAuth2 スキーム
# ---------------------------------------------------------------------------
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


# ---------------------------------------------------------------------------
# 現在のユーザー取得
# ---------------------------------------------------------------------------

async def get_current_user(
    token: str | None = Depends(oauth2_scheme),
    settings: Settings = Depends(get_settings),
) -> CurrentUser:
    """アクセストークンから現在のユーザーを復元する。

    Args:
        token: ``Authorization: Bearer`` ヘッダーのトークン。
        settings: アプリケーション設定。

    Returns:
        トークンに含まれる ``{id, email}``。

    Raises:
        AuthenticationError: トークンが未指定、無効、または期限切れの場合。
    """
    if not token:
        raise AuthenticationError("Access token required")

    try:
        payload = verify_token(token, settings)
    except JWTError:
        raise AuthenticationError("Invalid or expired access token")

    user_id = payload.get("sub")
    email = payload.get("email")
    if user_id is None or email is None:
        raise AuthenticationError("Invalid token payload")

    try:
        return CurrentUser(id=int(user_id), email=email)
    except ValueError:
        raise AuthenticationError("Invalid token payload")
