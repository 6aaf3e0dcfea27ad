"""認証関連のPydanticスキーマ。

ユーザー登録、ログイン、トークンレスポンスに使用するスキーマを定義する。
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from lifelog.core.security import MAX_PASSWORD_BYTES, password_too_long


class UserRegisterRequest(BaseModel):
    """ユーザー登録リクエスト。"""

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="表示名",
    )
    email: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="メールアドレス",
    )
    password: str = Field(
        ...,
        min_length=1,
        max_length=72,
        description="パスワード",
    )

    @field_validator("password")
    @classmethod
    def check_password_bytes(cls, v: str) -> str:
        """bcryptが扱える72バイト以内であることを検証する。"""
        if password_too_long(v):
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


class UserLoginRequest(BaseModel):
    """ログインリクエスト。"""

    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=72)

    @field_validator("password")
    @classmethod
    def check_password_bytes(cls, v: str) -> str:
        """bcryptが扱える72バイト以内であることを検証する。"""
        if password_too_long(v):
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


class UserResponse(BaseModel):
    """ユーザー情報レスポンス（パスワードは含まない）。"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    created_at: datetime | None = None


class AuthData(BaseModel):
    """登録・ログイン成功時のデータ部。"""

    token: str
    user: UserResponse


class CurrentUser(BaseModel):
    """アクセストークンから復元した認証済みユーザー。"""

    id: int
    email: str


class CheckAuthResponse(BaseModel):
    """``/api/check-auth`` のレスポンス。"""

    success: bool = True
    user: CurrentUser
