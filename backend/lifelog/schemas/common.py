"""共通Pydanticスキーマ。

全エンドポイントで再利用するレスポンスエンベロープを定義する。
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

DataT = TypeVar("DataT")


class ApiResponse(BaseModel, Generic[DataT]):
    """成功レスポンスのエンベロープ。"""

    success: bool = True
    message: str | None = Field(default=None, description="結果メッセージ")
    data: DataT


class MessageResponse(BaseModel):
    """データを伴わない成功レスポンス。"""

    success: bool = True
    message: str
