"""アクティビティ関連のPydanticスキーマ。

作成・更新リクエスト、アクティビティレスポンス、
当日ダッシュボードサマリー用のスキーマを定義する。
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# リクエスト
# ---------------------------------------------------------------------------


class ActivityCreateRequest(BaseModel):
    """アクティビティ作成リクエスト。"""

    title: str = Field(..., min_length=1, max_length=255, description="タイトル")
    category: str = Field(
        ...,
        min_length=1,
        max_length=50,
        description="カテゴリコード（belajar / kerja / olahraga / santai / lainnya）",
    )
    mood: str = Field(..., min_length=1, max_length=50, description="気分ラベル")
    energy: int = Field(..., ge=1, le=5, strict=True, description="エネルギー（1〜5）")
    note: str | None = Field(default=None, description="メモ（任意）")
    activity_date: date | None = Field(
        default=None,
        description="実施日（未指定時は今日）",
    )


class ActivityUpdateRequest(BaseModel):
    """アクティビティ更新リクエスト（全項目置換）。"""

    title: str = Field(..., min_length=1, max_length=255)
    category: str = Field(..., min_length=1, max_length=50)
    mood: str = Field(..., min_length=1, max_length=50)
    energy: int = Field(..., ge=1, le=5, strict=True)
    note: str | None = None
    activity_date: date


# ---------------------------------------------------------------------------
# レスポンス
# ---------------------------------------------------------------------------


class ActivityResponse(BaseModel):
    """アクティビティレスポンス。"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    title: str
    category: str
    mood: str
    energy: int
    note: str | None = None
    activity_date: date
    created_at: datetime | None = None
    updated_at: datetime | None = None


class DashboardSummaryResponse(BaseModel):
    """当日ダッシュボードサマリー。"""

    total_activities: int
    dominant_mood: str | None
    average_energy: float
    recent_activities: list[ActivityResponse]
