"""分析関連のPydanticスキーマ。

週間気分、カテゴリ分布、30日推移、気分分布、ピーク時間帯、
最も活動的な曜日、週間サマリー、ユーザー統計のスキーマを定義する。
"""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, Field


class WeeklyMoodPoint(BaseModel):
    """週間気分データの1曜日分。"""

    day: str = Field(..., description="曜日の3文字略称（Sun〜Sat）")
    avg_energy: float
    count: int


class CategoryCount(BaseModel):
    """カテゴリ別件数。"""

    category: str
    count: int


class TrendPoint(BaseModel):
    """30日推移の1日分。"""

    date: str = Field(..., description="表示用日付（例: Oct 5）")
    count: int


class MoodCount(BaseModel):
    """気分別件数。"""

    mood: str
    count: int


class PeakHour(BaseModel):
    """時間帯別件数。"""

    hour: int = Field(..., ge=0, le=23)
    count: int


class ProductiveDay(BaseModel):
    """最も活動件数の多い曜日。"""

    day: str
    count: int


class WeeklySummary(BaseModel):
    """直近7日間のサマリー。"""

    total_activities: int
    avg_energy: float
    start_date: dt.date | None = None
    end_date: dt.date | None = None


class UserStats(BaseModel):
    """プロフィール用の累計統計。"""

    days_tracked: int
    total_activities: int
    avg_daily_activities: float
    streak_days: int


class AnalyticsResponse(BaseModel):
    """分析エンドポイントのデータ部。"""

    weekly_mood: list[WeeklyMoodPoint]
    category_distribution: list[CategoryCount]
    monthly_trend: list[TrendPoint]
    mood_distribution: list[MoodCount]
    peak_hours: list[PeakHour]
    productive_day: ProductiveDay | None
    weekly_summary: WeeklySummary
    user_stats: UserStats
