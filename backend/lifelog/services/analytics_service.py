"""アクティビティ分析サービス。

ユーザーのアクティビティに対する集計クエリを実行し、
ダッシュボード・プロフィール画面向けの分析データを組み立てる。
8種類の集計はそれぞれ独立した読み取り専用クエリであり、
同一スナップショットであることは保証しない。
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date, timedelta
from typing import Any

from sqlalchemy import Integer, cast, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from lifelog.config import Settings
from lifelog.core.dates import WEEKDAY_NAMES, local_today, short_label
from lifelog.models import Activity
from lifelog.schemas.analytics import (
    AnalyticsResponse,
    CategoryCount,
    MoodCount,
    PeakHour,
    ProductiveDay,
    TrendPoint,
    UserStats,
    WeeklyMoodPoint,
    WeeklySummary,
)

# ---------------------------------------------------------------------------
# カテゴリ表示名マッピング
# ---------------------------------------------------------------------------
CATEGORY_LABELS: dict[str, str] = {
    "belajar": "Study",
    "kerja": "Work",
    "olahraga": "Exercise",
    "santai": "Relax",
    "lainnya": "Other",
}

WEEK_DAYS = 7
TREND_DAYS = 30
PEAK_HOUR_LIMIT = 3


# ---------------------------------------------------------------------------
# 整形ヘルパー
# ---------------------------------------------------------------------------


def build_weekly_mood(rows: Iterable[Any]) -> list[WeeklyMoodPoint]:
    """曜日別の集計結果を日曜〜土曜の7要素に整形する。

    データのない曜日は0埋めする。

    Args:
        rows: ``dow`` (0=日曜), ``avg_energy``, ``cnt`` を持つ行。

    Returns:
        常に7要素の週間気分データ。
    """
    by_dow: dict[int, tuple[float, int]] = {}
    for row in rows:
        avg = round(float(row.avg_energy), 2) if row.avg_energy is not None else 0.0
        by_dow[int(row.dow)] = (avg, int(row.cnt))

    data: list[WeeklyMoodPoint] = []
    for dow, name in enumerate(WEEKDAY_NAMES):
        avg_energy, count = by_dow.get(dow, (0.0, 0))
        data.append(
            WeeklyMoodPoint(day=name[:3], avg_energy=avg_energy, count=count),
        )
    return data


def label_categories(rows: Iterable[Any]) -> list[CategoryCount]:
    """カテゴリコードを表示名に変換する。未知のコードはそのまま返す。"""
    return [
        CategoryCount(
            category=CATEGORY_LABELS.get(row.category, row.category),
            count=int(row.cnt),
        )
        for row in rows
    ]


def build_monthly_trend(
    rows: Iterable[Any],
    today: date,
    days: int = TREND_DAYS,
) -> list[TrendPoint]:
    """日別件数を古い順の連続した ``days`` 日分に整形する。

    Args:
        rows: ``activity_date``, ``cnt`` を持つ行。
        today: 期間の最終日。
        days: 期間の日数。

    Returns:
        0埋め済みの日別推移。
    """
    count_map: dict[date, int] = {row.activity_date: int(row.cnt) for row in rows}

    data: list[TrendPoint] = []
    for offset in range(days - 1, -1, -1):
        d = today - timedelta(days=offset)
        data.append(TrendPoint(date=short_label(d), count=count_map.get(d, 0)))
    return data


def calculate_streak(dates: Iterable[date], today: date) -> int:
    """連続記録日数を計算する。

    今日から過去に遡り、記録が存在する日付の連続性をチェックする。
    今日に記録がなければ昨日を起点とする。

    Args:
        dates: 記録が存在する日付。
        today: 基準日。

    Returns:
        連続記録日数。
    """
    tracked = set(dates)
    if not tracked:
        return 0

    check_date = today
    if check_date not in tracked:
        check_date = today - timedelta(days=1)
        if check_date not in tracked:
            return 0

    streak = 0
    while check_date in tracked:
        streak += 1
        check_date -= timedelta(days=1)

    return streak


def build_user_stats(rows: Sequence[Any], today: date) -> UserStats:
    """日別件数からプロフィール用統計を算出する。

    Args:
        rows: ``activity_date``, ``cnt`` を持つ行（日付ごとに1行）。
        today: 連続日数の基準日。

    Returns:
        ユーザー統計。
    """
    days_tracked = len(rows)
    total = sum(int(row.cnt) for row in rows)
    return UserStats(
        days_tracked=days_tracked,
        total_activities=total,
        avg_daily_activities=round(total / max(days_tracked, 1), 2),
        streak_days=calculate_streak((row.activity_date for row in rows), today),
    )


# ---------------------------------------------------------------------------
# サービス
# ---------------------------------------------------------------------------


class AnalyticsService:
    """分析用集計クエリを実行するサービスクラス。"""

    def __init__(
        self,
        session: AsyncSession,
        settings: Settings,
        today: date | None = None,
    ) -> None:
        self.session = session
        self.settings = settings
        self.today = today or local_today(settings.TIMEZONE)

    async def get_analytics(self, user_id: int) -> AnalyticsResponse:
        """全分析データを取得する。

        Args:
            user_id: 対象ユーザーID。

        Returns:
            分析レスポンス。
        """
        return AnalyticsResponse(
            weekly_mood=await self.get_weekly_mood(user_id),
            category_distribution=await self.get_category_distribution(user_id),
            monthly_trend=await self.get_monthly_trend(user_id),
            mood_distribution=await self.get_mood_distribution(user_id),
            peak_hours=await self.get_peak_hours(user_id),
            productive_day=await self.get_productive_day(user_id),
            weekly_summary=await self.get_weekly_summary(user_id),
            user_stats=await self.get_user_stats(user_id),
        )

    @property
    def _week_start(self) -> date:
        return self.today - timedelta(days=WEEK_DAYS - 1)

    def _day_of_week(self) -> Any:
        # PostgreSQL の dow は日曜=0
        return cast(func.extract("dow", Activity.activity_date), Integer).label("dow")

    # ------------------------------------------------------------------
    # 週間気分
    # ------------------------------------------------------------------

    async def get_weekly_mood(self, user_id: int) -> list[WeeklyMoodPoint]:
        """直近7日間の曜日別平均エネルギーと件数を取得する。"""
        dow = self._day_of_week()
        stmt = (
            select(
                dow,
                func.avg(Activity.energy).label("avg_energy"),
                func.count().label("cnt"),
            )
            .where(
                Activity.user_id == user_id,
                Activity.activity_date >= self._week_start,
                Activity.activity_date <= self.today,
            )
            .group_by(dow)
        )
        result = await self.session.execute(stmt)
        return build_weekly_mood(result.all())

    # ------------------------------------------------------------------
    # カテゴリ分布
    # ------------------------------------------------------------------

    async def get_category_distribution(self, user_id: int) -> list[CategoryCount]:
        """全期間のカテゴリ別件数を取得する。"""
        stmt = (
            select(Activity.category, func.count().label("cnt"))
            .where(Activity.user_id == user_id)
            .group_by(Activity.category)
            .order_by(func.count().desc(), Activity.category)
        )
        result = await self.session.execute(stmt)
        return label_categories(result.all())

    # ------------------------------------------------------------------
    # 30日推移
    # ------------------------------------------------------------------

    async def get_monthly_trend(self, user_id: int) -> list[TrendPoint]:
        """直近30日間の日別件数を取得する。"""
        start = self.today - timedelta(days=TREND_DAYS - 1)
        stmt = (
            select(Activity.activity_date, func.count().label("cnt"))
            .where(
                Activity.user_id == user_id,
                Activity.activity_date >= start,
                Activity.activity_date <= self.today,
            )
            .group_by(Activity.activity_date)
        )
        result = await self.session.execute(stmt)
        return build_monthly_trend(result.all(), self.today)

    # ------------------------------------------------------------------
    # 気分分布
    # ------------------------------------------------------------------

    async def get_mood_distribution(self, user_id: int) -> list[MoodCount]:
        """全期間の気分別件数を取得する。"""
        stmt = (
            select(Activity.mood, func.count().label("cnt"))
            .where(Activity.user_id == user_id)
            .group_by(Activity.mood)
        )
        result = await self.session.execute(stmt)
        return [MoodCount(mood=row.mood, count=int(row.cnt)) for row in result.all()]

    # ------------------------------------------------------------------
    # ピーク時間帯
    # ------------------------------------------------------------------

    async def get_peak_hours(self, user_id: int) -> list[PeakHour]:
        """作成時刻の時間帯別件数の上位3件を取得する。

        時刻は設定タイムゾーンに変換してから時間帯を取り出す。
        """
        local_created = func.timezone(self.settings.TIMEZONE, Activity.created_at)
        hour = cast(func.extract("hour", local_created), Integer).label("hour")
        stmt = (
            select(hour, func.count().label("cnt"))
            .where(Activity.user_id == user_id)
            .group_by(hour)
            .order_by(func.count().desc(), hour)
            .limit(PEAK_HOUR_LIMIT)
        )
        result = await self.session.execute(stmt)
        return [PeakHour(hour=int(row.hour), count=int(row.cnt)) for row in result.all()]

    # ------------------------------------------------------------------
    # 最も活動的な曜日
    # ------------------------------------------------------------------

    async def get_productive_day(self, user_id: int) -> ProductiveDay | None:
        """全期間で最も件数の多い曜日を取得する。データがなければNone。"""
        dow = self._day_of_week()
        stmt = (
            select(dow, func.count().label("cnt"))
            .where(Activity.user_id == user_id)
            .group_by(dow)
            .order_by(func.count().desc(), dow)
            .limit(1)
        )
        result = await self.session.execute(stmt)
        row = result.first()
        if row is None:
            return None
        return ProductiveDay(day=WEEKDAY_NAMES[int(row.dow)], count=int(row.cnt))

    # ------------------------------------------------------------------
    # 週間サマリー
    # ------------------------------------------------------------------

    async def get_weekly_summary(self, user_id: int) -> WeeklySummary:
        """直近7日間の件数、平均エネルギー、期間を取得する。"""
        stmt = select(
            func.count().label("total"),
            func.avg(Activity.energy).label("avg_energy"),
            func.min(Activity.activity_date).label("start_date"),
            func.max(Activity.activity_date).label("end_date"),
        ).where(
            Activity.user_id == user_id,
            Activity.activity_date >= self._week_start,
            Activity.activity_date <= self.today,
        )
        result = await self.session.execute(stmt)
        row = result.one()
        return WeeklySummary(
            total_activities=int(row.total or 0),
            avg_energy=round(float(row.avg_energy), 2) if row.avg_energy is not None else 0.0,
            start_date=row.start_date,
            end_date=row.end_date,
        )

    # ------------------------------------------------------------------
    # ユーザー統計
    # ------------------------------------------------------------------

    async def get_user_stats(self, user_id: int) -> UserStats:
        """記録日数、総件数、1日平均件数、連続記録日数を取得する。"""
        stmt = (
            select(Activity.activity_date, func.count().label("cnt"))
            .where(Activity.user_id == user_id)
            .group_by(Activity.activity_date)
            .order_by(Activity.activity_date.desc())
        )
        result = await self.session.execute(stmt)
        return build_user_stats(result.all(), self.today)
