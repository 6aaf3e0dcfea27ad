"""アクティビティCRUDサービス。

ユーザー単位の所有権を強制したうえで、アクティビティの
一覧・取得・作成・更新・削除と当日ダッシュボードサマリーを提供する。
"""

from __future__ import annotations

import logging
from datetime import date

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from lifelog.config import Settings
from lifelog.core.dates import local_today
from lifelog.core.exceptions import NotFoundError
from lifelog.models import Activity
from lifelog.schemas.activity import (
    ActivityCreateRequest,
    ActivityResponse,
    ActivityUpdateRequest,
    DashboardSummaryResponse,
)

logger = logging.getLogger(__name__)

RECENT_ACTIVITY_LIMIT = 5


class ActivityService:
    """アクティビティ操作を実行するサービスクラス。"""

    def __init__(self, session: AsyncSession, settings: Settings) -> None:
        self.session = session
        self.settings = settings

    def _today(self) -> date:
        return local_today(self.settings.TIMEZONE)

    # ------------------------------------------------------------------
    # 一覧・取得
    # ------------------------------------------------------------------

    async def list_activities(self, user_id: int) -> list[Activity]:
        """ユーザーの全アクティビティを作成日時の降順で取得する。

        Args:
            user_id: 対象ユーザーID。

        Returns:
            アクティビティのリスト。
        """
        stmt = (
            select(Activity)
            .where(Activity.user_id == user_id)
            .order_by(Activity.created_at.desc(), Activity.id.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_activity(self, activity_id: int, user_id: int) -> Activity:
        """ユーザーが所有するアクティビティを1件取得する。

        Args:
            activity_id: アクティビティID。
            user_id: 対象ユーザーID。

        Returns:
            アクティビティ。

        Raises:
            NotFoundError: 存在しない、または他ユーザーの所有である場合。
        """
        stmt = select(Activity).where(
            Activity.id == activity_id,
            Activity.user_id == user_id,
        )
        result = await self.session.execute(stmt)
        activity = result.scalar_one_or_none()

        if activity is None:
            raise NotFoundError("Activity not found")

        return activity

    # ------------------------------------------------------------------
    # 作成・更新・削除
    # ------------------------------------------------------------------

    async def create_activity(
        self,
        user_id: int,
        request: ActivityCreateRequest,
    ) -> Activity:
        """アクティビティを作成する。

        ``activity_date`` 未指定時は今日、``note`` 未指定時はNULLとする。

        Args:
            user_id: 所有ユーザーID。
            request: 作成リクエスト。

        Returns:
            採番済みIDを含む作成後のアクティビティ。
        """
        activity = Activity(
            user_id=user_id,
            title=request.title,
            category=request.category,
            mood=request.mood,
            energy=request.energy,
            note=request.note or None,
            activity_date=request.activity_date or self._today(),
        )
        self.session.add(activity)
        await self.session.commit()
        await self.session.refresh(activity)

        logger.info("Created activity id=%s for user_id=%d", activity.id, user_id)
        return activity

    async def update_activity(
        self,
        activity_id: int,
        user_id: int,
        request: ActivityUpdateRequest,
    ) -> Activity:
        """アクティビティの可変項目をすべて置き換える。

        Args:
            activity_id: アクティビティID。
            user_id: 所有ユーザーID。
            request: 更新リクエスト。

        Returns:
            更新後のアクティビティ。

        Raises:
            NotFoundError: 対象が存在しない、または他ユーザーの所有である場合。
        """
        activity = await self.get_activity(activity_id, user_id)

        activity.title = request.title
        activity.category = request.category
        activity.mood = request.mood
        activity.energy = request.energy
        activity.note = request.note or None
        activity.activity_date = request.activity_date
        # 値が変わらない場合もUPDATEを発行させる
        activity.updated_at = func.now()

        await self.session.commit()
        await self.session.refresh(activity)

        logger.info("Updated activity id=%d for user_id=%d", activity_id, user_id)
        return activity

    async def delete_activity(self, activity_id: int, user_id: int) -> None:
        """アクティビティを削除する。

        Args:
            activity_id: アクティビティID。
            user_id: 所有ユーザーID。

        Raises:
            NotFoundError: 削除対象が存在しない場合。
        """
        stmt = delete(Activity).where(
            Activity.id == activity_id,
            Activity.user_id == user_id,
        )
        result = await self.session.execute(stmt)

        if result.rowcount == 0:
            raise NotFoundError("Activity not found")

        await self.session.commit()
        logger.info("Deleted activity id=%d for user_id=%d", activity_id, user_id)

    # ------------------------------------------------------------------
    # 当日ダッシュボードサマリー
    # ------------------------------------------------------------------

    async def get_dashboard_summary(self, user_id: int) -> DashboardSummaryResponse:
        """今日のアクティビティを集計する。

        - total_activities: 今日の件数
        - dominant_mood: 今日最も多い気分（同数はアルファベット順）
        - average_energy: 今日の平均エネルギー（0件時は0）
        - recent_activities: 今日の最新5件

        Args:
            user_id: 対象ユーザーID。

        Returns:
            ダッシュボードサマリー。
        """
        today = self._today()
        scope = (Activity.user_id == user_id, Activity.activity_date == today)

        # --- total_activities ---
        total_stmt = select(func.count()).select_from(Activity).where(*scope)
        total_result = await self.session.execute(total_stmt)
        total = total_result.scalar_one() or 0

        # --- dominant_mood ---
        mood_stmt = (
            select(Activity.mood)
            .where(*scope)
            .group_by(Activity.mood)
            .order_by(func.count().desc(), Activity.mood)
            .limit(1)
        )
        mood_result = await self.session.execute(mood_stmt)
        dominant_mood = mood_result.scalar_one_or_none()

        # --- average_energy ---
        energy_stmt = select(func.avg(Activity.energy)).where(*scope)
        energy_result = await self.session.execute(energy_stmt)
        average_energy = energy_result.scalar_one()

        # --- recent_activities ---
        recent_stmt = (
            select(Activity)
            .where(*scope)
            .order_by(Activity.created_at.desc(), Activity.id.desc())
            .limit(RECENT_ACTIVITY_LIMIT)
        )
        recent_result = await self.session.execute(recent_stmt)
        recent = recent_result.scalars().all()

        return DashboardSummaryResponse(
            total_activities=int(total),
            dominant_mood=dominant_mood,
            average_energy=round(float(average_energy), 2) if average_energy is not None else 0,
            recent_activities=[ActivityResponse.model_validate(a) for a in recent],
        )
