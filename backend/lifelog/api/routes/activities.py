"""アクティビティエンドポイント。

アクティビティのCRUD、当日ダッシュボードサマリー、分析データのAPIを提供する。
すべてのエンドポイントで認証が必要。
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from lifelog.api.deps import get_current_user, get_session
from lifelog.config import Settings, get_settings
from lifelog.schemas.activity import (
    ActivityCreateRequest,
    ActivityResponse,
    ActivityUpdateRequest,
    DashboardSummaryResponse,
)
from lifelog.schemas.analytics import AnalyticsResponse
from lifelog.schemas.auth import CurrentUser
from lifelog.schemas.common import ApiResponse, MessageResponse
from lifelog.services.activity_service import ActivityService
from lifelog.services.analytics_service import AnalyticsService

router = APIRouter()

# activities.id は BIGINT
MAX_ACTIVITY_ID = 2**63 - 1


# ---------------------------------------------------------------------------
# 一覧
# ---------------------------------------------------------------------------


@router.get(
    "",
    response_model=ApiResponse[list[ActivityResponse]],
    summary="アクティビティ一覧",
)
async def list_activities(
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[list[ActivityResponse]]:
    """現在のユーザーの全アクティビティを新しい順に返す。"""
    service = ActivityService(session, settings)
    activities = await service.list_activities(user_id=current_user.id)
    return ApiResponse(
        message="Activities retrieved successfully",
        data=[ActivityResponse.model_validate(a) for a in activities],
    )


# ---------------------------------------------------------------------------
# 当日サマリー・分析
# ---------------------------------------------------------------------------


@router.get(
    "/summary",
    response_model=ApiResponse[DashboardSummaryResponse],
    summary="当日ダッシュボードサマリー",
)
async def get_dashboard_summary(
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[DashboardSummaryResponse]:
    """今日の件数、優勢な気分、平均エネルギー、最新5件を返す。

    Args:
        current_user: 認証済みユーザー。
        session: データベースセッション。
        settings: アプリケーション設定。

    Returns:
        ダッシュボードサマリーレスポンス。
    """
    service = ActivityService(session, settings)
    summary = await service.get_dashboard_summary(user_id=current_user.id)
    return ApiResponse(data=summary)


@router.get(
    "/analytics",
    response_model=ApiResponse[AnalyticsResponse],
    summary="分析データ",
)
async def get_analytics(
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[AnalyticsResponse]:
    """週間気分、カテゴリ分布、30日推移などの分析データを返す。

    Args:
        current_user: 認証済みユーザー。
        session: データベースセッション。
        settings: アプリケーション設定。

    Returns:
        分析レスポンス。
    """
    service = AnalyticsService(session, settings)
    analytics = await service.get_analytics(user_id=current_user.id)
    return ApiResponse(data=analytics)


# ---------------------------------------------------------------------------
# 個別操作
# ---------------------------------------------------------------------------


@router.get(
    "/{activity_id}",
    response_model=ApiResponse[ActivityResponse],
    summary="アクティビティ取得",
)
async def get_activity(
    activity_id: int = Path(..., ge=1, le=MAX_ACTIVITY_ID),
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[ActivityResponse]:
    """IDを指定してアクティビティを1件返す。"""
    service = ActivityService(session, settings)
    activity = await service.get_activity(activity_id, user_id=current_user.id)
    return ApiResponse(data=ActivityResponse.model_validate(activity))


@router.post(
    "",
    response_model=ApiResponse[ActivityResponse],
    status_code=201,
    summary="アクティビティ作成",
)
async def create_activity(
    request: ActivityCreateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[ActivityResponse]:
    """アクティビティを作成する。

    Args:
        request: 作成リクエスト。
        current_user: 認証済みユーザー。
        session: データベースセッション。
        settings: アプリケーション設定。

    Returns:
        作成されたアクティビティ。
    """
    service = ActivityService(session, settings)
    activity = await service.create_activity(user_id=current_user.id, request=request)
    return ApiResponse(
        message="Activity created successfully",
        data=ActivityResponse.model_validate(activity),
    )


@router.put(
    "/{activity_id}",
    response_model=ApiResponse[ActivityResponse],
    summary="アクティビティ更新",
)
async def update_activity(
    request: ActivityUpdateRequest,
    activity_id: int = Path(..., ge=1, le=MAX_ACTIVITY_ID),
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[ActivityResponse]:
    """アクティビティの全項目を置き換える。

    Args:
        request: 更新リクエスト。
        activity_id: アクティビティID。
        current_user: 認証済みユーザー。
        session: データベースセッション。
        settings: アプリケーション設定。

    Returns:
        更新後のアクティビティ。
    """
    service = ActivityService(session, settings)
    activity = await service.update_activity(
        activity_id,
        user_id=current_user.id,
        request=request,
    )
    return ApiResponse(
        message="Activity updated successfully",
        data=ActivityResponse.model_validate(activity),
    )


@router.delete(
    "/{activity_id}",
    response_model=MessageResponse,
    summary="アクティビティ削除",
)
async def delete_activity(
    activity_id: int = Path(..., ge=1, le=MAX_ACTIVITY_ID),
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> MessageResponse:
    """アクティビティを削除する。"""
    service = ActivityService(session, settings)
    await service.delete_activity(activity_id, user_id=current_user.id)
    return MessageResponse(message="Activity deleted successfully")
