"""Tests for ``lifelog.services.activity_service`` against a mock session."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Callable
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from lifelog.config import get_settings
from lifelog.core.exceptions import NotFoundError
from lifelog.models import Activity
from lifelog.schemas.activity import ActivityCreateRequest, ActivityUpdateRequest
from lifelog.services.activity_service import ActivityService
from tests.conftest import TEST_TODAY, TEST_USER_ID

OTHER_USER_ID = 7


@pytest.fixture()
def service(mock_session: AsyncMock) -> ActivityService:
    return ActivityService(mock_session, get_settings())


@pytest.fixture(autouse=True)
def _fixed_today():
    with patch(
        "lifelog.services.activity_service.local_today",
        return_value=TEST_TODAY,
    ):
        yield


def _lookup_result(value: object) -> MagicMock:
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    return result


# ---------------------------------------------------------------------------
# create
# ---------------------------------------------------------------------------


class TestCreateActivity:
    """``ActivityService.create_activity``"""

    @pytest.mark.asyncio
    async def test_defaults_date_and_note(
        self,
        service: ActivityService,
        mock_session: AsyncMock,
    ) -> None:
        request = ActivityCreateRequest(
            title="Run",
            category="olahraga",
            mood="happy",
            energy=4,
        )

        activity = await service.create_activity(TEST_USER_ID, request)

        mock_session.add.assert_called_once_with(activity)
        mock_session.commit.assert_awaited_once()
        mock_session.refresh.assert_awaited_once_with(activity)
        assert activity.user_id == TEST_USER_ID
        assert activity.activity_date == TEST_TODAY
        assert activity.note is None
        assert activity.category == "olahraga"

    @pytest.mark.asyncio
    async def test_keeps_explicit_date_and_note(
        self,
        service: ActivityService,
    ) -> None:
        request = ActivityCreateRequest(
            title="Read",
            category="belajar",
            mood="calm",
            energy=3,
            note="chapter 4",
            activity_date=date(2026, 10, 1),
        )

        activity = await service.create_activity(TEST_USER_ID, request)

        assert activity.activity_date == date(2026, 10, 1)
        assert activity.note == "chapter 4"


# ---------------------------------------------------------------------------
# get
# ---------------------------------------------------------------------------


class TestGetActivity:
    """``ActivityService.get_activity``"""

    @pytest.mark.asyncio
    async def test_returns_owned_activity(
        self,
        service: ActivityService,
        mock_session: AsyncMock,
        make_activity: Callable[..., Activity],
    ) -> None:
        owned = make_activity(id=3)
        mock_session.execute.return_value = _lookup_result(owned)

        assert await service.get_activity(3, TEST_USER_ID) is owned

        stmt = mock_session.execute.await_args.args[0]
        assert "activities.user_id" in str(stmt)

    @pytest.mark.asyncio
    async def test_missing_raises_not_found(
        self,
        service: ActivityService,
        mock_session: AsyncMock,
    ) -> None:
        mock_session.execute.return_value = _lookup_result(None)

        with pytest.raises(NotFoundError):
            await service.get_activity(999, TEST_USER_ID)


# ---------------------------------------------------------------------------
# update
# ---------------------------------------------------------------------------


class TestUpdateActivity:
    """``ActivityService.update_activity``"""

    def _request(self) -> ActivityUpdateRequest:
        return ActivityUpdateRequest(
            title="Swim",
            category="olahraga",
            mood="tired",
            energy=2,
            activity_date=date(2026, 10, 18),
        )

    @pytest.mark.asyncio
    async def test_replaces_all_fields(
        self,
        service: ActivityService,
        mock_session: AsyncMock,
        make_activity: Callable[..., Activity],
    ) -> None:
        existing = make_activity(id=3, note="old note")
        mock_session.execute.return_value = _lookup_result(existing)

        updated = await service.update_activity(3, TEST_USER_ID, self._request())

        assert updated is existing
        assert updated.title == "Swim"
        assert updated.mood == "tired"
        assert updated.energy == 2
        assert updated.note is None
        assert updated.activity_date == date(2026, 10, 18)
        mock_session.commit.assert_awaited_once()
        mock_session.refresh.assert_awaited_once_with(existing)

    @pytest.mark.asyncio
    async def test_other_users_activity_is_not_found(
        self,
        service: ActivityService,
        mock_session: AsyncMock,
    ) -> None:
        """The row exists for someone else, but the owner-scoped lookup
        finds nothing."""
        mock_session.execute.return_value = _lookup_result(None)

        with pytest.raises(NotFoundError):
            await service.update_activity(3, OTHER_USER_ID, self._request())

        mock_session.commit.assert_not_awaited()


# ---------------------------------------------------------------------------
# delete
# ---------------------------------------------------------------------------


class TestDeleteActivity:
    """``ActivityService.delete_activity``"""

    @pytest.mark.asyncio
    async def test_deletes_owned_row(
        self,
        service: ActivityService,
        mock_session: AsyncMock,
    ) -> None:
        result = MagicMock()
        result.rowcount = 1
        mock_session.execute.return_value = result

        await service.delete_activity(3, TEST_USER_ID)

        mock_session.commit.assert_awaited_once()
        stmt = mock_session.execute.await_args.args[0]
        assert "activities.user_id" in str(stmt)

    @pytest.mark.asyncio
    async def test_missing_row_raises_and_does_not_commit(
        self,
        service: ActivityService,
        mock_session: AsyncMock,
    ) -> None:
        result = MagicMock()
        result.rowcount = 0
        mock_session.execute.return_value = result

        with pytest.raises(NotFoundError):
            await service.delete_activity(999, TEST_USER_ID)

        mock_session.commit.assert_not_awaited()


# ---------------------------------------------------------------------------
# dashboard summary
# ---------------------------------------------------------------------------


def _summary_results(
    total: int,
    mood: str | None,
    avg: object,
    recent: list[Activity],
) -> list[MagicMock]:
    total_result = MagicMock()
    total_result.scalar_one.return_value = total
    mood_result = MagicMock()
    mood_result.scalar_one_or_none.return_value = mood
    energy_result = MagicMock()
    energy_result.scalar_one.return_value = avg
    recent_result = MagicMock()
    recent_result.scalars.return_value.all.return_value = recent
    return [total_result, mood_result, energy_result, recent_result]


class TestDashboardSummary:
    """``ActivityService.get_dashboard_summary``"""

    @pytest.mark.asyncio
    async def test_empty_day(
        self,
        service: ActivityService,
        mock_session: AsyncMock,
    ) -> None:
        mock_session.execute.side_effect = _summary_results(0, None, None, [])

        summary = await service.get_dashboard_summary(TEST_USER_ID)

        assert summary.total_activities == 0
        assert summary.dominant_mood is None
        assert summary.average_energy == 0
        assert summary.recent_activities == []

    @pytest.mark.asyncio
    async def test_with_activities(
        self,
        service: ActivityService,
        mock_session: AsyncMock,
        make_activity: Callable[..., Activity],
    ) -> None:
        recent = [make_activity(id=3), make_activity(id=2), make_activity(id=1)]
        mock_session.execute.side_effect = _summary_results(
            3,
            "happy",
            Decimal("3.6666666666666667"),
            recent,
        )

        summary = await service.get_dashboard_summary(TEST_USER_ID)

        assert summary.total_activities == 3
        assert summary.dominant_mood == "happy"
        assert summary.average_energy == 3.67
        assert [a.id for a in summary.recent_activities] == [3, 2, 1]
        assert mock_session.execute.await_count == 4
