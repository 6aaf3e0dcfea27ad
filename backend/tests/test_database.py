"""Tests for the request-scoped session in ``lifelog.database``."""

from __future__ import annotations

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, patch

import pytest

from lifelog import database


def _factory_for(session: AsyncMock):  # type: ignore[no-untyped-def]
    @asynccontextmanager
    async def _open():  # type: ignore[no-untyped-def]
        yield session

    return _open


class TestGetSession:
    """``get_session`` commit / rollback policy."""

    @pytest.mark.asyncio
    async def test_commits_after_successful_handler(self, mock_session: AsyncMock) -> None:
        with patch.object(database, "async_session_factory", _factory_for(mock_session)):
            gen = database.get_session()
            assert await gen.__anext__() is mock_session
            with pytest.raises(StopAsyncIteration):
                await gen.__anext__()

        mock_session.commit.assert_awaited_once()
        mock_session.rollback.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_rolls_back_when_handler_raises(self, mock_session: AsyncMock) -> None:
        with patch.object(database, "async_session_factory", _factory_for(mock_session)):
            gen = database.get_session()
            await gen.__anext__()
            with pytest.raises(RuntimeError):
                await gen.athrow(RuntimeError("handler failed"))

        mock_session.rollback.assert_awaited_once()
        mock_session.commit.assert_not_awaited()

    def test_sql_echo_follows_log_level(self) -> None:
        assert database.engine.echo is (database.get_settings().LOG_LEVEL.upper() == "DEBUG")
