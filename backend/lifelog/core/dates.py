"""日付ユーティリティ。

「今日」の定義は設定されたタイムゾーンに従う。
"""

from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

WEEKDAY_NAMES: tuple[str, ...] = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


def local_today(tz_name: str) -> date:
    """指定タイムゾーンにおける今日の日付を返す。"""
    return datetime.now(ZoneInfo(tz_name)).date()


def short_label(d: date) -> str:
    """``Oct 5`` 形式の表示用ラベルを返す。"""
    return f"{d.strftime('%b')} {d.day}"
