"""タイムゾーン付きの現在時刻と暦日の範囲

DBにはTIMEZONE基準のnaive datetimeを保存する。日付比較はすべてこの基準で行う。
"""
from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from journey.core.config import settings


def get_zone(tz_name: str | None = None) -> ZoneInfo:
    return ZoneInfo(tz_name or settings.TIMEZONE)


def now_local(tz_name: str | None = None) -> datetime:
    """TIMEZONE基準の現在時刻 (naive)"""
    return datetime.now(get_zone(tz_name)).replace(tzinfo=None)


def today_local(tz_name: str | None = None) -> date:
    return now_local(tz_name).date()


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """[当日00:00, 翌日00:00) の半開区間"""
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)
