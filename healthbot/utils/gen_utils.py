import functools
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from healthbot.utils.settings import settings


@functools.lru_cache(maxsize=8)
def get_reporting_timezone(name=None):
    return ZoneInfo(name or settings.TIMEZONE)


def local_now() -> datetime:
    """Current time in the reporting timezone"""
    return datetime.now(get_reporting_timezone())


def local_today() -> date:
    """Calendar date used for outbreak cache keys"""
    return local_now().date()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def days_ago(days: int, now=None) -> datetime:
    return (now or utcnow()) - timedelta(days=days)


def truncate(text, limit):
    """Cut text to limit characters, marking the cut with '...'"""
    text = text or ""
    if len(text) <= limit:
        return text
    return text[:limit - 3] + "..."
