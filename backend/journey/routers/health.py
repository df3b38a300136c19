"""ヘルスチェック: DB・Redisの疎通と日次サマリーの設定状況"""
from fastapi import APIRouter

from journey.core.config import settings
from journey.core.database import check_db_connection
from journey.core.redis import check_redis_connection

router = APIRouter()


def daily_summary_status() -> dict:
    """スケジューラが使う設定のうち、秘密情報を含まない項目"""
    return {
        "configured": bool(settings.DAILY_SUMMARY_USER_ID and settings.DAILY_SUMMARY_EMAIL),
        "cron": settings.DAILY_SUMMARY_CRON,
        "timezone": settings.TIMEZONE,
        "mail_transport": settings.MAIL_TRANSPORT,
        "model": settings.OPENAI_MODEL,
    }


@router.get("/health")
@router.get("/api/health")
async def health_check():
    db_ok = check_db_connection()
    redis_ok = await check_redis_connection()

    # 日次サマリー未設定でもAPI自体は稼働中とみなす
    status = "ok" if (db_ok and redis_ok) else "degraded"

    return {
        "status": status,
        "db": "connected" if db_ok else "disconnected",
        "redis": "connected" if redis_ok else "disconnected",
        "daily_summary": daily_summary_status(),
    }
