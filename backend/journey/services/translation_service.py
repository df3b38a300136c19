"""翻訳履歴ストア"""
from datetime import date
from sqlalchemy import func as sa_func
from sqlalchemy.orm import Session

from journey.core.clock import day_bounds
from journey.models.translation import Translation
from journey.core.logging import get_logger

logger = get_logger(__name__)


def create_translation(
    db: Session,
    user_id: str,
    original_text: str,
    japanese: str | None,
    english: str | None,
    romaji: str | None,
) -> Translation:
    """翻訳を保存"""
    translation = Translation(
        user_id=user_id,
        original_text=original_text,
        japanese=japanese,
        english=english,
        romaji=romaji,
    )
    db.add(translation)
    db.commit()
    db.refresh(translation)
    logger.info(f"翻訳保存: user_id={user_id}, translation_id={translation.id}")
    return translation


def get_translations(db: Session, user_id: str) -> list[Translation]:
    """ユーザーの全翻訳 (古い順)"""
    return db.query(Translation).filter(
        Translation.user_id == user_id,
    ).order_by(Translation.created_at.asc(), Translation.id.asc()).all()


def get_translations_by_date(db: Session, user_id: str, day: date) -> list[Translation]:
    """指定日の翻訳 (古い順)"""
    start, end = day_bounds(day)
    return db.query(Translation).filter(
        Translation.user_id == user_id,
        Translation.created_at >= start,
        Translation.created_at < end,
    ).order_by(Translation.created_at.asc(), Translation.id.asc()).all()


def get_translation_history(db: Session, user_id: str) -> list[dict]:
    """日別の翻訳件数 (新しい日付順)"""
    day = sa_func.date(Translation.created_at)
    rows = db.query(
        day.label("day"),
        sa_func.count(Translation.id).label("count"),
    ).filter(
        Translation.user_id == user_id,
    ).group_by(day).order_by(day.desc()).all()

    # SQLiteは文字列、MySQLはdateで返る
    return [{"date": str(row.day), "count": int(row.count)} for row in rows]
