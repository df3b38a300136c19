"""日次サマリーの生成・保存・検索"""
from datetime import date, datetime
from typing import Any, Iterable, Optional
from sqlalchemy.orm import Session

from journey.models.summary import Summary
from journey.models.translation import Translation
from journey.services.openai_service import generate_summary
from journey.core.logging import get_logger

logger = get_logger(__name__)


def create_summary(
    db: Session,
    user_id: str,
    content: str,
    vocab: list | None = None,
    summary_date: datetime | None = None,
) -> Summary:
    """サマリーを保存"""
    summary = Summary(user_id=user_id, content=content, vocab=vocab)
    if summary_date is not None:
        summary.date = summary_date
    db.add(summary)
    db.commit()
    db.refresh(summary)
    logger.info(f"サマリー保存: user_id={user_id}, summary_id={summary.id}")
    return summary


def get_summaries(db: Session, user_id: str) -> list[Summary]:
    """ユーザーの全サマリー (新しい順)"""
    return db.query(Summary).filter(
        Summary.user_id == user_id,
    ).order_by(Summary.date.desc(), Summary.id.desc()).all()


def get_summary(db: Session, user_id: str, summary_id: int) -> Optional[Summary]:
    """IDでサマリーを取得 (他ユーザーのものは返さない)"""
    return db.query(Summary).filter(
        Summary.id == summary_id,
        Summary.user_id == user_id,
    ).first()


def find_summary_for_day(summaries: Iterable[Summary], day: date) -> Optional[Summary]:
    """日付が一致する最初のサマリー (線形探索)"""
    for s in summaries:
        if s.date.date() == day:
            return s
    return None


def format_translation_line(t: Translation) -> str:
    # 欠けた訳は空文字
    return f"Original: {t.original_text} | JP: {t.japanese or ''} | EN: {t.english or ''}"


def build_summary_input(translations: Iterable[Translation]) -> str:
    """翻訳を1行ずつ連結して生成モデルへの入力にする"""
    return "\n".join(format_translation_line(t) for t in translations)


def generate_and_save_summary(
    db: Session,
    client: Any,
    user_id: str,
    translations: list[Translation],
    model: str | None = None,
    summary_date: datetime | None = None,
) -> Summary:
    """翻訳からサマリーを生成して保存。生成エラーはそのまま送出"""
    summary_input = build_summary_input(translations)
    logger.info(f"サマリー生成開始: user_id={user_id}, translations={len(translations)}件")

    result = generate_summary(client, summary_input, model=model)

    return create_summary(
        db,
        user_id=user_id,
        content=result["content"],
        vocab=result["vocab"],
        summary_date=summary_date,
    )
