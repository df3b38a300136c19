"""翻訳API"""
from datetime import date as date_type
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from journey.core.clients import get_openai_client
from journey.core.clock import today_local
from journey.core.database import get_db
from journey.core.rate_limit import limiter, TRANSLATE_RATE_LIMIT
from journey.schemas.translation import TranslationCreate, TranslationOut, TranslationDayCount
from journey.services import openai_service, translation_service
from journey.routers.deps import require_login
from journey.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/translations", tags=["translations"])


@router.post("", response_model=TranslationOut, status_code=201)
@limiter.limit(TRANSLATE_RATE_LIMIT)
def create_translation(
    request: Request,
    data: TranslationCreate,
    user_id: str = Depends(require_login),
    db: Session = Depends(get_db),
    client=Depends(get_openai_client),
):
    """テキストを翻訳して保存"""
    try:
        result = openai_service.translate_text(client, data.text)
        return translation_service.create_translation(
            db,
            user_id=user_id,
            original_text=data.text,
            japanese=result["japanese"],
            english=result["english"],
            romaji=result["romaji"],
        )
    except Exception as e:
        db.rollback()
        logger.exception(f"翻訳エラー: user_id={user_id} - {e}")
        raise HTTPException(status_code=500, detail="Failed to translate")


@router.get("", response_model=list[TranslationOut])
def list_translations(
    user_id: str = Depends(require_login),
    db: Session = Depends(get_db),
):
    """本日の翻訳一覧"""
    return translation_service.get_translations_by_date(db, user_id, today_local())


@router.get("/history", response_model=list[TranslationDayCount])
def translation_history(
    user_id: str = Depends(require_login),
    db: Session = Depends(get_db),
):
    """日別の翻訳件数"""
    return translation_service.get_translation_history(db, user_id)


@router.get("/date/{date}", response_model=list[TranslationOut])
def translations_by_date(
    date: date_type,
    user_id: str = Depends(require_login),
    db: Session = Depends(get_db),
):
    """指定日 (YYYY-MM-DD) の翻訳一覧"""
    return translation_service.get_translations_by_date(db, user_id, date)
