"""サマリーAPI: 生成、一覧、メール送信"""
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from journey.core.clients import get_mail_transport, get_openai_client
from journey.core.clock import now_local
from journey.core.database import get_db
from journey.schemas.summary import SummaryOut, SendEmailRequest, SendEmailResponse, MessageResponse
from journey.services import summary_service, translation_service
from journey.services.mail_service import send_summary_email
from journey.routers.deps import require_login
from journey.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/summaries", tags=["summaries"])


@router.post(
    "/generate",
    response_model=SummaryOut,
    status_code=201,
    responses={200: {"model": MessageResponse, "description": "本日の翻訳なし"}},
)
def generate_summary(
    user_id: str = Depends(require_login),
    db: Session = Depends(get_db),
    client=Depends(get_openai_client),
):
    """本日の翻訳からサマリーを生成 (同日の既存サマリーの有無は問わない)"""
    now = now_local()
    translations = translation_service.get_translations_by_date(db, user_id, now.date())
    if not translations:
        return JSONResponse(
            status_code=200,
            content=MessageResponse(message="No translations today to summarize.").model_dump(),
        )

    try:
        return summary_service.generate_and_save_summary(
            db, client, user_id, translations, summary_date=now,
        )
    except Exception as e:
        db.rollback()
        logger.exception(f"サマリー生成エラー: user_id={user_id} - {e}")
        raise HTTPException(status_code=500, detail="Failed to generate summary")


@router.get("", response_model=list[SummaryOut])
def list_summaries(
    user_id: str = Depends(require_login),
    db: Session = Depends(get_db),
):
    """サマリー一覧 (新しい順)"""
    return summary_service.get_summaries(db, user_id)


@router.post("/send-email", response_model=SendEmailResponse)
def send_email(
    data: SendEmailRequest,
    user_id: str = Depends(require_login),
    db: Session = Depends(get_db),
    transport=Depends(get_mail_transport),
):
    """指定サマリー (省略時は最新) をメール送信"""
    if data.summaryId is not None:
        summary = summary_service.get_summary(db, user_id, data.summaryId)
        if summary is None:
            raise HTTPException(status_code=404, detail="Summary not found")
    else:
        summaries = summary_service.get_summaries(db, user_id)
        if not summaries:
            raise HTTPException(status_code=404, detail="No summaries found")
        summary = summaries[0]

    if not send_summary_email(transport, data.email, summary.content):
        raise HTTPException(status_code=500, detail="Failed to send email")
    return SendEmailResponse(success=True, message="Summary sent successfully!")
