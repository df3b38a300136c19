"""日次サマリーワークフロー

当日のサマリー確認 → 無ければ当日の翻訳から生成・保存 → メール送信。

同日判定と保存は同一トランザクションではない。実行が重なると
同じ日に2件のサマリーが作られうる (一意制約なし)。
"""
from dataclasses import dataclass
from typing import Any, Callable, Optional
from sqlalchemy.orm import Session

from journey.core.clock import now_local
from journey.services import summary_service, translation_service
from journey.services.mail_service import MailTransport, send_summary_email
from journey.core.logging import get_logger

logger = get_logger(__name__)

STATUS_SKIPPED = "skipped_no_translations"
STATUS_REUSED = "reused"
STATUS_GENERATED = "generated"


@dataclass
class DailySummaryContext:
    """ジョブ実行に必要な依存一式"""
    session_factory: Callable[[], Session]
    openai_client: Any
    mail_transport: MailTransport
    user_id: str
    email: str
    timezone: str = "Asia/Tokyo"
    model: Optional[str] = None
    # 送信元・メール署名 (Noneなら設定値)
    from_email: Optional[str] = None
    from_name: Optional[str] = None
    site_name: Optional[str] = None


@dataclass
class DailySummaryResult:
    status: str
    summary_id: Optional[int] = None
    email_sent: bool = False


def run_daily_summary(ctx: DailySummaryContext) -> DailySummaryResult:
    """1回分のジョブ実行。例外は呼び出し側へ送出"""
    db = ctx.session_factory()
    try:
        now = now_local(ctx.timezone)
        today = now.date()

        summaries = summary_service.get_summaries(db, ctx.user_id)
        summary = summary_service.find_summary_for_day(summaries, today)

        if summary is None:
            logger.info(f"本日のサマリーなし、生成します: user_id={ctx.user_id}, date={today}")
            translations = translation_service.get_translations_by_date(db, ctx.user_id, today)
            if not translations:
                logger.info(f"本日の翻訳なし、メール送信スキップ: user_id={ctx.user_id}")
                return DailySummaryResult(status=STATUS_SKIPPED)

            summary = summary_service.generate_and_save_summary(
                db,
                ctx.openai_client,
                ctx.user_id,
                translations,
                model=ctx.model,
                summary_date=now,
            )
            status = STATUS_GENERATED
        else:
            logger.info(f"本日の既存サマリーを使用: summary_id={summary.id}")
            status = STATUS_REUSED

        sent = send_summary_email(
            ctx.mail_transport,
            ctx.email,
            summary.content,
            from_email=ctx.from_email,
            from_name=ctx.from_name,
            site_name=ctx.site_name,
            now=now,
        )
        if sent:
            logger.info(f"日次サマリーメール送信完了: summary_id={summary.id}")
        else:
            logger.warning(f"日次サマリーメール送信失敗: summary_id={summary.id}")

        return DailySummaryResult(status=status, summary_id=summary.id, email_sent=sent)
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
