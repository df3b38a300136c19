"""日次サマリージョブ (DAILY_SUMMARY_CRON, TIMEZONE)"""
from dataclasses import asdict

from apscheduler.schedulers.base import BaseScheduler
from apscheduler.triggers.cron import CronTrigger

from journey.core.clients import build_mail_transport, build_openai_client
from journey.core.config import Settings, settings
from journey.core.database import SessionLocal
from journey.services.daily_summary_service import (
    DailySummaryContext,
    DailySummaryResult,
    run_daily_summary,
)
from journey.core.logging import get_logger

logger = get_logger(__name__)

JOB_ID = "daily_summary"


def daily_summary_job(ctx: DailySummaryContext) -> DailySummaryResult | None:
    """日次サマリー送信ジョブ。失敗はログのみで当日分は終了"""
    logger.info("日次サマリージョブ開始")
    try:
        result = run_daily_summary(ctx)
        logger.info(
            f"日次サマリージョブ終了: status={result.status}, email_sent={result.email_sent}",
            extra={"extra_data": asdict(result)},
        )
        return result
    except Exception as e:
        logger.exception(f"日次サマリージョブエラー: {e}")
        return None


def build_context(cfg: Settings = settings) -> DailySummaryContext:
    """設定からジョブの依存を組み立てる (クライアントはここで1回だけ生成)"""
    if not cfg.DAILY_SUMMARY_USER_ID or not cfg.DAILY_SUMMARY_EMAIL:
        raise ValueError("DAILY_SUMMARY_USER_ID と DAILY_SUMMARY_EMAIL を設定してください")
    return DailySummaryContext(
        session_factory=SessionLocal,
        openai_client=build_openai_client(cfg),
        mail_transport=build_mail_transport(cfg),
        user_id=cfg.DAILY_SUMMARY_USER_ID,
        email=cfg.DAILY_SUMMARY_EMAIL,
        timezone=cfg.TIMEZONE,
        model=cfg.OPENAI_MODEL,
        from_email=cfg.mail_from_address,
        from_name=cfg.MAIL_FROM_NAME,
        site_name=cfg.SITE_NAME,
    )


# crontabの曜日番号 (0と7が日曜) → APSchedulerの曜日名
WEEKDAY_NAMES = ["sun", "mon", "tue", "wed", "thu", "fri", "sat", "sun"]


def _crontab_weekdays(field: str) -> str:
    """crontabのday-of-weekをAPScheduler 3.x向けに変換

    APScheduler 3.x は数値の0を月曜として扱うため、数値指定は曜日名の列挙に直す。
    名前指定 (mon-fri 等) と * はそのまま渡す。
    """
    if field == "*":
        return field

    names: list[str] = []
    for part in field.split(","):
        if any(c.isalpha() for c in part):
            names.append(part)
            continue

        body, _, step_text = part.partition("/")
        step = int(step_text) if step_text else 1
        if step < 1:
            raise ValueError(f"曜日のステップが不正です: {part}")
        if body == "*":
            first, last = 0, 6
        elif "-" in body:
            first_text, last_text = body.split("-", 1)
            first, last = int(first_text), int(last_text)
        else:
            first = int(body)
            # "5/2" は 5〜6 の範囲扱い
            last = 6 if step_text else first

        if not (0 <= first <= 7 and 0 <= last <= 7) or first > last:
            raise ValueError(f"曜日の指定が不正です: {part}")

        for day in range(first, last + 1, step):
            name = WEEKDAY_NAMES[day]
            if name not in names:
                names.append(name)
    return ",".join(names)


def build_cron_trigger(cron: str, timezone: str) -> CronTrigger:
    """5フィールドのcrontab式からCronTriggerを作る (曜日は 0=日曜)"""
    fields = cron.split()
    if len(fields) != 5:
        raise ValueError(f"crontab式は5フィールドで指定してください: '{cron}'")
    minute, hour, day, month, day_of_week = fields
    return CronTrigger(
        minute=minute,
        hour=hour,
        day=day,
        month=month,
        day_of_week=_crontab_weekdays(day_of_week),
        timezone=timezone,
    )


def register_daily_summary(
    scheduler: BaseScheduler,
    ctx: DailySummaryContext,
    cron: str,
    timezone: str,
):
    """スケジューラにジョブを登録。同一プロセス内での多重実行は max_instances=1 で抑止"""
    return scheduler.add_job(
        daily_summary_job,
        build_cron_trigger(cron, timezone),
        args=[ctx],
        id=JOB_ID,
        max_instances=1,
        coalesce=True,
        replace_existing=True,
    )
