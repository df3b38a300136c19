"""Job registration and dependency wiring for the scheduler process."""
from datetime import datetime
from zoneinfo import ZoneInfo

import pytest
from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.cron import CronTrigger

from journey.core.clients import build_mail_transport
from journey.core.config import Settings
from journey.scheduler.daily_summary import (
    JOB_ID,
    _crontab_weekdays,
    build_cron_trigger,
    build_context,
    daily_summary_job,
    register_daily_summary,
)
from journey.services.daily_summary_service import DailySummaryContext
from journey.services.resend_service import ResendTransport
from journey.services.smtp_service import SmtpTransport

from conftest import RecordingTransport

TOKYO = ZoneInfo("Asia/Tokyo")


@pytest.fixture
def ctx(session_factory):
    return DailySummaryContext(
        session_factory=session_factory,
        openai_client=None,
        mail_transport=RecordingTransport(),
        user_id="tester",
        email="tester@example.com",
    )


def test_register_daily_summary(ctx) -> None:
    scheduler = BlockingScheduler(timezone="Asia/Tokyo")
    register_daily_summary(scheduler, ctx, "0 21 * * *", "Asia/Tokyo")

    job = scheduler.get_job(JOB_ID)
    assert job is not None
    assert job.func is daily_summary_job
    assert job.args == (ctx,)
    assert job.max_instances == 1
    assert job.coalesce is True
    assert isinstance(job.trigger, CronTrigger)

    morning = datetime(2026, 10, 19, 12, 0, tzinfo=TOKYO)
    assert job.trigger.get_next_fire_time(None, morning) == datetime(2026, 10, 19, 21, 0, tzinfo=TOKYO)

    night = datetime(2026, 10, 19, 21, 30, tzinfo=TOKYO)
    assert job.trigger.get_next_fire_time(None, night) == datetime(2026, 10, 20, 21, 0, tzinfo=TOKYO)


def test_custom_cron_expression(ctx) -> None:
    scheduler = BlockingScheduler(timezone="Asia/Tokyo")
    job = register_daily_summary(scheduler, ctx, "30 7 * * 1-5", "Asia/Tokyo")

    # 2026-10-17は土曜日
    saturday = datetime(2026, 10, 17, 12, 0, tzinfo=TOKYO)
    assert job.trigger.get_next_fire_time(None, saturday) == datetime(2026, 10, 19, 7, 30, tzinfo=TOKYO)


def test_invalid_cron_is_rejected(ctx) -> None:
    with pytest.raises(ValueError):
        register_daily_summary(BlockingScheduler(), ctx, "every evening", "Asia/Tokyo")


def test_build_context_requires_recipient() -> None:
    with pytest.raises(ValueError):
        build_context(Settings(DAILY_SUMMARY_USER_ID="tester", DAILY_SUMMARY_EMAIL=""))
    with pytest.raises(ValueError):
        build_context(Settings(DAILY_SUMMARY_USER_ID="", DAILY_SUMMARY_EMAIL="tester@example.com"))


def test_build_context_from_settings() -> None:
    cfg = Settings(
        DAILY_SUMMARY_USER_ID="tester",
        DAILY_SUMMARY_EMAIL="tester@example.com",
        OPENAI_API_KEY="sk-test",
        OPENAI_MODEL="deepseek-chat",
        TIMEZONE="Asia/Tokyo",
        MAIL_TRANSPORT="smtp",
        SMTP_USER="bot@example.com",
        MAIL_FROM_NAME="Journey Bot",
        SITE_NAME="My Journey",
    )
    built = build_context(cfg)

    assert built.user_id == "tester"
    assert built.email == "tester@example.com"
    assert built.timezone == "Asia/Tokyo"
    assert built.model == "deepseek-chat"
    assert isinstance(built.mail_transport, SmtpTransport)
    assert built.from_email == "bot@example.com"
    assert built.from_name == "Journey Bot"
    assert built.site_name == "My Journey"


def test_build_mail_transport() -> None:
    smtp = build_mail_transport(Settings(MAIL_TRANSPORT="smtp", SMTP_HOST="mail.example.com", SMTP_PORT=2525))
    assert isinstance(smtp, SmtpTransport)
    assert (smtp.host, smtp.port) == ("mail.example.com", 2525)

    assert isinstance(build_mail_transport(Settings(MAIL_TRANSPORT="resend", RESEND_API_KEY="re_x")), ResendTransport)

    with pytest.raises(ValueError):
        build_mail_transport(Settings(MAIL_TRANSPORT="carrier-pigeon"))


def test_mail_from_address_follows_transport() -> None:
    assert Settings(MAIL_TRANSPORT="smtp", SMTP_USER="me@example.com").mail_from_address == "me@example.com"
    assert Settings(MAIL_TRANSPORT="resend", RESEND_FROM_EMAIL="bot@example.com").mail_from_address == "bot@example.com"


@pytest.mark.parametrize("weekday", ["0", "7", "sun"])
def test_sunday_is_zero_or_seven(ctx, weekday) -> None:
    scheduler = BlockingScheduler(timezone="Asia/Tokyo")
    job = register_daily_summary(scheduler, ctx, f"0 9 * * {weekday}", "Asia/Tokyo")

    # 2026-10-18は日曜日
    saturday = datetime(2026, 10, 17, 12, 0, tzinfo=TOKYO)
    assert job.trigger.get_next_fire_time(None, saturday) == datetime(2026, 10, 18, 9, 0, tzinfo=TOKYO)


@pytest.mark.parametrize(
    "field, expected",
    [
        ("*", "*"),
        ("1-5", "mon,tue,wed,thu,fri"),
        ("5-7", "fri,sat,sun"),
        ("0,3", "sun,wed"),
        ("*/2", "sun,tue,thu,sat"),
        ("1-5/2", "mon,wed,fri"),
        ("0,7", "sun"),
        ("mon-fri", "mon-fri"),
    ],
)
def test_crontab_weekdays_follow_crontab_numbering(field, expected) -> None:
    assert _crontab_weekdays(field) == expected


@pytest.mark.parametrize("cron", ["0 9 * * 8", "0 9 * * 5-2", "0 21 * *", "0 21 * * * *"])
def test_out_of_range_cron_is_rejected(cron) -> None:
    with pytest.raises(ValueError):
        build_cron_trigger(cron, "Asia/Tokyo")


def test_weekday_range_fires_monday_to_friday() -> None:
    trigger = build_cron_trigger("30 7 * * 1-5", "Asia/Tokyo")

    friday = datetime(2026, 10, 23, 8, 0, tzinfo=TOKYO)
    assert trigger.get_next_fire_time(None, friday) == datetime(2026, 10, 26, 7, 30, tzinfo=TOKYO)
