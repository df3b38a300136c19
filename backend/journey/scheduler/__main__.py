"""Scheduler エントリポイント: python -m journey.scheduler で起動"""
import argparse
import signal
import sys
from apscheduler.schedulers.blocking import BlockingScheduler

from journey.core.config import settings
from journey.core.logging import setup_logging, get_logger
from journey.scheduler.daily_summary import build_context, daily_summary_job, register_daily_summary

setup_logging(debug=settings.DEBUG, service="journey-scheduler")
logger = get_logger("scheduler")


def main(argv=None):
    parser = argparse.ArgumentParser(prog="python -m journey.scheduler")
    parser.add_argument("--run-now", action="store_true", help="日次サマリーを1回だけ実行して終了")
    args = parser.parse_args(argv)

    ctx = build_context(settings)

    if args.run_now:
        daily_summary_job(ctx)
        return

    scheduler = BlockingScheduler(timezone=settings.TIMEZONE)

    def signal_handler(sig, frame):
        logger.info("Scheduler停止シグナル受信")
        scheduler.shutdown(wait=False)
        sys.exit(0)

    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)

    register_daily_summary(scheduler, ctx, settings.DAILY_SUMMARY_CRON, settings.TIMEZONE)
    logger.info(f"Scheduler起動: cron='{settings.DAILY_SUMMARY_CRON}', timezone={settings.TIMEZONE}")

    try:
        scheduler.start()
    except (KeyboardInterrupt, SystemExit):
        logger.info("Scheduler終了")


if __name__ == "__main__":
    main()
