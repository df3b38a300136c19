"""外部クライアント (生成API・メール送信) の構築

プロセス起動時に1回だけ生成し、ジョブやルーターへ明示的に渡す。
"""
from functools import lru_cache

from openai import OpenAI

from journey.core.config import Settings, settings
from journey.services.mail_service import MailTransport
from journey.services.resend_service import ResendTransport
from journey.services.smtp_service import SmtpTransport


def build_openai_client(cfg: Settings = settings) -> OpenAI:
    return OpenAI(api_key=cfg.OPENAI_API_KEY, base_url=cfg.OPENAI_BASE_URL)


def build_mail_transport(cfg: Settings = settings) -> MailTransport:
    if cfg.MAIL_TRANSPORT == "smtp":
        return SmtpTransport(
            host=cfg.SMTP_HOST,
            port=cfg.SMTP_PORT,
            user=cfg.SMTP_USER,
            password=cfg.SMTP_PASSWORD,
        )
    if cfg.MAIL_TRANSPORT == "resend":
        return ResendTransport(api_key=cfg.RESEND_API_KEY)
    raise ValueError(f"未対応のMAIL_TRANSPORT: {cfg.MAIL_TRANSPORT}")


@lru_cache
def get_openai_client() -> OpenAI:
    """FastAPI依存関数: 生成APIクライアント"""
    return build_openai_client()


@lru_cache
def get_mail_transport() -> MailTransport:
    """FastAPI依存関数: メール送信トランスポート"""
    return build_mail_transport()
