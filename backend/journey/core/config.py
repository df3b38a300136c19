from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """アプリケーション設定"""

    # データベース
    DATABASE_URL: str = "mysql+pymysql://journey:journeypassword@db:3306/journey?charset=utf8mb4"

    # Redis (セッション)
    REDIS_URL: str = "redis://redis:6379/0"

    # OpenAI互換 API (DeepSeek等)
    OPENAI_API_KEY: str = ""
    OPENAI_BASE_URL: str | None = None
    OPENAI_MODEL: str = "deepseek-chat"

    # メール送信: "smtp" または "resend"
    MAIL_TRANSPORT: str = "smtp"
    MAIL_FROM_NAME: str = "Japanese Learning Journey"

    # SMTP
    SMTP_HOST: str = "smtp.gmail.com"
    SMTP_PORT: int = 587
    SMTP_USER: str = ""
    SMTP_PASSWORD: str = ""

    # Resend
    RESEND_API_KEY: str = ""
    RESEND_FROM_EMAIL: str = "noreply@example.com"

    # 日次サマリー (シングルテナント)
    DAILY_SUMMARY_USER_ID: str = ""
    DAILY_SUMMARY_EMAIL: str = ""
    DAILY_SUMMARY_CRON: str = "0 21 * * *"
    TIMEZONE: str = "Asia/Tokyo"

    # サービス設定
    SITE_NAME: str = "Japanese Learning Journey"
    ALLOWED_ORIGINS: str = "http://localhost:5000,http://localhost:3000"

    # セッション
    SESSION_TIMEOUT_MINUTES: int = 60 * 24 * 7

    # 環境
    ENV: str = "development"
    DEBUG: bool = True

    @property
    def allowed_origins_list(self) -> list[str]:
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]

    @property
    def mail_from_address(self) -> str:
        """送信元アドレス: SMTPならログインユーザー、ResendならRESEND_FROM_EMAIL"""
        if self.MAIL_TRANSPORT == "resend":
            return self.RESEND_FROM_EMAIL
        return self.SMTP_USER

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
