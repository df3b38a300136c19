"""SMTP メール送信"""
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formatdate

from journey.core.logging import get_logger

logger = get_logger(__name__)


class SmtpTransport:
    """SMTP (STARTTLS) でHTMLメールを送信。失敗時は例外をそのまま送出"""

    def __init__(self, host: str, port: int = 587, user: str = "", password: str = ""):
        self.host = host
        self.port = port
        self.user = user
        self.password = password

    def send(self, from_email: str, to_email: str, subject: str, html: str) -> None:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = from_email
        msg["To"] = to_email
        msg["Date"] = formatdate(localtime=True)
        msg.attach(MIMEText(html, "html", "utf-8"))

        logger.debug(f"SMTP接続: {self.host}:{self.port}")
        with smtplib.SMTP(self.host, self.port) as server:
            server.ehlo()
            if server.has_extn("starttls"):
                server.starttls()
                server.ehlo()
            if self.user:
                server.login(self.user, self.password)
            server.send_message(msg)
