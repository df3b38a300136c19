"""Resend API メール送信"""
import resend

from journey.core.logging import get_logger

logger = get_logger(__name__)


class ResendTransport:
    """Resend APIでHTMLメールを送信。失敗時は例外をそのまま送出"""

    def __init__(self, api_key: str):
        self.api_key = api_key

    def send(self, from_email: str, to_email: str, subject: str, html: str) -> dict:
        resend.api_key = self.api_key
        result = resend.Emails.send({
            "from": from_email,
            "to": [to_email],
            "subject": subject,
            "html": html,
        })
        logger.debug(f"Resend送信: id={result.get('id') if isinstance(result, dict) else result}")
        return result
