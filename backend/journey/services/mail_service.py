"""日次サマリーメール送信

Markdown → HTML は汎用パーサではなく、順序付きの置換ルールで変換する。
対象外の記法 (表、リンク、画像、入れ子リスト) はそのまま残る。
"""
import re
from datetime import datetime
from pathlib import Path
from typing import Protocol

from jinja2 import Environment, FileSystemLoader, select_autoescape

from journey.core.clock import now_local
from journey.core.config import settings
from journey.core.logging import get_logger

logger = get_logger(__name__)

template_dir = Path(__file__).parent.parent / "templates" / "email"
jinja_env = Environment(
    loader=FileSystemLoader(str(template_dir)),
    autoescape=select_autoescape(["html"]),
)

# (パターン, 置換, 置換回数 0=全件) を上から順に適用
MARKDOWN_RULES: list[tuple[re.Pattern, str, int]] = [
    (
        re.compile(r"^# (.+)$", re.M),
        r'<h2 style="color: #1f2937; font-size: 24px; margin: 0 0 20px 0; font-weight: 600;">\1</h2>',
        0,
    ),
    (
        re.compile(r"^## (.+)$", re.M),
        r'<h3 style="color: #4b5563; font-size: 18px; margin: 20px 0 12px 0; font-weight: 600;">\1</h3>',
        0,
    ),
    (
        re.compile(r"^\d+\.\s\*\*(.+?)\*\*\s*-\s*(.+)$", re.M),
        r'<div style="margin: 10px 0;"><strong style="color: #667eea;">\1</strong> - \2</div>',
        0,
    ),
    (
        re.compile(r"\*\*(.+?)\*\*"),
        r'<strong style="color: #374151;">\1</strong>',
        0,
    ),
    (
        re.compile(r"`([^`\n]+)`"),
        r'<code style="background-color: #f3f4f6; padding: 2px 6px; border-radius: 4px;">\1</code>',
        0,
    ),
    (
        re.compile(r"^-\s(.+)$", re.M),
        r'<li style="margin: 6px 0; color: #4b5563;">\1</li>',
        0,
    ),
    # 最初の<li>から最後の</li>までを1つの<ul>で囲む
    (
        re.compile(r"(<li[^>]*>.*</li>)", re.S),
        r'<ul style="margin: 10px 0; padding-left: 20px;">\1</ul>',
        1,
    ),
    (re.compile(r"\n\n"), "<br><br>", 0),
    (re.compile(r"\n"), "<br>", 0),
]


def render_markdown(text: str) -> str:
    """Markdown (限定サブセット) をメール用HTMLに変換"""
    html = text
    for pattern, replacement, count in MARKDOWN_RULES:
        html = pattern.sub(replacement, html, count=count)
    return html


def format_long_date(d: datetime) -> str:
    """例: Monday, October 19, 2026"""
    return f"{d:%A}, {d:%B} {d.day}, {d.year}"


def format_short_date(d: datetime) -> str:
    """例: Oct 19"""
    return f"{d:%b} {d.day}"


def build_summary_email(
    summary_content: str,
    now: datetime | None = None,
    site_name: str | None = None,
) -> tuple[str, str]:
    """(件名, HTML本文) を組み立てる"""
    now = now or now_local()
    subject = f"🌸 Your Japanese Progress - {format_short_date(now)}"
    template = jinja_env.get_template("summary.html")
    html = template.render(
        date_label=format_long_date(now),
        body=render_markdown(summary_content),
        site_name=site_name or settings.SITE_NAME,
    )
    return subject, html


class MailTransport(Protocol):
    def send(self, from_email: str, to_email: str, subject: str, html: str) -> None:
        ...


def send_summary_email(
    transport: MailTransport,
    to_email: str,
    summary_content: str,
    from_email: str | None = None,
    from_name: str | None = None,
    site_name: str | None = None,
    now: datetime | None = None,
) -> bool:
    """サマリーメール送信。例外は送出せず、失敗時はFalse"""
    try:
        subject, html = build_summary_email(summary_content, now=now, site_name=site_name)
        sender = f'"{from_name or settings.MAIL_FROM_NAME}" <{from_email or settings.mail_from_address}>'
        transport.send(sender, to_email, subject, html)
        logger.info(f"サマリーメール送信: {to_email}")
        return True
    except Exception as e:
        logger.error(f"サマリーメール送信失敗: {to_email} - {e}")
        return False
