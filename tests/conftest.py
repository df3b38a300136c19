"""
Shared fixtures: per-test SQLite database, fake chat-completion client,
recording mail transport and an in-memory async Redis stand-in.
"""
import os

# 設定はimport時に読まれるため、journeyより先に環境変数を固定する
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["TIMEZONE"] = "Asia/Tokyo"
os.environ["MAIL_TRANSPORT"] = "smtp"
os.environ["DEBUG"] = "true"

import json
from types import SimpleNamespace
from typing import Any, Generator, Optional

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from journey.core.database import Base
from journey.core.rate_limit import limiter
from journey.models import User

TEST_USER = "tester"
TEST_EMAIL = "tester@example.com"


class FakeChatClient:
    """Mimics ``client.chat.completions.create`` and records every request."""

    def __init__(self, content: Optional[str] = None, error: Optional[Exception] = None):
        self.content = content
        self.error = error
        self.calls: list[dict] = []
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    @classmethod
    def returning_json(cls, payload: Any) -> "FakeChatClient":
        return cls(content=json.dumps(payload, ensure_ascii=False))

    def _create(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])

    @property
    def user_inputs(self) -> list[str]:
        return [call["messages"][1]["content"] for call in self.calls]


class RecordingTransport:
    """Mail transport that keeps sent messages in memory."""

    def __init__(self) -> None:
        self.sent: list[dict] = []

    def send(self, from_email: str, to_email: str, subject: str, html: str) -> None:
        self.sent.append({"from": from_email, "to": to_email, "subject": subject, "html": html})


class FailingTransport:
    def send(self, from_email: str, to_email: str, subject: str, html: str) -> None:
        raise ConnectionError("SMTP server unreachable")


class FakeRedis:
    """Subset of redis.asyncio.Redis used by the session helpers."""

    def __init__(self) -> None:
        self.store: dict[str, dict] = {}

    async def hset(self, key, field=None, value=None, mapping=None):
        bucket = self.store.setdefault(key, {})
        if mapping:
            bucket.update(mapping)
        if field is not None:
            bucket[field] = value
        return 1

    async def hgetall(self, key):
        return dict(self.store.get(key, {}))

    async def expire(self, key, ttl):
        return key in self.store

    async def delete(self, key):
        return 1 if self.store.pop(key, None) is not None else 0

    async def ping(self):
        return True


@pytest.fixture
def session_factory(tmp_path) -> Generator[sessionmaker, None, None]:
    """Transient SQLite DB with all tables and one seeded user."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'journey.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    session = factory()
    session.add(User(id=TEST_USER, email=TEST_EMAIL, password_hash="x"))
    session.commit()
    session.close()

    yield factory
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture(autouse=True)
def disable_rate_limit():
    limiter.enabled = False
    yield
    limiter.enabled = True
