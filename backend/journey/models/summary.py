from sqlalchemy import Column, Integer, String, Text, DateTime, JSON, ForeignKey
from journey.core.clock import now_local
from journey.core.database import Base


class Summary(Base):
    """日次学習サマリー

    (user_id, 日付) の一意制約は張っていない。同日判定は呼び出し側で行う。
    """
    __tablename__ = "summaries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(DateTime, nullable=False, default=now_local, index=True, comment="TIMEZONE基準")
    content = Column(Text, nullable=False, comment="Markdown本文")
    vocab = Column(JSON, nullable=True, comment="[{word, reading, meaning}] または文字列のリスト")
    created_at = Column(DateTime, nullable=False, default=now_local)
