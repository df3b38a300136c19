from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from journey.core.clock import now_local
from journey.core.database import Base


class Translation(Base):
    __tablename__ = "translations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    original_text = Column(Text, nullable=False)
    japanese = Column(Text, nullable=True)
    english = Column(Text, nullable=True)
    romaji = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_local, index=True, comment="TIMEZONE基準")
