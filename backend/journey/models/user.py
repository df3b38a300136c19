from sqlalchemy import Column, String, DateTime
from journey.core.clock import now_local
from journey.core.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String(64), primary_key=True, comment="ログインID")
    email = Column(String(255), nullable=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime, nullable=False, default=now_local)
