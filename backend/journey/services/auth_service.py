"""認証ビジネスロジック"""
from typing import Optional
import bcrypt
from sqlalchemy.orm import Session

from journey.models.user import User
from journey.core.logging import get_logger

logger = get_logger(__name__)


def hash_password(password: str) -> str:
    """パスワードをbcryptでハッシュ化"""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """パスワードを検証"""
    return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))


def get_user_by_id(db: Session, user_id: str) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def authenticate(db: Session, username: str, password: str) -> Optional[User]:
    """ID・パスワードが一致すればユーザーを返す"""
    user = get_user_by_id(db, username)
    if not user or not verify_password(password, user.password_hash):
        return None
    return user


def upsert_user(db: Session, user_id: str, password: str, email: str | None = None) -> User:
    """ユーザー作成、既存ならパスワード・メールを更新"""
    user = get_user_by_id(db, user_id)
    if user is None:
        user = User(id=user_id)
        db.add(user)
        logger.info(f"ユーザー作成: user_id={user_id}")
    else:
        logger.info(f"ユーザー更新: user_id={user_id}")
    user.password_hash = hash_password(password)
    if email is not None:
        user.email = email
    db.commit()
    db.refresh(user)
    return user
