# 全モデルをインポート (Alembic autogenerate用)
from journey.models.user import User
from journey.models.translation import Translation
from journey.models.summary import Summary

__all__ = [
    "User",
    "Translation",
    "Summary",
]
