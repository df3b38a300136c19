"""ログインユーザー作成・更新スクリプト

python -m journey.create_user <user_id> <password> [--email addr]
"""
import argparse

from journey.core.database import SessionLocal
from journey.services.auth_service import upsert_user


def main(argv=None):
    parser = argparse.ArgumentParser(prog="python -m journey.create_user")
    parser.add_argument("user_id")
    parser.add_argument("password")
    parser.add_argument("--email", default=None)
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        user = upsert_user(db, args.user_id, args.password, email=args.email)
        print(f"ユーザー登録完了: user_id={user.id}, email={user.email}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
