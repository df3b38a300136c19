"""共通依存関数: セッション認証"""
from typing import Optional
from fastapi import Request, HTTPException, Depends

from journey.core.redis import get_redis
from journey.core.session import SESSION_COOKIE, get_session


async def get_current_user_id(request: Request, r=Depends(get_redis)) -> Optional[str]:
    """Cookie → Redis でユーザーIDを取得。未ログインならNone"""
    session_id = request.cookies.get(SESSION_COOKIE)
    if not session_id:
        return None

    session_data = await get_session(r, session_id)
    if not session_data:
        return None
    return session_data.get("user_id") or None


async def require_login(user_id: Optional[str] = Depends(get_current_user_id)) -> str:
    """ログイン必須。未ログインなら401"""
    if user_id is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return user_id
