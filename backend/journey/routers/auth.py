"""認証ルーター: ログイン、ログアウト、ログイン状態確認"""
from fastapi import APIRouter, Depends, HTTPException, Response, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from journey.core.config import settings
from journey.core.database import get_db
from journey.core.redis import get_redis
from journey.core.rate_limit import limiter, LOGIN_RATE_LIMIT
from journey.core.session import SESSION_COOKIE, create_session, destroy_session
from journey.schemas.auth import LoginRequest, AuthResponse
from journey.services import auth_service
from journey.routers.deps import get_current_user_id
from journey.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=AuthResponse)
@limiter.limit(LOGIN_RATE_LIMIT)
async def login(
    request: Request,
    req: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    r=Depends(get_redis),
):
    """ログイン"""
    user = auth_service.authenticate(db, req.username, req.password)
    if user is None:
        logger.info(f"ログイン失敗: user_id={req.username}")
        raise HTTPException(status_code=401, detail="Invalid credentials")

    # 固定化対策: 毎回新規セッション
    session_id = await create_session(r, user.id)
    response.set_cookie(
        key=SESSION_COOKIE,
        value=session_id,
        httponly=True,
        secure=not settings.DEBUG,
        samesite="lax",
        max_age=settings.SESSION_TIMEOUT_MINUTES * 60,
    )
    return AuthResponse(success=True)


@router.get("/check")
async def check(user_id=Depends(get_current_user_id)):
    """ログイン状態確認"""
    if user_id:
        return {"authenticated": True}
    return JSONResponse(status_code=401, content={"authenticated": False})


@router.post("/logout", response_model=AuthResponse)
async def logout(request: Request, response: Response, r=Depends(get_redis)):
    """ログアウト"""
    session_id = request.cookies.get(SESSION_COOKIE)
    if session_id:
        await destroy_session(r, session_id)
    response.delete_cookie(SESSION_COOKIE)
    return AuthResponse(success=True)
