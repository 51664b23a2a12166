"""Admin session routes: login, logout, session check."""
import hmac
import logging
from typing import Any, Optional
from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse

from app.config import settings
from app.dependencies import require_admin
from app.schemas.admin import LoginOut, LoginRequest, SessionOut

logger = logging.getLogger(__name__)
router = APIRouter()


def _credentials_match(username: Any, password: Any) -> bool:
    if not isinstance(username, str) or not isinstance(password, str):
        return False
    user_ok = hmac.compare_digest(username.encode("utf-8"), settings.ADMIN_USERNAME.encode("utf-8"))
    pass_ok = hmac.compare_digest(password.encode("utf-8"), settings.ADMIN_PASSWORD.encode("utf-8"))
    return user_ok and pass_ok


@router.post("/login", response_model=LoginOut)
def login(request: Request, payload: Optional[LoginRequest] = None):
    """Mismatched credentials answer success=false, never an error status."""
    payload = payload or LoginRequest()
    if _credentials_match(payload.username, payload.password):
        request.session["is_admin"] = True
        logger.info("Admin login succeeded for %s", payload.username)
        return LoginOut(success=True)
    logger.warning("Admin login failed for %r", payload.username)
    return LoginOut(success=False)


@router.get("/logout", dependencies=[Depends(require_admin)])
def logout(request: Request):
    request.session.clear()
    logger.info("Admin logged out")
    return RedirectResponse(url=settings.ADMIN_LOGIN_URL, status_code=302)


@router.get("/session", response_model=SessionOut)
def session_status(request: Request):
    return SessionOut(authenticated=bool(request.session.get("is_admin")))
