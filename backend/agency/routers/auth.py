import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.orm import Session

from ..config import settings
from ..core.cookies import clear_session_cookie, set_session_cookie
from ..core.security import check_passcode, create_session_token
from ..database import get_db
from ..deps import get_optional_user
from ..models.user import User, Role
from ..schemas.auth import AdminLoginIn, UserOut
from ..schemas.common import SuccessOut
from ..services.users import upsert_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/auth.adminLogin", response_model=SuccessOut)
def admin_login(
    payload: AdminLoginIn,
    request: Request,
    response: Response,
    db: Session | None = Depends(get_db),
):
    if not check_passcode(payload.passcode):
        logger.warning("Login admin rifiutato (passcode errato) da %s", request.client.host if request.client else "?")
        raise HTTPException(status_code=401, detail="Passcode non valido")

    user = upsert_user(
        db,
        settings.OWNER_OPEN_ID,
        name="Admin",
        login_method="passcode",
        role=Role.ADMIN,
    )
    token = create_session_token(user.open_id, user.name or "Admin")
    set_session_cookie(response, request, token)
    return SuccessOut()


@router.get("/auth.me", response_model=Optional[UserOut])
def me(user: User | None = Depends(get_optional_user)):
    return user


@router.post("/auth.logout", response_model=SuccessOut)
def logout(request: Request, response: Response):
    clear_session_cookie(response, request)
    return SuccessOut()
