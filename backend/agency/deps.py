from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from .core.cookies import COOKIE_NAME
from .core.security import verify_session_token
from .database import get_db
from .models.user import User, Role
from .services.users import get_user_by_open_id


def get_optional_user(request: Request, db: Session | None = Depends(get_db)) -> User | None:
    """
    Utente della richiesta o None. Il token da solo non basta: serve la riga
    utente, ed è il suo ruolo (letto adesso) che conta.
    """
    session = verify_session_token(request.cookies.get(COOKIE_NAME))
    if not session:
        return None
    return get_user_by_open_id(db, session["openId"])


def get_current_user(user: User | None = Depends(get_optional_user)) -> User:
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Sessione non valida")
    return user


def auth_admin(user: User = Depends(get_current_user)) -> User:
    if user.role != Role.ADMIN:
        raise HTTPException(status_code=403, detail="Solo admin")
    return user
