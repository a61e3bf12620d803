from datetime import datetime
import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from ..config import settings
from ..core.errors import InvalidInput
from ..database import commit, require_store, upsert
from ..models.user import User, Role

logger = logging.getLogger(__name__)

_UNSET = object()


def get_user_by_open_id(db: Session | None, open_id: str) -> User | None:
    if db is None:
        return None
    return db.query(User).filter(User.open_id == open_id).first()


def upsert_user(
    db: Session | None,
    open_id: str,
    *,
    name=_UNSET,
    email=_UNSET,
    login_method=_UNSET,
    role: Role | None = None,
    last_signed_in: datetime | None = None,
) -> User:
    """
    Inserisce o aggiorna l'utente per open-id. Solo i campi passati vengono
    sovrascritti; l'open-id del proprietario diventa admin se il ruolo non è esplicito.
    """
    if not open_id:
        raise InvalidInput("openId obbligatorio")
    db = require_store(db)

    values: dict = {"open_id": open_id}
    update: dict = {}
    for field, value in (("name", name), ("email", email), ("login_method", login_method)):
        if value is not _UNSET:
            values[field] = value
            update[field] = value

    if role is None and open_id == settings.OWNER_OPEN_ID:
        role = Role.ADMIN
    if role is not None:
        values["role"] = role
        update["role"] = role

    signed_in = last_signed_in or datetime.now()
    values["last_signed_in"] = signed_in
    update["last_signed_in"] = signed_in
    update["updated_at"] = func.now()

    upsert(db, User, values, conflict_on=["open_id"], update=update)
    commit(db)
    # la riga è stata scritta in SQL: niente valori vecchi dalla identity map
    db.expire_all()
    user = get_user_by_open_id(db, open_id)
    logger.info("Utente %s aggiornato (ruolo=%s)", open_id, user.role.value)
    return user
