import hmac
import logging
from datetime import datetime, timedelta, timezone

from jose import jwt, JWTError

from ..config import settings

logger = logging.getLogger(__name__)

ALGO = "HS256"


def check_passcode(candidate: str) -> bool:
    """Confronto a tempo costante col passcode admin configurato."""
    expected = settings.ADMIN_PASSCODE
    if not expected:
        logger.warning("ADMIN_PASSCODE non impostato: login admin disabilitato")
        return False
    return hmac.compare_digest(candidate.encode("utf-8"), expected.encode("utf-8"))


def create_session_token(open_id: str, name: str, expires_in: timedelta | None = None) -> str:
    exp = datetime.now(timezone.utc) + (expires_in or timedelta(days=settings.SESSION_EXPIRES_DAYS))
    payload = {
        "openId": open_id,
        "appId": settings.APP_ID,
        "name": name,
        "exp": exp,
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGO)


def verify_session_token(token: str | None) -> dict | None:
    """
    Ritorna {openId, appId, name} se il token è valido (firma, scadenza, app),
    altrimenti None. Il ruolo NON viene dal token: lo decide la riga utente.
    """
    if not token:
        return None
    try:
        data = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGO])
    except JWTError as e:
        logger.info("Sessione non valida: %s", e.__class__.__name__)
        return None

    claims = {k: data.get(k) for k in ("openId", "appId", "name")}
    if not all(isinstance(v, str) and v for v in claims.values()):
        logger.info("Sessione senza campi obbligatori")
        return None
    if claims["appId"] != settings.APP_ID:
        logger.info("Sessione emessa per un'altra app")
        return None
    return claims
