"""
Client per le procedure /api/<gruppo>.<nome>.

Serve al flusso pubblico (cerca artista, chiedi più date in un colpo solo) e
agli script admin. Le query sono GET, le mutazioni POST con corpo JSON.
"""
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import date, datetime

import requests

logger = logging.getLogger(__name__)

DEFAULT_NOTES = "Richiesta diretta dell'artista"


class ProcedureError(Exception):
    def __init__(self, status: int, message: str, detail=None):
        super().__init__(f"[{status}] {message}")
        self.status = status
        self.message = message
        self.detail = detail


@dataclass
class BatchResult:
    succeeded: list = field(default_factory=list)  # performance create
    failed: list = field(default_factory=list)     # (data, errore)

    @property
    def success_count(self) -> int:
        return len(self.succeeded)

    @property
    def failure_count(self) -> int:
        return len(self.failed)

    def summary(self) -> str:
        return f"{self.success_count} succeeded, {self.failure_count} failed"


def _iso(value) -> str:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


class AgencyClient:
    def __init__(self, base_url: str, session=None, timeout: float = 15, session_factory=None):
        self.base_url = base_url.rstrip("/")
        # qualsiasi oggetto con get/post alla requests (anche un TestClient)
        self.session = session or requests.Session()
        self.timeout = timeout
        # una Session non va condivisa tra thread: ogni worker del batch se ne crea una
        self.session_factory = session_factory or requests.Session

    # -----------------------------
    # Chiamate di basso livello
    # -----------------------------
    def query(self, procedure: str, **params):
        params = {k: v for k, v in params.items() if v is not None}
        resp = self.session.get(f"{self.base_url}/api/{procedure}", params=params, timeout=self.timeout)
        return self._unwrap(resp)

    def mutate(self, procedure: str, payload: dict | None = None, session=None):
        resp = (session or self.session).post(f"{self.base_url}/api/{procedure}", json=payload or {}, timeout=self.timeout)
        return self._unwrap(resp)

    @staticmethod
    def _unwrap(resp):
        if resp.status_code >= 400:
            try:
                body = resp.json()
            except ValueError:
                body = {"detail": resp.text}
            detail = body.get("detail") if isinstance(body, dict) else body
            message = detail if isinstance(detail, str) else "Richiesta non valida"
            raise ProcedureError(resp.status_code, message, body)
        return resp.json()

    # -----------------------------
    # Flusso pubblico
    # -----------------------------
    def search_artists(self, name: str) -> list[dict]:
        return self.query("artist.searchPublic", name=name)

    def register_artist(self, **fields) -> dict:
        return self.mutate("artist.create", fields)

    def monthly(self, year: int, month: int) -> list[dict]:
        return self.query("performance.getMonthly", year=year, month=month)

    def latest_notice(self) -> dict | None:
        return self.query("notice.getLatest")

    def batch_apply(
        self,
        artist_id: int,
        dates,
        title: str,
        notes: str = DEFAULT_NOTES,
        max_workers: int = 1,
    ) -> BatchResult:
        """
        Una createPending per ogni data, indipendenti tra loro: nessuna
        transazione comune, i successi restano anche se altre falliscono.

        Con max_workers > 1 le chiamate partono in parallelo, ognuna sulla
        Session del proprio thread (presa da session_factory).
        """
        dates = list(dates)
        local = threading.local()
        opened = []
        lock = threading.Lock()

        def thread_session():
            s = getattr(local, "session", None)
            if s is None:
                s = local.session = self.session_factory()
                with lock:
                    opened.append(s)
            return s

        def apply_one(d, session=None):
            payload = {
                "artistId": artist_id,
                "title": title,
                "performanceDate": _iso(d),
                "notes": notes,
            }
            try:
                return d, self.mutate("performance.createPending", payload, session=session), None
            except (ProcedureError, requests.RequestException) as e:
                return d, None, e

        if max_workers <= 1 or len(dates) <= 1:
            outcomes = [apply_one(d) for d in dates]
        else:
            try:
                with ThreadPoolExecutor(max_workers=min(max_workers, len(dates))) as pool:
                    outcomes = list(pool.map(lambda d: apply_one(d, thread_session()), dates))
            finally:
                for s in opened:
                    close = getattr(s, "close", None)
                    if close is not None:
                        close()

        result = BatchResult()
        for d, created, err in outcomes:
            if err is None:
                result.succeeded.append(created)
            else:
                result.failed.append((d, err))

        if result.failed:
            logger.warning("Richieste date artista %s: %s", artist_id, result.summary())
        else:
            logger.info("Richieste date artista %s: %s", artist_id, result.summary())
        return result

    # -----------------------------
    # Admin
    # -----------------------------
    def admin_login(self, passcode: str) -> bool:
        return bool(self.mutate("auth.adminLogin", {"passcode": passcode}).get("success"))

    def logout(self) -> None:
        self.mutate("auth.logout")

    def me(self) -> dict | None:
        return self.query("auth.me")

    def reconcile_admin(self, cached_is_admin: bool) -> bool:
        """Il flag admin salvato in locale vale solo se il server lo conferma."""
        user = self.me()
        is_admin = bool(user) and user.get("role") == "admin"
        if cached_is_admin and not is_admin:
            logger.info("Flag admin locale non confermato dal server: declassato")
        return is_admin

    def toggle_favorite(self, artist: dict) -> bool:
        """
        Inverte isFavorite. Ritorna il nuovo valore; se il server rifiuta,
        l'artista torna al valore precedente e l'errore risale.
        """
        previous = bool(artist.get("isFavorite"))
        artist["isFavorite"] = not previous
        try:
            self.mutate("artist.update", {"id": artist["id"], "isFavorite": not previous})
        except (ProcedureError, requests.RequestException):
            artist["isFavorite"] = previous
            raise
        return artist["isFavorite"]
