import logging
from datetime import datetime

from sqlalchemy.orm import Session

from ..core.errors import InvalidInput, NotFound
from ..database import commit, require_store
from ..models.artist import Artist
from ..models.performance import Performance, PerformanceStatus

logger = logging.getLogger(__name__)

PUBLIC_SEARCH_LIMIT = 10


def _check_required(fields: dict, partial: bool) -> None:
    # nome e almeno un genere: obbligatori per salvare
    if not partial or "name" in fields:
        if not (fields.get("name") or "").strip():
            raise InvalidInput("Il nome dell'artista è obbligatorio")
    if not partial or "genres" in fields:
        if not fields.get("genres"):
            raise InvalidInput("Serve almeno un genere")


def _apply(artist: Artist, fields: dict) -> None:
    for key, value in fields.items():
        # genres / preferred_days passano dai setter (lista -> testo)
        setattr(artist, key, value)


def create_artist(db: Session | None, fields: dict) -> Artist:
    _check_required(fields, partial=False)
    db = require_store(db)

    artist = Artist(is_favorite=False, member_count=1)
    _apply(artist, fields)
    db.add(artist)
    commit(db)
    db.refresh(artist)
    logger.info("Artista creato id=%s", artist.id)
    return artist


def get_artists(db: Session | None, search: str | None = None, genre: str | None = None) -> list[Artist]:
    if db is None:
        return []

    q = db.query(Artist)
    if search:
        q = q.filter(Artist.name.ilike(f"%{_escape_like(search)}%", escape="\\"))
    if genre:
        # prefiltro in SQL, poi appartenenza esatta alla lista dei generi
        q = q.filter(Artist.genre.contains(genre, autoescape=True))

    rows = q.order_by(Artist.name.asc(), Artist.id.asc()).all()
    if genre:
        rows = [a for a in rows if genre in a.genres]
    return rows


def search_public_artists(db: Session | None, name: str):
    """Solo id, nome e strumenti: niente contatti per chi non è autenticato."""
    if not name:
        raise InvalidInput("Serve almeno un carattere")
    if db is None:
        return []
    return (
        db.query(Artist.id, Artist.name, Artist.instruments)
        .filter(Artist.name.ilike(f"%{_escape_like(name)}%", escape="\\"))
        .order_by(Artist.name.asc(), Artist.id.asc())
        .limit(PUBLIC_SEARCH_LIMIT)
        .all()
    )


def get_artist(db: Session | None, artist_id: int) -> Artist | None:
    if db is None:
        return None
    return db.get(Artist, artist_id)


def update_artist(db: Session | None, artist_id: int, fields: dict) -> Artist:
    _check_required(fields, partial=True)
    db = require_store(db)

    artist = db.get(Artist, artist_id)
    if not artist:
        raise NotFound("Artista", artist_id)
    _apply(artist, fields)
    commit(db)
    db.refresh(artist)
    return artist


def delete_artist(db: Session | None, artist_id: int) -> None:
    db = require_store(db)
    artist = db.get(Artist, artist_id)
    if not artist:
        raise NotFound("Artista", artist_id)
    # le performance collegate se ne vanno con l'artista (cascade)
    db.delete(artist)
    commit(db)
    logger.info("Artista eliminato id=%s", artist_id)


def get_artist_stats(db: Session | None, artist_id: int, now: datetime | None = None) -> dict:
    stats = {"total_performances": 0, "completed_performances": 0, "upcoming_performances": 0}
    if db is None:
        return stats
    if db.get(Artist, artist_id) is None:
        raise NotFound("Artista", artist_id)

    now = now or datetime.now()
    perfs = db.query(Performance).filter(Performance.artist_id == artist_id).all()
    stats["total_performances"] = len(perfs)
    stats["completed_performances"] = sum(1 for p in perfs if p.status == PerformanceStatus.COMPLETED)
    stats["upcoming_performances"] = sum(
        1 for p in perfs
        if p.performance_date > now and p.status != PerformanceStatus.CANCELLED
    )
    return stats


def _escape_like(s: str) -> str:
    return s.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
