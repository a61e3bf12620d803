import logging
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from ..core.errors import InvalidInput, NotFound
from ..database import commit, require_store
from ..models.artist import Artist
from ..models.performance import Performance, PerformanceStatus

logger = logging.getLogger(__name__)


def month_bounds(year: int, month: int) -> tuple[datetime, datetime]:
    """[primo giorno 00:00, primo giorno del mese dopo 00:00) in ora locale."""
    if not 1 <= month <= 12:
        raise InvalidInput("Mese non valido")
    start = datetime(year, month, 1)
    end = datetime(year + 1, 1, 1) if month == 12 else datetime(year, month + 1, 1)
    return start, end


def create_performance(db: Session | None, fields: dict, status: PerformanceStatus) -> Performance:
    db = require_store(db)
    perf = Performance(**fields, status=status)
    db.add(perf)
    commit(db)
    db.refresh(perf)
    logger.info("Performance creata id=%s artista=%s stato=%s", perf.id, perf.artist_id, status.value)
    return perf


def get_performance(db: Session | None, performance_id: int) -> Performance | None:
    if db is None:
        return None
    return db.get(Performance, performance_id)


def list_performances(
    db: Session | None,
    start: datetime | None = None,
    end: datetime | None = None,
) -> list[Performance]:
    if db is None:
        return []
    q = db.query(Performance)
    # il filtro si applica solo con entrambi gli estremi
    if start and end:
        q = q.filter(Performance.performance_date.between(start, end))
    return q.order_by(Performance.performance_date.asc(), Performance.id.asc()).all()


def update_performance(db: Session | None, performance_id: int, fields: dict) -> Performance:
    db = require_store(db)
    perf = db.get(Performance, performance_id)
    if not perf:
        raise NotFound("Performance", performance_id)
    for key, value in fields.items():
        setattr(perf, key, value)
    commit(db)
    db.refresh(perf)
    return perf


def confirm_performance(db: Session | None, performance_id: int) -> Performance:
    # solo la riga indicata: le altre richieste pending dello stesso giorno restano
    return update_performance(db, performance_id, {"status": PerformanceStatus.CONFIRMED})


def delete_performance(db: Session | None, performance_id: int) -> None:
    db = require_store(db)
    perf = db.get(Performance, performance_id)
    if not perf:
        raise NotFound("Performance", performance_id)
    db.delete(perf)
    commit(db)


def get_weekly_performances(db: Session | None, now: datetime | None = None) -> list[Performance]:
    now = now or datetime.now()
    return list_performances(db, now, now + timedelta(days=7))


def get_monthly_performances(db: Session | None, year: int, month: int) -> list[dict]:
    start, end = month_bounds(year, month)
    if db is None:
        return []

    rows = (
        db.query(Performance, Artist)
        .outerjoin(Artist, Performance.artist_id == Artist.id)
        .filter(Performance.performance_date >= start, Performance.performance_date < end)
        .order_by(Performance.performance_date.asc(), Performance.id.asc())
        .all()
    )
    return [_calendar_row(p, a) for p, a in rows]


def _calendar_row(p: Performance, a: Artist | None) -> dict:
    return {
        "id": p.id,
        "artist_id": p.artist_id,
        "title": p.title,
        "performance_date": p.performance_date,
        "status": p.status,
        "notes": p.notes,
        "created_at": p.created_at,
        "updated_at": p.updated_at,
        "artist_name": a.name if a else None,
        "artist_genres": a.genres if a else [],
        "artist_instruments": a.instruments if a else None,
        "artist_grade": a.grade if a else None,
    }
