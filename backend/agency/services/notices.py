from sqlalchemy.orm import Session

from ..core.errors import NotFound
from ..database import commit, require_store
from ..models.notice import Notice


def create_notice(db: Session | None, title: str, content: str) -> Notice:
    db = require_store(db)
    notice = Notice(title=title, content=content)
    db.add(notice)
    commit(db)
    db.refresh(notice)
    return notice


def list_notices(db: Session | None) -> list[Notice]:
    if db is None:
        return []
    # più recente per primo; a parità di timestamp decide l'id
    return db.query(Notice).order_by(Notice.created_at.desc(), Notice.id.desc()).all()


def get_latest_notice(db: Session | None) -> Notice | None:
    notices = list_notices(db)
    return notices[0] if notices else None


def update_notice(db: Session | None, notice_id: int, fields: dict) -> Notice:
    db = require_store(db)
    notice = db.get(Notice, notice_id)
    if not notice:
        raise NotFound("Avviso", notice_id)
    for key, value in fields.items():
        setattr(notice, key, value)
    commit(db)
    db.refresh(notice)
    return notice


def delete_notice(db: Session | None, notice_id: int) -> None:
    db = require_store(db)
    notice = db.get(Notice, notice_id)
    if not notice:
        raise NotFound("Avviso", notice_id)
    db.delete(notice)
    commit(db)
