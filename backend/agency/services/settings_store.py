from sqlalchemy import func
from sqlalchemy.orm import Session

from ..database import commit, require_store, upsert
from ..models.setting import Setting


def get_setting(db: Session | None, key: str) -> str | None:
    if db is None:
        return None
    row = db.query(Setting).filter(Setting.key == key).first()
    return row.value if row else None


def set_setting(db: Session | None, key: str, value: str) -> None:
    """Upsert sulla chiave unica: una sola riga per chiave."""
    db = require_store(db)
    upsert(
        db,
        Setting,
        {"key": key, "value": value},
        conflict_on=["key"],
        update={"value": value, "updated_at": func.now()},
    )
    commit(db)
