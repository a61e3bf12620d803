from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..deps import auth_admin
from ..models.user import User
from ..schemas.common import SuccessOut
from ..schemas.settings import SettingUpdate
from ..services.settings_store import get_setting, set_setting

router = APIRouter(prefix="/api", tags=["settings"])


@router.get("/settings.get", response_model=Optional[str])
def settings_get(
    key: str = Query(..., min_length=1),
    db: Session | None = Depends(get_db),
    me: User = Depends(auth_admin),
):
    return get_setting(db, key)


@router.post("/settings.update", response_model=SuccessOut)
def settings_update(payload: SettingUpdate, db: Session | None = Depends(get_db), me: User = Depends(auth_admin)):
    set_setting(db, payload.key, payload.value)
    return SuccessOut()
