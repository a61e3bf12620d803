from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..deps import auth_admin
from ..models.user import User
from ..schemas.common import IdIn, SuccessOut
from ..schemas.notice import NoticeIn, NoticeOut, NoticeUpdate
from ..services import notices as svc

router = APIRouter(prefix="/api", tags=["notice"])


@router.post("/notice.create", response_model=NoticeOut)
def notice_create(payload: NoticeIn, db: Session | None = Depends(get_db), me: User = Depends(auth_admin)):
    return svc.create_notice(db, payload.title, payload.content)


@router.get("/notice.list", response_model=List[NoticeOut])
def notice_list(db: Session | None = Depends(get_db)):
    return svc.list_notices(db)


@router.get("/notice.getLatest", response_model=Optional[NoticeOut])
def notice_latest(db: Session | None = Depends(get_db)):
    return svc.get_latest_notice(db)


@router.post("/notice.update", response_model=SuccessOut)
def notice_update(payload: NoticeUpdate, db: Session | None = Depends(get_db), me: User = Depends(auth_admin)):
    svc.update_notice(db, payload.id, payload.model_dump(exclude_unset=True, exclude={"id"}, exclude_none=True))
    return SuccessOut()


@router.post("/notice.delete", response_model=SuccessOut)
def notice_delete(payload: IdIn, db: Session | None = Depends(get_db), me: User = Depends(auth_admin)):
    svc.delete_notice(db, payload.id)
    return SuccessOut()
