from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..deps import auth_admin
from ..models.performance import PerformanceStatus
from ..models.user import User
from ..schemas.common import IdIn, SuccessOut, to_local_naive
from ..schemas.performance import (
    CalendarPerformanceOut,
    PendingPerformanceIn,
    PerformanceIn,
    PerformanceOut,
    PerformanceUpdate,
)
from ..services import performances as svc

router = APIRouter(prefix="/api", tags=["performance"])


@router.get("/performance.list", response_model=List[PerformanceOut])
def performance_list(
    start_date: datetime | None = Query(None, alias="startDate"),
    end_date: datetime | None = Query(None, alias="endDate"),
    db: Session | None = Depends(get_db),
    me: User = Depends(auth_admin),
):
    start = to_local_naive(start_date) if start_date else None
    end = to_local_naive(end_date) if end_date else None
    return svc.list_performances(db, start, end)


# ADMIN: inserimento diretto (default "scheduled")
@router.post("/performance.create", response_model=PerformanceOut)
def performance_create(
    payload: PerformanceIn,
    db: Session | None = Depends(get_db),
    me: User = Depends(auth_admin),
):
    fields = payload.model_dump(exclude={"status"})
    return svc.create_performance(db, fields, payload.status)


# PUBBLICO: richiesta di data da parte dell'artista, sempre "pending"
@router.post("/performance.createPending", response_model=PerformanceOut)
def performance_create_pending(payload: PendingPerformanceIn, db: Session | None = Depends(get_db)):
    return svc.create_performance(db, payload.model_dump(), PerformanceStatus.PENDING)


@router.get("/performance.getById", response_model=PerformanceOut)
def performance_get(id: int, db: Session | None = Depends(get_db), me: User = Depends(auth_admin)):
    perf = svc.get_performance(db, id)
    if not perf:
        raise HTTPException(404, "Performance non trovata")
    return perf


@router.post("/performance.update", response_model=SuccessOut)
def performance_update(
    payload: PerformanceUpdate,
    db: Session | None = Depends(get_db),
    me: User = Depends(auth_admin),
):
    svc.update_performance(db, payload.id, payload.model_dump(exclude_unset=True, exclude={"id"}))
    return SuccessOut()


@router.post("/performance.confirm", response_model=SuccessOut)
def performance_confirm(payload: IdIn, db: Session | None = Depends(get_db), me: User = Depends(auth_admin)):
    svc.confirm_performance(db, payload.id)
    return SuccessOut()


@router.post("/performance.delete", response_model=SuccessOut)
def performance_delete(payload: IdIn, db: Session | None = Depends(get_db), me: User = Depends(auth_admin)):
    svc.delete_performance(db, payload.id)
    return SuccessOut()


@router.get("/performance.getWeekly", response_model=List[PerformanceOut])
def performance_weekly(db: Session | None = Depends(get_db), me: User = Depends(auth_admin)):
    return svc.get_weekly_performances(db)


# pubblico: il calendario del mese si vede anche senza login
@router.get("/performance.getMonthly", response_model=List[CalendarPerformanceOut])
def performance_monthly(
    year: int = Query(..., ge=1970, le=9999),
    month: int = Query(..., ge=1, le=12),
    db: Session | None = Depends(get_db),
):
    return svc.get_monthly_performances(db, year, month)
