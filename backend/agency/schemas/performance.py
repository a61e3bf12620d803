from __future__ import annotations
from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from ..models.performance import PerformanceStatus
from .common import CamelModel, to_local_naive


class PendingPerformanceIn(CamelModel):
    """Richiesta pubblica: lo stato non si sceglie, è sempre 'pending'."""
    artist_id: int
    title: str = Field(max_length=255)
    performance_date: datetime
    notes: Optional[str] = None

    @field_validator("performance_date")
    @classmethod
    def _local(cls, v):
        return to_local_naive(v)


class PerformanceIn(PendingPerformanceIn):
    status: PerformanceStatus = PerformanceStatus.SCHEDULED


class PerformanceUpdate(CamelModel):
    id: int
    artist_id: Optional[int] = None
    title: Optional[str] = Field(None, max_length=255)
    performance_date: Optional[datetime] = None
    status: Optional[PerformanceStatus] = None
    notes: Optional[str] = None

    @field_validator("performance_date")
    @classmethod
    def _local(cls, v):
        return to_local_naive(v) if v is not None else v

    @field_validator("artist_id", "title", "performance_date", "status")
    @classmethod
    def _not_null(cls, v):
        if v is None:
            raise ValueError("campo obbligatorio: non può essere nullo")
        return v


class PerformanceOut(CamelModel):
    id: int
    artist_id: int
    title: str
    performance_date: datetime
    status: PerformanceStatus
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class CalendarPerformanceOut(PerformanceOut):
    """Riga del calendario mensile, con i campi dell'artista per la UI."""
    artist_name: Optional[str] = None
    artist_genres: list[str] = Field(default_factory=list)
    artist_instruments: Optional[str] = None
    artist_grade: Optional[str] = None
