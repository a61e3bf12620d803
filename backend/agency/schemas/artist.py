from __future__ import annotations
from datetime import datetime
from enum import Enum
from typing import Literal, Optional

from pydantic import Field, field_validator, model_validator

from .common import CamelModel

Grade = Literal["S", "A", "B", "C"]


class Weekday(str, Enum):
    MON = "mon"
    TUE = "tue"
    WED = "wed"
    THU = "thu"
    FRI = "fri"
    SAT = "sat"
    SUN = "sun"


# il vecchio frontend salvava i giorni in coreano (월,화,...)
LEGACY_DAYS = {
    "월": "mon",
    "화": "tue",
    "수": "wed",
    "목": "thu",
    "금": "fri",
    "토": "sat",
    "일": "sun",
}


def normalize_days(values):
    if values is None:
        return None
    if isinstance(values, str):
        values = values.split(",")
    return [LEGACY_DAYS.get(str(d).strip(), str(d).strip()) for d in values if str(d).strip()]


def _strip_name(v):
    return v.strip() if isinstance(v, str) else v


def _legacy_genre(data):
    """Accetta anche il vecchio campo 'genre' ("Rock,Jazz") al posto di 'genres'."""
    if isinstance(data, dict) and "genres" not in data and "genre" in data:
        data = dict(data)
        raw = data.pop("genre")
        data["genres"] = [g for g in str(raw or "").split(",") if g.strip()]
    return data


def _blank_grade(data):
    # i form inviano "" quando il grado non è scelto
    if isinstance(data, dict) and data.get("grade") == "":
        data = dict(data)
        data["grade"] = None
    return data


def _clean_genres(values: list[str] | None) -> list[str] | None:
    if values is None:
        return None
    out: list[str] = []
    for g in values:
        g = (g or "").strip()
        if not g:
            raise ValueError("genere vuoto")
        if "," in g:
            raise ValueError("il genere non può contenere virgole")
        if g not in out:
            out.append(g)
    return out


class ArtistIn(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    genres: list[str] = Field(min_length=1)
    phone: Optional[str] = Field(None, max_length=20)
    instagram: Optional[str] = Field(None, max_length=255)
    grade: Optional[Grade] = None
    available_time: Optional[str] = Field(None, max_length=255)
    preferred_days: list[Weekday] = Field(default_factory=list)
    instruments: Optional[str] = Field(None, max_length=255)
    member_count: int = Field(1, ge=1)
    notes: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _compat(cls, data):
        return _blank_grade(_legacy_genre(data))

    @field_validator("genres")
    @classmethod
    def _genres(cls, v):
        return _clean_genres(v)

    @field_validator("name")
    @classmethod
    def _name(cls, v):
        return _strip_name(v)

    @field_validator("preferred_days", mode="before")
    @classmethod
    def _days(cls, v):
        return normalize_days(v)


class ArtistUpdate(CamelModel):
    """Aggiornamento parziale: solo i campi inviati vengono scritti."""
    id: int
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    genres: Optional[list[str]] = Field(None, min_length=1)
    phone: Optional[str] = Field(None, max_length=20)
    instagram: Optional[str] = Field(None, max_length=255)
    grade: Optional[Grade] = None
    available_time: Optional[str] = Field(None, max_length=255)
    preferred_days: Optional[list[Weekday]] = None
    instruments: Optional[str] = Field(None, max_length=255)
    member_count: Optional[int] = Field(None, ge=1)
    notes: Optional[str] = None
    is_favorite: Optional[bool] = None

    @model_validator(mode="before")
    @classmethod
    def _compat(cls, data):
        return _blank_grade(_legacy_genre(data))

    @field_validator("genres")
    @classmethod
    def _genres(cls, v):
        return _clean_genres(v)

    @field_validator("name")
    @classmethod
    def _name(cls, v):
        return _strip_name(v)

    @field_validator("preferred_days", mode="before")
    @classmethod
    def _days(cls, v):
        return normalize_days(v)

    @field_validator("name", "member_count", "is_favorite")
    @classmethod
    def _not_null(cls, v):
        if v is None:
            raise ValueError("campo obbligatorio: non può essere nullo")
        return v


class ArtistOut(CamelModel):
    id: int
    name: str
    genre: str
    genres: list[str]
    phone: Optional[str] = None
    instagram: Optional[str] = None
    grade: Optional[str] = None
    available_time: Optional[str] = None
    preferred_days: list[str] = Field(default_factory=list)
    instruments: Optional[str] = None
    member_count: int = 1
    notes: Optional[str] = None
    is_favorite: bool = False
    created_at: datetime
    updated_at: datetime

    @field_validator("preferred_days", mode="before")
    @classmethod
    def _days(cls, v):
        return normalize_days(v) or []


class ArtistPublicOut(CamelModel):
    """Ricerca pubblica: niente telefono/instagram."""
    id: int
    name: str
    instruments: Optional[str] = None


class ArtistStatsOut(CamelModel):
    total_performances: int
    completed_performances: int
    upcoming_performances: int
