from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..deps import auth_admin
from ..models.user import User
from ..schemas.artist import ArtistIn, ArtistOut, ArtistPublicOut, ArtistStatsOut, ArtistUpdate
from ..schemas.common import IdIn, SuccessOut
from ..services import artists as svc

router = APIRouter(prefix="/api", tags=["artist"])


@router.get("/artist.list", response_model=List[ArtistOut])
def artist_list(
    search: str | None = None,
    genre: str | None = None,
    db: Session | None = Depends(get_db),
    me: User = Depends(auth_admin),
):
    return svc.get_artists(db, search=search, genre=genre)


# pubblico: il visitatore cerca sé stesso per nome prima di chiedere le date
@router.get("/artist.searchPublic", response_model=List[ArtistPublicOut])
def artist_search_public(
    name: str = Query(..., min_length=1),
    db: Session | None = Depends(get_db),
):
    return svc.search_public_artists(db, name)


# pubblico: auto-registrazione degli artisti, senza login
@router.post("/artist.create", response_model=ArtistOut)
def artist_create(payload: ArtistIn, db: Session | None = Depends(get_db)):
    return svc.create_artist(db, payload.model_dump())


@router.get("/artist.getById", response_model=ArtistOut)
def artist_get(id: int, db: Session | None = Depends(get_db), me: User = Depends(auth_admin)):
    artist = svc.get_artist(db, id)
    if not artist:
        raise HTTPException(404, "Artista non trovato")
    return artist


@router.post("/artist.update", response_model=SuccessOut)
def artist_update(
    payload: ArtistUpdate,
    db: Session | None = Depends(get_db),
    me: User = Depends(auth_admin),
):
    fields = payload.model_dump(exclude_unset=True, exclude={"id"})
    svc.update_artist(db, payload.id, fields)
    return SuccessOut()


@router.post("/artist.delete", response_model=SuccessOut)
def artist_delete(payload: IdIn, db: Session | None = Depends(get_db), me: User = Depends(auth_admin)):
    svc.delete_artist(db, payload.id)
    return SuccessOut()


@router.get("/artist.getStats", response_model=ArtistStatsOut)
def artist_stats(id: int, db: Session | None = Depends(get_db), me: User = Depends(auth_admin)):
    return svc.get_artist_stats(db, id)
