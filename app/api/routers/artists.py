from typing import Optional

from fastapi import APIRouter, Path, Depends, Query
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.domain.schemas import ArtistCreateIn, ArtistOut, ArtistUpdateIn
from app.services.artist_service import ArtistService

router = APIRouter()


def _out(ent) -> dict:
    return ArtistOut.model_validate(ent).model_dump(mode="json", by_alias=True)


@router.get("", summary="아티스트 목록 (keyword: 이름 부분일치, 대소문자 무시)")
def get_artists(
    keyword: Optional[str] = Query(None),
    limit: int = Query(20, ge=1, le=100),
    page: int = Query(1, ge=1),
    db: Session = Depends(get_db),
):
    artists = ArtistService(db).list_artists(keyword=keyword, limit=limit, page=page)
    return {"success": True, "data": {"artist": [_out(a) for a in artists]}}


@router.post("/stream", summary="keyword 첫 매칭 아티스트 재생수 +1")
def increase_artist_stream_count(
    keyword: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    ArtistService(db).increase_stream_count(keyword)
    return {"success": True, "data": {"message": "Stream count has been increased."}}


@router.get("/{artist_id}")
def get_artist_by_id(artist_id: str = Path(...), db: Session = Depends(get_db)):
    artist = ArtistService(db).get_artist(artist_id)
    return {"success": True, "data": {"artist": _out(artist)}}


@router.post("")
def create_artist(body: ArtistCreateIn, db: Session = Depends(get_db)):
    artist = ArtistService(db).create_artist(body)
    return {"success": True, "data": {"artist": _out(artist), "message": "Artist has been created."}}


@router.patch("/{artist_id}")
def update_artist(
    body: ArtistUpdateIn,
    artist_id: str = Path(...),
    db: Session = Depends(get_db),
):
    artist = ArtistService(db).update_artist(artist_id, body)
    return {"success": True, "data": {"artist": _out(artist), "message": "Artist has been updated."}}


@router.delete("/{artist_id}")
def delete_artist(artist_id: str = Path(...), db: Session = Depends(get_db)):
    artist = ArtistService(db).delete_artist(artist_id)
    return {"success": True, "data": {"artist": _out(artist), "message": "Artist has been deleted."}}
