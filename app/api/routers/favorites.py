from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from app.api.deps import get_current_user_id
from app.core.db import get_db
from app.core.exceptions import NotFoundError
from app.domain.schemas import FavoriteIn, FavoriteOut
from app.services.favorite_service import FavoriteService

router = APIRouter()


def _out(fav) -> dict:
    return FavoriteOut.model_validate(fav).model_dump(mode="json", by_alias=True)


@router.post("", summary="즐겨찾기 추가 (같은 곡 재요청 시 기존 레코드 반환)")
def create_user_favorite(
    body: FavoriteIn,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    fav = FavoriteService(db).store_user_favorite(user_id, body.song_id)
    return {
        "success": True,
        "data": {"favorite": _out(fav), "message": "Song has been added to the favorite."},
    }


@router.get("", summary="내 즐겨찾기 목록")
def get_user_favorites(
    limit: int = Query(20, ge=1, le=100),
    page: int = Query(1, ge=1),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    favs = FavoriteService(db).list_user_favorites(user_id, limit=limit, page=page)
    return {"success": True, "data": {"favorite": [_out(f) for f in favs]}}


@router.get("/{song_id}", summary="즐겨찾기 단건 조회")
def get_user_favorite(
    song_id: str = Path(...),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    fav = FavoriteService(db).validate_user_favorite(user_id, song_id)
    if fav is None:
        raise NotFoundError("Favorite song does not exist.")
    return {"success": True, "data": {"favorite": _out(fav)}}


@router.delete("/{song_id}", summary="즐겨찾기 삭제")
def remove_user_favorite(
    song_id: str = Path(...),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    FavoriteService(db).remove_user_favorite(user_id, song_id)
    return {"success": True, "data": {"message": "Song has been removed from the favorites."}}
