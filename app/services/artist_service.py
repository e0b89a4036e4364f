# app/services/artist_service.py
from typing import List

from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.domain.models import Artist
from app.domain.schemas import ArtistCreateIn, ArtistUpdateIn
from app.repositories.artist_repo import ArtistRepository


class ArtistService:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.artists = ArtistRepository(db)

    def list_artists(self, *, keyword: str | None, limit: int, page: int) -> List[Artist]:
        return self.artists.fetch(keyword, limit=limit, offset=(page - 1) * limit)

    def get_artist(self, artist_id: str) -> Artist:
        ent = self.artists.get_by_id(artist_id)
        if not ent:
            raise NotFoundError("Artist does not exist.")
        return ent

    def create_artist(self, payload: ArtistCreateIn) -> Artist:
        return self.artists.create(payload.model_dump())

    def update_artist(self, artist_id: str, payload: ArtistUpdateIn) -> Artist:
        ent = self.get_artist(artist_id)
        # 넘어온 필드만 갱신, 나머지(image_url 등)는 유지
        return self.artists.update(ent, payload.model_dump(exclude_unset=True))

    def delete_artist(self, artist_id: str) -> Artist:
        return self.artists.remove(self.get_artist(artist_id))

    def increase_stream_count(self, keyword: str | None) -> Artist:
        ent = self.artists.increase_stream_count(keyword)
        if not ent:
            raise NotFoundError("Artist does not exist.")
        return ent
