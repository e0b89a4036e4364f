from sqlalchemy.orm import Session
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from typing import Optional, List

from app.core.exceptions import StorageError, ValidationError
from app.domain.models import Artist

ARTIST_FIELDS = {"display_name", "image_url"}


class ArtistRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, artist_id: str) -> Optional[Artist]:
        return self.db.execute(
            select(Artist).where(Artist.id == artist_id)
        ).scalars().first()

    def fetch(self, keyword: str | None, limit: int | None, offset: int) -> List[Artist]:
        stmt = select(Artist)
        if keyword:
            # %, _ 는 와일드카드가 아니라 문자 그대로 매칭
            escaped = keyword.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
            stmt = stmt.where(Artist.display_name.ilike(f"%{escaped}%", escape="\\"))
        stmt = stmt.order_by(Artist.created_at, Artist.id).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        try:
            return list(self.db.execute(stmt).scalars().all())
        except SQLAlchemyError as e:
            raise StorageError(str(e)) from e

    def create(self, fields: dict) -> Artist:
        ent = Artist(**{k: v for k, v in fields.items() if k in ARTIST_FIELDS})
        self.db.add(ent)
        self._commit()
        return ent

    def update(self, ent: Artist, fields: dict) -> Artist:
        for k, v in fields.items():
            if k in ARTIST_FIELDS and v is not None:
                setattr(ent, k, v)
        self.db.add(ent)
        self._commit()
        return ent

    def remove(self, ent: Artist) -> Artist:
        self.db.delete(ent)
        self._commit()
        return ent

    def increase_stream_count(self, keyword: str | None) -> Optional[Artist]:
        # 여러 개가 매칭되면 첫 번째만 증가
        matches = self.fetch(keyword, limit=1, offset=0)
        if not matches:
            return None
        ent = matches[0]
        # 읽고-쓰기 대신 DB 에서 원자적으로 +1
        self.db.execute(
            update(Artist)
            .where(Artist.id == ent.id)
            .values(stream_count=Artist.stream_count + 1)
            .execution_options(synchronize_session=False)
        )
        self._commit()
        self.db.refresh(ent)
        return ent

    def _commit(self) -> None:
        try:
            self.db.flush()
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ValidationError(str(e.orig)) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError(str(e)) from e
