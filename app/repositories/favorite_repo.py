# app/repositories/favorite_repo.py
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import StorageError
from app.domain.models import UserFavorite

_DIALECT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class FavoriteRepository:
    def __init__(self, db: Session):
        self.db = db

    def fetch(
        self,
        *,
        user_id: str,
        song_id: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> List[UserFavorite]:
        stmt = select(UserFavorite).where(UserFavorite.user_id == user_id)
        if song_id is not None:
            stmt = stmt.where(UserFavorite.song_id == song_id)
        stmt = stmt.order_by(UserFavorite.created_at, UserFavorite.id).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        try:
            return list(self.db.execute(stmt).scalars().all())
        except SQLAlchemyError as e:
            raise StorageError(str(e)) from e

    def get_by_pair(self, user_id: str, song_id: str) -> Optional[UserFavorite]:
        rows = self.fetch(user_id=user_id, song_id=song_id, limit=1)
        return rows[0] if rows else None

    def create(self, user_id: str, song_id: str) -> UserFavorite:
        dialect = self.db.get_bind().dialect.name
        insert = _DIALECT_INSERTS.get(dialect)
        if insert is None:
            raise StorageError(f"Unsupported database dialect for favorites: {dialect}")

        # (user_id, song_id) 복합 UNIQUE 기준으로 중복 무시 → 동시 요청이어도 1행
        stmt = (
            insert(UserFavorite)
            .values(user_id=user_id, song_id=song_id)
            .on_conflict_do_nothing(index_elements=["user_id", "song_id"])
        )
        try:
            self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError(str(e)) from e

        ent = self.get_by_pair(user_id, song_id)
        if ent is None:
            # insert 직후 다른 요청이 삭제한 경우
            raise StorageError("Favorite song could not be stored.")
        return ent

    def remove(self, favorite_id: str) -> bool:
        """삭제된 행이 있으면 True. 이미 없으면 False (에러 아님)"""
        try:
            result = self.db.execute(
                delete(UserFavorite).where(UserFavorite.id == favorite_id)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError(str(e)) from e
        return result.rowcount > 0
