import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import BadRequestError, DuplicateError, StorageError, ValidationError
from app.domain.models import User

logger = logging.getLogger(__name__)

# 조회/생성에 쓸 수 있는 컬럼만 허용
USER_FIELDS = {"email", "password", "user_type", "display_name"}


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def fetch(self, **filters) -> List[User]:
        unknown = set(filters) - USER_FIELDS - {"id"}
        if unknown:
            raise BadRequestError(f"Unsupported user filter(s): {sorted(unknown)}")
        stmt = (
            select(User)
            .filter_by(**filters)
            .order_by(User.created_at, User.id)
        )
        try:
            return list(self.db.execute(stmt).scalars().all())
        except SQLAlchemyError as e:
            raise StorageError(str(e)) from e

    def create(self, fields: dict) -> User:
        ent = User(**{k: v for k, v in fields.items() if k in USER_FIELDS})
        try:
            self.db.add(ent)
            self.db.flush()
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            msg = str(e.orig)
            # 드라이버마다 문구가 다름 (postgres: "duplicate key", sqlite: "UNIQUE constraint failed")
            if "unique" in msg.lower() or "duplicate" in msg.lower():
                logger.warning(f"[UserRepository] Duplicate user: {fields.get('email')}")
                raise DuplicateError(f"User already exists: {fields.get('email')}") from e
            raise ValidationError(msg) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"[UserRepository] Create failed: {e}")
            raise StorageError(str(e)) from e
        return ent
