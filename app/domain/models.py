# app/domain/models.py
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import declarative_base, Mapped, mapped_column, relationship
from sqlalchemy import (
    Text,
    Integer,
    DateTime,
    ForeignKey,
    UniqueConstraint,
    func,
    text,
)

Base = declarative_base()


def gen_uuid() -> str:
    return str(uuid.uuid4())


# =========================
# Models
# =========================
class User(Base):
    __tablename__ = "users"

    # Text PK + default=gen_uuid
    id: Mapped[str] = mapped_column(Text, primary_key=True, default=gen_uuid)

    # 대소문자 구분 exact match, UNIQUE
    email: Mapped[str] = mapped_column(Text, nullable=False, unique=True)

    # bcrypt digest (평문 저장 금지)
    password: Mapped[str] = mapped_column(Text, nullable=False)

    user_type: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="listener",
        server_default=text("'listener'"),
    )

    display_name: Mapped[Optional[str]] = mapped_column(Text)

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
    )

    # relationships
    favorites: Mapped[list["UserFavorite"]] = relationship(
        "UserFavorite",
        back_populates="user",
        cascade="all, delete-orphan",
        lazy="select",
    )


class UserFavorite(Base):
    __tablename__ = "user_favorites"
    # (user_id, song_id) 당 최대 1행: 동시 추가 요청도 DB 가 막는다
    __table_args__ = (
        UniqueConstraint("user_id", "song_id", name="uq_user_favorites_user_song"),
    )

    id: Mapped[str] = mapped_column(Text, primary_key=True, default=gen_uuid)
    user_id: Mapped[str] = mapped_column(
        Text,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    song_id: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
    )

    user: Mapped[User] = relationship(
        "User",
        back_populates="favorites",
        lazy="select",
    )


class Artist(Base):
    __tablename__ = "artists"

    id: Mapped[str] = mapped_column(Text, primary_key=True, default=gen_uuid)
    display_name: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[Optional[str]] = mapped_column(Text)

    stream_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
    )
