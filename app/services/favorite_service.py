import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.domain.models import UserFavorite
from app.repositories.favorite_repo import FavoriteRepository

logger = logging.getLogger(__name__)


class FavoriteService:
    def __init__(self, db: Session):
        self.db = db
        self.favorites = FavoriteRepository(db)

    def store_user_favorite(self, user_id: str, song_id: str) -> UserFavorite:
        # 사전 존재 확인 없이 바로 insert (중복은 UNIQUE 제약이 흡수)
        return self.favorites.create(user_id, song_id)

    def validate_user_favorite(self, user_id: str, song_id: str) -> Optional[UserFavorite]:
        return self.favorites.get_by_pair(user_id, song_id)

    def list_user_favorites(self, user_id: str, *, limit: int, page: int) -> List[UserFavorite]:
        return self.favorites.fetch(user_id=user_id, limit=limit, offset=(page - 1) * limit)

    def remove_user_favorite(self, user_id: str, song_id: str) -> None:
        favorite = self.validate_user_favorite(user_id, song_id)
        if favorite is None:
            raise NotFoundError("Favorite song does not exist.")

        removed = self.favorites.remove(favorite.id)
        if not removed:
            # 확인 후 삭제 사이에 다른 요청이 먼저 지움 → 결과 상태는 같으므로 성공
            logger.info(f"[FavoriteService] Favorite {favorite.id} was already removed")
