from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


# 요청/응답 JSON 은 camelCase (userType, songId ...), 파이썬 쪽은 snake_case
class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


# ------- 인증 요청 (허용 필드만, 그 외 필드는 무시) -------
class LoginIn(CamelModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class RegisterIn(CamelModel):
    # 빈 email 은 저장 후 토큰 발급이 불가능 → 저장 전에 400
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)
    user_type: Optional[str] = Field(default=None, alias="userType")
    display_name: Optional[str] = Field(default=None, alias="displayName")

    def to_user_fields(self) -> dict:
        fields = {"email": self.email, "display_name": self.display_name}
        # 미지정이면 모델 기본값(listener) 사용
        if self.user_type:
            fields["user_type"] = self.user_type
        return fields


class OAuthIn(RegisterIn):
    # 기존 계정이면 password 는 무시됨
    password: Optional[str] = Field(default=None, min_length=1)


class TokenOut(CamelModel):
    access_token: str = Field(serialization_alias="accessToken")


# ------- 즐겨찾기 -------
class FavoriteIn(CamelModel):
    song_id: str = Field(alias="songId", min_length=1)


class FavoriteOut(CamelModel):
    id: str
    user_id: str = Field(serialization_alias="userId")
    song_id: str = Field(serialization_alias="songId")
    created_at: Optional[datetime] = Field(default=None, serialization_alias="createdAt")


# ------- 아티스트 -------
class ArtistCreateIn(CamelModel):
    display_name: str = Field(alias="displayName", min_length=1)
    image_url: str = Field(alias="imageUrl", min_length=1)


class ArtistUpdateIn(CamelModel):
    display_name: Optional[str] = Field(default=None, alias="displayName", min_length=1)
    image_url: Optional[str] = Field(default=None, alias="imageUrl", min_length=1)


class ArtistOut(CamelModel):
    id: str
    display_name: str = Field(serialization_alias="displayName")
    image_url: Optional[str] = Field(default=None, serialization_alias="imageUrl")
    stream_count: int = Field(default=0, serialization_alias="streamCount")
    created_at: Optional[datetime] = Field(default=None, serialization_alias="createdAt")
