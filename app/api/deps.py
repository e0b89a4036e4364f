from functools import lru_cache

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.db import get_db
from app.core.exceptions import UnauthorizedError
from app.core.security import PasswordHasher, TokenConfig, TokenIssuer
from app.services.auth_service import AuthService


@lru_cache(maxsize=1)
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=settings.BCRYPT_ROUNDS)


@lru_cache(maxsize=1)
def get_token_issuer() -> TokenIssuer:
    return TokenIssuer(
        TokenConfig(
            secret_key=settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
            issuer=settings.JWT_ISSUER,
            access_token_expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
            refresh_token_expire_days=settings.REFRESH_TOKEN_EXPIRE_DAYS,
        )
    )


def get_auth_service(
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> AuthService:
    return AuthService(db, hasher, tokens)


def get_current_user_id(
    authorization: str | None = Header(None),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> str:
    """Authorization: Bearer <token> 에서 id claim 추출"""
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise UnauthorizedError("Access token is required.")
    claims = tokens.decode(token.strip())
    user_id = claims.get("id")
    # refresh token 은 인증 수단으로 사용 불가
    if claims.get("type") != "access" or not user_id:
        raise UnauthorizedError("Invalid or expired token.")
    return str(user_id)
