from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import bcrypt
import jwt

from app.core.exceptions import HashError, SigningError, UnauthorizedError

logger = logging.getLogger(__name__)

REQUIRED_CLAIMS = ("id", "email", "userType")


class PasswordHasher:
    """bcrypt 기반 단방향 해시 (salt 는 digest 안에 포함)"""

    def __init__(self, rounds: int = 12) -> None:
        self.rounds = rounds

    def hash(self, plaintext: str | None) -> str:
        if not plaintext:
            raise HashError("Password is required.")
        try:
            salt = bcrypt.gensalt(rounds=self.rounds)
            return bcrypt.hashpw(plaintext.encode("utf-8"), salt).decode("utf-8")
        except ValueError as e:
            # bcrypt 는 72바이트 초과 입력 등에서 ValueError
            raise HashError(str(e)) from e

    def compare(self, plaintext: str | None, digest: str | None) -> bool:
        if not plaintext or not digest:
            return False
        try:
            # checkpw 는 상수 시간 비교
            return bcrypt.checkpw(plaintext.encode("utf-8"), digest.encode("utf-8"))
        except ValueError:
            # digest 가 bcrypt 형식이 아님 → 불일치로 취급
            return False


@dataclass(frozen=True)
class TokenConfig:
    secret_key: str
    algorithm: str = "HS256"
    issuer: str = "music-catalog-api"
    access_token_expire_minutes: int = 60
    refresh_token_expire_days: int = 30


class TokenIssuer:
    def __init__(self, config: TokenConfig) -> None:
        self.config = config

    @staticmethod
    def build_claims(user) -> Dict[str, Any]:
        """저장된 레코드에서만 claims 구성 (요청 입력은 사용하지 않음)"""
        return {"id": user.id, "email": user.email, "userType": user.user_type}

    def sign(self, claims: Dict[str, Any], is_refresh: bool = False) -> str:
        missing = [k for k in REQUIRED_CLAIMS if not claims.get(k)]
        if missing:
            raise SigningError(f"Missing token claims: {missing}")
        if not self.config.secret_key:
            logger.error("[TokenIssuer] JWT_SECRET_KEY is not configured")
            raise SigningError("Token signing key is not configured.")

        now = datetime.now(timezone.utc)
        if is_refresh:
            expires_at = now + timedelta(days=self.config.refresh_token_expire_days)
        else:
            expires_at = now + timedelta(minutes=self.config.access_token_expire_minutes)

        payload = {
            **claims,
            "iat": now,
            "exp": expires_at,
            "iss": self.config.issuer,
            # 같은 claims 라도 매번 다른 토큰이 나오도록
            "jti": secrets.token_urlsafe(16),
            "type": "refresh" if is_refresh else "access",
        }
        try:
            return jwt.encode(payload, self.config.secret_key, algorithm=self.config.algorithm)
        except (jwt.PyJWTError, NotImplementedError) as e:
            raise SigningError(str(e)) from e

    def decode(self, token: str) -> Dict[str, Any]:
        if not self.config.secret_key:
            raise SigningError("Token signing key is not configured.")
        try:
            return jwt.decode(
                token,
                self.config.secret_key,
                algorithms=[self.config.algorithm],
                issuer=self.config.issuer,
                options={"require": ["exp", "iat"]},
            )
        except jwt.PyJWTError as e:
            logger.warning(f"[TokenIssuer] Rejected token: {e}")
            raise UnauthorizedError("Invalid or expired token.") from e
