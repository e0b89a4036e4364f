import logging

from sqlalchemy.orm import Session

from app.core.exceptions import DuplicateError, NotFoundError, UnauthorizedError
from app.core.security import PasswordHasher, TokenIssuer
from app.domain.models import User
from app.domain.schemas import OAuthIn, RegisterIn
from app.repositories.user_repo import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """로그인 / 회원가입 / OAuth(find-or-create) 흐름. 성공 시 access token 반환"""

    def __init__(self, db: Session, hasher: PasswordHasher, tokens: TokenIssuer):
        self.db = db
        self.users = UserRepository(db)
        self.hasher = hasher
        self.tokens = tokens

    def login(self, email: str, password: str) -> str:
        # email 중복은 디렉터리에서 막는다고 가정 → 첫 번째 결과 사용
        found = self.users.fetch(email=email)
        if not found:
            logger.warning("[AuthService] Login failed: unknown email")
            raise NotFoundError("User not found.")
        user = found[0]

        if not self.hasher.compare(password, user.password):
            logger.warning(f"[AuthService] Login failed: password mismatch for user {user.id}")
            raise UnauthorizedError("Password does not match")

        logger.info(f"[AuthService] User {user.id} logged in")
        return self._issue(user)

    def register(self, payload: RegisterIn) -> str:
        hashed = self.hasher.hash(payload.password)
        user = self.users.create({**payload.to_user_fields(), "password": hashed})
        logger.info(f"[AuthService] Registered user {user.id} ({user.user_type})")
        return self._issue(user)

    def oauth(self, payload: OAuthIn) -> str:
        found = self.users.fetch(email=payload.email)
        if not found:
            try:
                return self.register(payload)
            except DuplicateError:
                # 동시 요청이 먼저 가입시킴 → 한 번만 다시 조회해서 그 계정으로 로그인
                found = self.users.fetch(email=payload.email)
                if not found:
                    raise
                logger.info("[AuthService] OAuth account created by a concurrent request")

        # 이미 있는 계정: 비밀번호는 무시하고 기존 레코드로 토큰 발급
        user = found[0]
        logger.info(f"[AuthService] OAuth sign-in for existing user {user.id}")
        return self._issue(user)

    def _issue(self, user: User) -> str:
        return self.tokens.sign(TokenIssuer.build_claims(user), False)
