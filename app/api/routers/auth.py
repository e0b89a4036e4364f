from fastapi import APIRouter, Depends

from app.api.deps import get_auth_service
from app.core.exceptions import NotFoundError, UnauthorizedError
from app.domain.schemas import LoginIn, OAuthIn, RegisterIn, TokenOut
from app.services.auth_service import AuthService

router = APIRouter()


def _token_envelope(access_token: str) -> dict:
    data = TokenOut(access_token=access_token).model_dump(by_alias=True)
    return {"success": True, "data": data}


@router.post("/login", summary="이메일/비밀번호 로그인")
def login(body: LoginIn, svc: AuthService = Depends(get_auth_service)):
    try:
        return _token_envelope(svc.login(body.email, body.password))
    except NotFoundError as e:
        # 로그인 실패는 원인과 무관하게 401 (메시지는 그대로)
        raise UnauthorizedError(str(e)) from e


@router.post("/register", summary="회원가입 후 access token 발급")
def register(body: RegisterIn, svc: AuthService = Depends(get_auth_service)):
    return _token_envelope(svc.register(body))


@router.post("/oauth", summary="OAuth 로그인 (없으면 가입)")
def oauth(body: OAuthIn, svc: AuthService = Depends(get_auth_service)):
    return _token_envelope(svc.oauth(body))
