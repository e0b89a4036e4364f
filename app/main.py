import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.db import init_db
from app.core.exceptions import MusicApiError
from app.api.routers import auth, favorites, artists

logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app_instance: FastAPI):
    if settings.ENV == "local":
        init_db()
        logger.info("[startup] Database schema ensured")
    yield


app = FastAPI(title="Music Catalog API", version="0.2.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(MusicApiError)
async def music_api_error_handler(request: Request, exc: MusicApiError):
    if exc.status_code >= 500:
        logger.error(f"[{request.method} {request.url.path}] {type(exc).__name__}: {exc}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "data": {"message": str(exc)}},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    # 필수 필드 누락 등도 같은 envelope 로 400 처리
    messages = [
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}"
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"success": False, "data": {"message": "; ".join(messages)}},
    )


app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
app.include_router(favorites.router, prefix="/api/favorites", tags=["Favorites"])
app.include_router(artists.router, prefix="/api/artists", tags=["Artists"])
