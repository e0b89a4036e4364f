from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    APP_NAME: str = "music-catalog-api"
    ENV: str = "local"
    LOG_LEVEL: str = "INFO"

    # DB
    DB_URL: str

    # JWT (비어 있으면 서명 불가 → SigningError)
    JWT_SECRET_KEY: str = ""
    JWT_ALGORITHM: str = "HS256"
    JWT_ISSUER: str = "music-catalog-api"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    REFRESH_TOKEN_EXPIRE_DAYS: int = 30

    # 비밀번호 해시 (bcrypt cost)
    BCRYPT_ROUNDS: int = 12

    CORS_ORIGINS: List[str] = [
        "http://localhost:4321",
        "http://127.0.0.1:4321",
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
