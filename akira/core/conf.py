from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Uvicorn
    UVICORN_HOST: str = '0.0.0.0'
    UVICORN_PORT: int = 8000
    UVICORN_RELOAD: bool = False

    # FastAPI
    TITLE: str = 'Akira'
    VERSION: str = '1.0.0'
    DESCRIPTION: str = 'Resizes one uploaded image into many sizes at once'
    DOCS_URL: str | None = '/docs'
    REDOCS_URL: str | None = '/redocs'
    OPENAPI_URL: str | None = '/openapi'

    # Middleware
    MIDDLEWARE_CORS: bool = True
    MIDDLEWARE_ACCESS_LOG: bool = True

    # Logging
    LOG_LEVEL: str = 'INFO'

    # Resize pipeline
    POOL_SIZE: int = 5
    MAX_CONCURRENT_TRANSFORMS: int = 8
    IMAGE_ENGINE: Literal['pillow', 'opencv'] = 'pillow'
    OUTPUT_FORMAT: Literal['jpeg', 'webp'] = 'jpeg'
    DEFAULT_QUALITY: int = 100
    SIZE_DELIMITER: str = ';'
    MAX_DIMENSION: int = 10000
    REQUEST_TIMEOUT_SECONDS: float | None = 15
    REPORT_PARTIAL_FAILURE: bool = False


@lru_cache
def get_settings():
    return Settings()


settings = get_settings()
