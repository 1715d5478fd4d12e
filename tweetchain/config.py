"""
Chain Service Configuration
"""

from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # ===== Service =====
    SERVICE_NAME: str = Field(default="tweetchain", env="SERVICE_NAME")  # type: ignore
    SERVICE_VERSION: str = Field(default="1.0.0", env="SERVICE_VERSION")  # type: ignore
    HOST: str = Field(default="0.0.0.0", env="HOST")  # type: ignore
    PORT: int = Field(default=8000, env="PORT")  # type: ignore
    LOG_LEVEL: str = Field(default="info", env="LOG_LEVEL")  # type: ignore
    DEBUG: bool = Field(default=False, env="DEBUG")  # type: ignore

    # ===== CORS =====
    CORS_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:8080"], env="CORS_ORIGINS"  # type: ignore
    )

    # ===== Generation =====
    # 0 disables the cap and walks until END like the uncapped chain
    MAX_GENERATION_STEPS: int = Field(default=5000, ge=0, env="MAX_GENERATION_STEPS")  # type: ignore
    MAX_SENTENCES_PER_REQUEST: int = Field(default=20, ge=1, env="MAX_SENTENCES_PER_REQUEST")  # type: ignore

    # ===== Chain cache =====
    CHAIN_CACHE_DIR: str = Field(default="./chain_cache", env="CHAIN_CACHE_DIR")  # type: ignore
    CHAIN_CACHE_ENABLED: bool = Field(default=True, env="CHAIN_CACHE_ENABLED")  # type: ignore

    # >>> pydantic v2 settings config <<<
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


settings = Settings()
