"""
Configuration settings for StudyShelf application.
"""
from pydantic_settings import BaseSettings
from pydantic import Field
from functools import lru_cache
from pathlib import Path
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # MongoDB Configuration
    mongodb_uri: str = Field(default="mongodb://localhost:27017", alias="MONGODB_URI")
    mongodb_database: str = Field(default="study_material_app", alias="MONGODB_DATABASE")

    # MongoDB Collection Names
    books_collection: str = Field(default="books", alias="BOOKS_COLLECTION")
    categories_collection: str = Field(default="categories", alias="CATEGORIES_COLLECTION")
    counters_collection: str = Field(default="counters", alias="COUNTERS_COLLECTION")

    # File Storage
    upload_dir: Path = Field(default=Path("./uploads"), alias="UPLOAD_DIR")
    upload_url_prefix: str = Field(default="/uploads", alias="UPLOAD_URL_PREFIX")
    max_upload_size_mb: int = Field(default=50, alias="MAX_UPLOAD_SIZE_MB")

    # Published Codes
    published_code_prefix: str = Field(default="eduIT", alias="PUBLISHED_CODE_PREFIX")
    published_code_width: int = Field(default=3, alias="PUBLISHED_CODE_WIDTH")
    code_allocation_attempts: int = Field(default=5, alias="CODE_ALLOCATION_ATTEMPTS")

    # HTTP
    cors_origins: List[str] = Field(default=["*"], alias="CORS_ORIGINS")

    # Logging Configuration
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_dir: Path = Field(default=Path("./logs"), alias="LOG_DIR")
    log_json: bool = Field(default=True, alias="LOG_JSON")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def max_upload_size_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024

    def ensure_directories(self) -> None:
        """Create necessary directories if they don't exist."""
        self.upload_dir.mkdir(parents=True, exist_ok=True)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    settings = Settings()
    settings.ensure_directories()
    return settings
