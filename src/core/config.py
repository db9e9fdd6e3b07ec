from datetime import datetime
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings

from src.core.env_manager import EnvManager


class Settings(BaseSettings):
    ASYNC_DATABASE_URL: str = EnvManager.get_env_variable(
        "ASYNC_DATABASE_URL", "sqlite+aiosqlite:///database.db"
    )
    DATABASE_ECHO: bool = EnvManager.get_bool("DATABASE_ECHO", False)

    SECRET_KEY: str = EnvManager.get_env_variable("SECRET_KEY", "change-this-secret-key-in-production-0000")
    JWT_ALGORITHM: str = EnvManager.get_env_variable("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(
        EnvManager.get_env_variable("ACCESS_TOKEN_EXPIRE_MINUTES", "1440")
    )
    # Report denied reads of private posts as 404 instead of 403.
    CONCEAL_PRIVATE_POSTS: bool = EnvManager.get_bool("CONCEAL_PRIVATE_POSTS", False)

    PROJECT_NAME: str = EnvManager.get_env_variable("PROJECT_NAME", "Blog API")
    PROJECT_INFO: str = EnvManager.get_env_variable(
        "PROJECT_INFO", "Posts with public/private visibility and bearer-token auth"
    )
    PROJECT_VERSION: str = EnvManager.get_env_variable("PROJECT_VERSION", "1.0.0")
    TIME_ZONE: str = EnvManager.get_env_variable("TIME_ZONE", "UTC")
    LOG_LEVEL: str = EnvManager.get_env_variable("LOG_LEVEL", "INFO")

    UPLOAD_FOLDER: str = EnvManager.get_env_variable("UPLOAD_FOLDER", "uploads")
    UPLOAD_URL_PREFIX: str = EnvManager.get_env_variable("UPLOAD_URL_PREFIX", "/uploads")
    MAX_UPLOAD_SIZE_MB: int = int(EnvManager.get_env_variable("MAX_UPLOAD_SIZE_MB", "5"))
    ALLOWED_IMAGE_TYPES: str = EnvManager.get_env_variable(
        "ALLOWED_IMAGE_TYPES", "image/jpeg,image/png,image/gif,image/webp"
    )

    @property
    def allowed_image_types(self) -> set[str]:
        return {t.strip() for t in self.ALLOWED_IMAGE_TYPES.split(",") if t.strip()}

    def get_now(self):
        """Get the current time in the configured time zone."""
        tz = ZoneInfo(self.TIME_ZONE)
        return datetime.now(tz)


settings = Settings()
