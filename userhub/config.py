# userhub/config.py

import os
from pathlib import Path
from dotenv import load_dotenv
from loguru import logger
from pydantic import BaseModel


load_dotenv()


DEV_SECRET_KEY = "dev-secret-change-me"


# -------------------------------
# Storage Configuration
# -------------------------------

class StorageConfig(BaseModel):
    """
    Where uploaded files live and how their public URLs are built.
    """
    upload_dir: Path = Path("data/uploads")
    base_url: str = "http://localhost:8000"
    secure_url: str = "https://localhost:8443"
    endpoint: str = "storage"
    environment: str = "dev"
    max_file_size: int = 10 * 1024 * 1024


# -------------------------------
# Application Settings
# -------------------------------

class Settings(BaseModel):
    environment: str = "dev"
    log_level: str = "INFO"
    database_url: str = "sqlite:///./data/app.db"
    jwt_secret_key: str = DEV_SECRET_KEY
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    admin_username: str | None = None
    admin_password: str | None = None
    storage: StorageConfig = StorageConfig()


def load_settings() -> Settings:
    """
    Builds the settings from environment variables (and a local .env file).
    """
    environment = os.getenv("APP_ENV", "dev")

    secret_key = os.getenv("JWT_SECRET_KEY")
    if not secret_key:
        logger.warning("JWT_SECRET_KEY is not set, using the development key")
        secret_key = DEV_SECRET_KEY

    storage = StorageConfig(
        upload_dir=Path(os.getenv("STORAGE_UPLOAD_DIR", "data/uploads")),
        base_url=os.getenv("STORAGE_BASE_URL", "http://localhost:8000"),
        secure_url=os.getenv("STORAGE_SECURE_URL", "https://localhost:8443"),
        endpoint=os.getenv("STORAGE_ENDPOINT", "storage"),
        environment=environment,
        max_file_size=int(os.getenv("STORAGE_MAX_FILE_SIZE", str(10 * 1024 * 1024))),
    )

    return Settings(
        environment=environment,
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        database_url=os.getenv("DATABASE_URL", "sqlite:///./data/app.db"),
        jwt_secret_key=secret_key,
        access_token_expire_minutes=int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60")),
        admin_username=os.getenv("ADMIN_USERNAME") or None,
        admin_password=os.getenv("ADMIN_PASSWORD") or None,
        storage=storage,
    )
