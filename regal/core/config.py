import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


class Settings:
    """Centralised application configuration sourced from environment variables."""

    def __init__(self) -> None:
        load_dotenv()
        self.jwt_secret = self._get("JWT_SECRET")
        self.mongo_uri = os.getenv("MONGO_URI") or self._compose_mongo_uri()
        self.mongo_db = os.getenv("MONGO_DB", "regal")
        self.storage_dir = Path(os.getenv("STORAGE_DIR", "storage")).resolve()
        self.smtp_host = os.getenv("SMTP_HOST", "")
        self.smtp_port = self._get_int("SMTP_PORT", default=587)
        self.smtp_username = os.getenv("SMTP_USERNAME", "")
        self.smtp_password = os.getenv("SMTP_PASSWORD", "")
        self.mail_from = os.getenv("MAIL_FROM", "noreply@things-connect.net")
        origins = os.getenv("CORS_ALLOW_ORIGINS")
        if origins:
            self.cors_allow_origins = [item.strip() for item in origins.split(",") if item.strip()]
        else:
            self.cors_allow_origins = ["*"]

    @staticmethod
    def _compose_mongo_uri() -> str:
        host = os.getenv("MONGO_HOST")
        if not host:
            return "mongodb://localhost:27017"
        port = os.getenv("MONGO_PORT", "27017")
        user = os.getenv("MONGO_USER")
        password = os.getenv("MONGO_PASS")
        credentials = f"{user}:{password}@" if user and password else ""
        options = os.getenv("MONGO_OPTIONS")
        suffix = f"/?{options}" if options else ""
        return f"mongodb://{credentials}{host}:{port}{suffix}"

    @staticmethod
    def _get(key: str) -> str:
        value = os.getenv(key)
        if not value:
            raise RuntimeError(f"Missing required environment variable: {key}")
        return value

    @staticmethod
    def _get_int(key: str, default: Optional[int] = None) -> int:
        value = os.getenv(key)
        if value is None:
            if default is None:
                raise RuntimeError(f"Missing required environment variable: {key}")
            return default
        try:
            return int(value)
        except ValueError as exc:
            raise RuntimeError(f"Environment variable {key} must be an integer") from exc
