import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

load_dotenv()


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "DevConnector API")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Path to the Firebase service account key
    firebase_credentials: str = os.getenv("FIREBASE_CREDENTIALS", "./firebase.json")

    cors_origins: List[str] = field(
        default_factory=lambda: _split_csv(os.getenv("CORS_ORIGINS", "http://localhost:3000"))
    )

    posts_collection: str = os.getenv("POSTS_COLLECTION", "posts")
    users_collection: str = os.getenv("USERS_COLLECTION", "users")

    session_cookie_days: int = int(os.getenv("SESSION_COOKIE_DAYS", "5"))
    session_cookie_secure: bool = os.getenv("SESSION_COOKIE_SECURE", "false").lower() in {"1", "true", "yes"}


settings = Settings()
