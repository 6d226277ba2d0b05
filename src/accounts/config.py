from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class Settings:
    """Centralized application settings.

    This keeps environment-variable handling in one place so other modules can
    depend on strongly-typed attributes instead of calling os.getenv
    directly. Values are read once at import time and treated as read-only
    afterwards.
    """

    # Signing key for bearer tokens. Token issuance fails while this is unset.
    jwt_secret: Optional[str] = os.getenv("JWT_SECRET")
    token_expire_days: int = int(os.getenv("TOKEN_EXPIRE_DAYS", "30"))

    # bcrypt work factor used for new password hashes.
    bcrypt_rounds: int = int(os.getenv("BCRYPT_ROUNDS", "10"))

    # Optional database configuration for the SQL-backed user store.
    database_url: Optional[str] = os.getenv("DATABASE_URL")
    use_sql_repos: bool = os.getenv("USE_SQL_REPOS", "false").lower() == "true"

    # Directory where uploaded profile pictures are stored, and the public
    # path prefix they are served under.
    profile_pic_upload_dir: Path = Path(os.getenv("PROFILE_PIC_UPLOAD_DIR", "uploads"))
    profile_pic_url_prefix: str = os.getenv("PROFILE_PIC_URL_PREFIX", "/uploads")

    # Request size limit for uploads (in bytes).
    max_upload_bytes: int = int(os.getenv("MAX_UPLOAD_BYTES", str(5 * 1024 * 1024)))

    # CORS configuration: comma-separated origins (e.g. "https://app.example.com,https://admin.example.com").
    # Default is "*" (allow all) which is acceptable for local development but
    # should be tightened in production.
    cors_allow_origins: str = os.getenv("CORS_ALLOW_ORIGINS", "*")

    log_level: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
