from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from uuid import uuid4

from src.accounts.config import settings

logger = logging.getLogger(__name__)


class ProfilePicStorageBackend(ABC):
    @abstractmethod
    def save_file(self, content: bytes, *, original_filename: str) -> str:
        """Persist image bytes and return the stored filename."""

    @abstractmethod
    def public_path(self, stored_filename: str) -> str:
        """Return the path the stored file is served under."""

    @abstractmethod
    def delete_file(self, stored_filename: str) -> None:
        """Best-effort deletion of a previously saved file."""


class LocalProfilePicStorageBackend(ProfilePicStorageBackend):
    def __init__(self, base_dir: Path, url_prefix: str) -> None:
        self._base = base_dir
        self._url_prefix = url_prefix.rstrip("/")

    def save_file(self, content: bytes, *, original_filename: str) -> str:
        # Stored names are generated; only the extension of the upload survives.
        suffix = Path(original_filename).suffix
        stored_filename = f"{uuid4().hex}{suffix}"
        self._base.mkdir(parents=True, exist_ok=True)
        (self._base / stored_filename).write_bytes(content)
        return stored_filename

    def public_path(self, stored_filename: str) -> str:
        return f"{self._url_prefix}/{stored_filename}"

    def delete_file(self, stored_filename: str) -> None:
        path = self._base / stored_filename
        if path.exists():
            try:
                path.unlink()
            except OSError:
                logger.warning("Could not delete stored profile picture %s", path, exc_info=True)


profile_pic_storage_backend: ProfilePicStorageBackend = LocalProfilePicStorageBackend(
    settings.profile_pic_upload_dir,
    settings.profile_pic_url_prefix,
)
