"""
Local file storage with user-scoped paths
Implements StorageBackend interface for local filesystem
"""

import logging
from pathlib import Path
from typing import Optional

from analyst.config import settings
from analyst.core.exceptions import StorageUnavailableError
from analyst.storage.base import StorageBackend

logger = logging.getLogger(__name__)


class LocalStorage(StorageBackend):
    """Local file storage rooted at UPLOAD_DIR"""

    def __init__(self, base_path: str = settings.UPLOAD_DIR):
        self.base_path = Path(base_path)
        try:
            self.base_path.mkdir(parents=True, exist_ok=True)
            self._available = True
        except OSError as e:
            logger.error(f"Upload directory {self.base_path} not usable: {e}")
            self._available = False

    def is_available(self) -> bool:
        return self._available

    def _resolve(self, storage_path: str) -> Path:
        """Map a storage key to a path, refusing keys that escape base_path"""
        # Windows uploads may store backslashes
        normalized_path = storage_path.replace('\\', '/')
        absolute_path = (self.base_path / normalized_path).resolve()
        try:
            absolute_path.relative_to(self.base_path.resolve())
        except ValueError:
            raise PermissionError(f"Access denied: {storage_path} is outside the upload directory")
        return absolute_path

    def save(
        self,
        content: bytes,
        user_id: str,
        filename: str,
        content_type: Optional[str] = None
    ) -> str:
        """Save file to user-scoped local storage"""
        if not self._available:
            raise StorageUnavailableError()

        storage_path = self.build_key(user_id, filename)
        file_path = self._resolve(storage_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        with open(file_path, "wb") as f:
            f.write(content)

        logger.info(f"Saved file to local storage: {storage_path}")
        return storage_path

    def read(self, storage_path: str) -> bytes:
        if not self._available:
            raise StorageUnavailableError()

        file_path = self._resolve(storage_path)
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {storage_path}")

        with open(file_path, "rb") as f:
            return f.read()

    def exists(self, storage_path: str) -> bool:
        try:
            return self._resolve(storage_path).exists()
        except PermissionError:
            return False

    def delete(self, storage_path: str):
        if not self._available:
            raise StorageUnavailableError()

        file_path = self._resolve(storage_path)
        if file_path.exists():
            file_path.unlink()
            logger.info(f"Deleted file from local storage: {storage_path}")
