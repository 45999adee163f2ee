"""
Abstract base class for storage backends
Defines the interface for blob storage systems (local, S3)
"""

from abc import ABC, abstractmethod
from typing import Optional
import time
import uuid

from analyst.utils.sanitize import sanitize_filename


class StorageBackend(ABC):
    """Abstract base class for file storage backends"""

    def build_key(self, user_id: str, filename: str) -> str:
        """
        Generate a collision-resistant, user-scoped storage key

        Time-prefixed with a random suffix so two uploads of the same
        filename in the same second never overwrite each other.
        """
        return (
            f"users/{user_id}/"
            f"{int(time.time())}_{uuid.uuid4().hex[:8]}_{sanitize_filename(filename)}"
        )

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the backend was configured and can serve requests"""
        pass

    @abstractmethod
    def save(
        self,
        content: bytes,
        user_id: str,
        filename: str,
        content_type: Optional[str] = None
    ) -> str:
        """
        Save file to storage

        Args:
            content: File bytes
            user_id: Owner user ID
            filename: Original filename
            content_type: MIME type (optional)

        Returns:
            str: Storage key for the saved file
        """
        pass

    @abstractmethod
    def read(self, storage_path: str) -> bytes:
        """
        Read file content

        Raises:
            FileNotFoundError: If nothing is stored under the key
        """
        pass

    @abstractmethod
    def delete(self, storage_path: str):
        """Delete file from storage (no error if already gone)"""
        pass

    @abstractmethod
    def exists(self, storage_path: str) -> bool:
        pass
