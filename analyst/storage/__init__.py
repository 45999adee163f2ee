"""
Blob storage for uploaded documents
Supports both local filesystem and S3-compatible storage
"""

from analyst.storage.base import StorageBackend
from analyst.storage.local import LocalStorage
from analyst.storage.s3 import S3Storage
from analyst.storage.factory import create_storage_backend, get_storage_backend

__all__ = [
    "StorageBackend",
    "LocalStorage",
    "S3Storage",
    "create_storage_backend",
    "get_storage_backend",
]
