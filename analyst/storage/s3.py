"""
S3 file storage backend
Implements StorageBackend interface for AWS S3 (or compatible services)
"""

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from typing import Optional
import logging

from analyst.config import settings
from analyst.core.exceptions import StorageUnavailableError
from analyst.storage.base import StorageBackend

logger = logging.getLogger(__name__)


class S3Storage(StorageBackend):
    """S3 file storage with user-scoped keys"""

    def __init__(
        self,
        bucket_name: str = None,
        aws_access_key_id: str = None,
        aws_secret_access_key: str = None,
        region_name: str = None,
        endpoint_url: str = None
    ):
        """
        Initialize S3 storage backend

        A bucket that cannot be reached leaves the backend unavailable
        instead of raising, so the API still starts and uploads fail
        with a clear storage-unavailable error.

        Args:
            bucket_name: S3 bucket name
            aws_access_key_id: AWS access key (optional, uses env/IAM if not provided)
            aws_secret_access_key: AWS secret key (optional)
            region_name: AWS region (optional)
            endpoint_url: Custom S3 endpoint (for MinIO, DigitalOcean Spaces, etc.)
        """
        self.bucket_name = bucket_name or settings.S3_BUCKET_NAME
        self.s3_client = None

        s3_config = {}
        if aws_access_key_id:
            s3_config['aws_access_key_id'] = aws_access_key_id
        if aws_secret_access_key:
            s3_config['aws_secret_access_key'] = aws_secret_access_key
        if region_name:
            s3_config['region_name'] = region_name
        if endpoint_url:
            s3_config['endpoint_url'] = endpoint_url

        try:
            client = boto3.client('s3', **s3_config)
            client.head_bucket(Bucket=self.bucket_name)
            self.s3_client = client
            logger.info(f"Connected to S3 bucket: {self.bucket_name}")
        except (ClientError, BotoCoreError) as e:
            logger.error(f"S3 bucket {self.bucket_name} not accessible, storage disabled: {e}")

    def is_available(self) -> bool:
        return self.s3_client is not None

    def _client(self):
        if self.s3_client is None:
            raise StorageUnavailableError()
        return self.s3_client

    def save(
        self,
        content: bytes,
        user_id: str,
        filename: str,
        content_type: Optional[str] = None
    ) -> str:
        """Save file to S3 with user-scoped key"""
        client = self._client()
        s3_key = self.build_key(user_id, filename)

        extra_args = {'Metadata': {'user_id': str(user_id)}}
        if content_type:
            extra_args['ContentType'] = content_type

        try:
            client.put_object(
                Bucket=self.bucket_name,
                Key=s3_key,
                Body=content,
                **extra_args
            )
            logger.info(f"Uploaded file to S3: {s3_key}")
            return s3_key
        except ClientError as e:
            logger.error(f"Failed to upload to S3: {e}")
            raise

    def read(self, storage_path: str) -> bytes:
        client = self._client()
        try:
            response = client.get_object(Bucket=self.bucket_name, Key=storage_path)
            return response['Body'].read()
        except ClientError as e:
            if e.response.get('Error', {}).get('Code') in ('NoSuchKey', '404'):
                raise FileNotFoundError(f"File not found: {storage_path}") from e
            logger.error(f"Failed to read from S3: {e}")
            raise

    def exists(self, storage_path: str) -> bool:
        client = self._client()
        try:
            client.head_object(Bucket=self.bucket_name, Key=storage_path)
            return True
        except ClientError as e:
            if e.response.get('Error', {}).get('Code') in ('NoSuchKey', '404'):
                return False
            raise

    def delete(self, storage_path: str):
        client = self._client()
        try:
            client.delete_object(Bucket=self.bucket_name, Key=storage_path)
            logger.info(f"Deleted file from S3: {storage_path}")
        except ClientError as e:
            logger.error(f"Failed to delete from S3: {e}")
            raise
