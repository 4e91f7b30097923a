"""Blob storage service using MinIO"""

import asyncio
import logging
from datetime import timedelta
from functools import partial
from io import BytesIO
from typing import BinaryIO, Optional, Union

from minio import Minio
from minio.error import S3Error
from urllib3.exceptions import HTTPError

from ...core.config import settings
from ...domain.exceptions import Unavailable

logger = logging.getLogger(__name__)


class StorageService:

    def __init__(self, client: Optional[Minio] = None, bucket: Optional[str] = None):
        self.client = client or Minio(
            endpoint=settings.MINIO_ENDPOINT,
            access_key=settings.MINIO_ACCESS_KEY,
            secret_key=settings.MINIO_SECRET_KEY,
            secure=settings.MINIO_SECURE
        )
        self.bucket = bucket or settings.MINIO_BUCKET_NAME
        self._bucket_checked = False

    async def _run(self, func, *args, **kwargs):
        """Run a blocking client call in the thread pool"""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, partial(func, *args, **kwargs))

    async def _ensure_bucket_exists(self) -> None:
        """Ensure bucket exists (checked once per process)"""
        if self._bucket_checked:
            return
        try:
            if not await self._run(self.client.bucket_exists, self.bucket):
                await self._run(self.client.make_bucket, self.bucket)
        except S3Error as e:
            # Another process may have created it in the meantime
            if e.code not in ("BucketAlreadyOwnedByYou", "BucketAlreadyExists"):
                raise
        self._bucket_checked = True

    async def upload_file(
        self,
        file_data: Union[BinaryIO, bytes],
        object_name: str,
        content_type: str,
        length: Optional[int] = None,
    ) -> str:
        """Upload file under ``object_name`` and return its retrieval URL"""
        if isinstance(file_data, bytes):
            file_stream = BytesIO(file_data)
            file_size = len(file_data)
        else:
            file_stream = file_data
            if length is None:
                file_stream.seek(0, 2)
                length = file_stream.tell()
            file_stream.seek(0)
            file_size = length

        try:
            await self._ensure_bucket_exists()
            await self._run(
                self.client.put_object,
                bucket_name=self.bucket,
                object_name=object_name,
                data=file_stream,
                length=file_size,
                content_type=content_type or "application/octet-stream"
            )
        except (S3Error, HTTPError, OSError) as e:
            logger.error("Failed to upload %s: %s", object_name, e)
            raise Unavailable("File storage is unavailable")

        return await self.get_file_url(object_name)

    async def get_file_url(self, object_name: str) -> str:
        """Signed URL when the backend can sign, otherwise the plain object URL"""
        try:
            return await self._run(
                self.client.presigned_get_object,
                bucket_name=self.bucket,
                object_name=object_name,
                expires=timedelta(seconds=settings.PRESIGNED_URL_EXPIRE_SECONDS)
            )
        except (S3Error, HTTPError, OSError, ValueError) as e:
            logger.warning("Could not presign %s, falling back to public URL: %s", object_name, e)
            protocol = "https" if settings.MINIO_SECURE else "http"
            return f"{protocol}://{settings.MINIO_ENDPOINT}/{self.bucket}/{object_name}"

    async def delete_file(self, object_name: str) -> bool:
        """Delete file by object name"""
        try:
            await self._run(self.client.remove_object, self.bucket, object_name)
            return True
        except (S3Error, HTTPError, OSError) as e:
            logger.warning("Failed to delete %s: %s", object_name, e)
            return False
