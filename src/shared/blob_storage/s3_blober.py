"""S3 Blob Storage adapter for document attachments."""
import asyncio
import logging
from typing import Optional

import boto3
from botocore.exceptions import ClientError
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class S3BlobStorageSettings(BaseModel):
    """Settings for S3 Blob Storage."""
    bucket_name: str = Field(..., description="S3 bucket name")
    endpoint_url: Optional[str] = Field(None, description="S3 endpoint URL (for LocalStack or MinIO)")
    region_name: str = Field(default="us-east-1", description="AWS region")
    aws_access_key_id: Optional[str] = Field(None, description="AWS access key ID")
    aws_secret_access_key: Optional[str] = Field(None, description="AWS secret access key")


class S3BlobStorage:
    """
    Put/get/delete binary objects by key and hand out download URLs.

    Works against AWS S3 and S3-compatible endpoints. boto3 is synchronous, so
    every call runs in a worker thread via ``asyncio.to_thread``. Failures are
    reported as RuntimeError with the offending key in the message.
    """

    def __init__(self, settings: S3BlobStorageSettings):
        self.settings = settings
        self._client = None
        self._bucket_checked = False

    @property
    def client(self):
        """Get or create the S3 client (lazy initialization)."""
        if self._client is None:
            client_kwargs = {
                "region_name": self.settings.region_name,
            }

            if self.settings.endpoint_url:
                client_kwargs["endpoint_url"] = self.settings.endpoint_url

            if self.settings.aws_access_key_id and self.settings.aws_secret_access_key:
                client_kwargs["aws_access_key_id"] = self.settings.aws_access_key_id
                client_kwargs["aws_secret_access_key"] = self.settings.aws_secret_access_key

            self._client = boto3.client("s3", **client_kwargs)  # type: ignore[call-overload]

        return self._client

    async def ensure_bucket_exists(self) -> None:
        """
        Ensure the configured bucket exists, create it if it doesn't.

        Raises:
            RuntimeError: If the bucket can't be accessed or created
        """
        if self._bucket_checked:
            return
        await asyncio.to_thread(self._ensure_bucket_exists_sync)
        self._bucket_checked = True

    def _ensure_bucket_exists_sync(self) -> None:
        bucket = self.settings.bucket_name
        try:
            self.client.head_bucket(Bucket=bucket)
            return
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "")
            if error_code not in ("404", "NoSuchBucket"):
                raise RuntimeError(f"Failed to access bucket {bucket}: {e}") from e

        logger.info("Creating missing bucket %s", bucket)
        try:
            if self.settings.region_name == "us-east-1":
                # us-east-1 rejects an explicit LocationConstraint
                self.client.create_bucket(Bucket=bucket)
            else:
                self.client.create_bucket(
                    Bucket=bucket,
                    CreateBucketConfiguration={"LocationConstraint": self.settings.region_name},
                )
        except ClientError as e:
            raise RuntimeError(f"Failed to create bucket {bucket}: {e}") from e

    async def upload_bytes(
        self, key: str, content: bytes, content_type: str = DEFAULT_CONTENT_TYPE
    ) -> str:
        """
        Upload binary content under the given key.

        Returns:
            The key the content was stored under

        Raises:
            RuntimeError: If the upload fails
        """
        await self.ensure_bucket_exists()
        try:
            await asyncio.to_thread(
                self.client.put_object,
                Bucket=self.settings.bucket_name,
                Key=key,
                Body=content,
                ContentType=content_type,
            )
        except ClientError as e:
            raise RuntimeError(f"Failed to upload content to S3 key {key}: {e}") from e
        logger.info("Uploaded %d bytes to %s", len(content), key)
        return key

    async def download_bytes(self, key: str) -> bytes:
        """
        Download the content stored under the given key.

        Raises:
            RuntimeError: If the download fails or the key doesn't exist
        """
        try:
            response = await asyncio.to_thread(
                self.client.get_object,
                Bucket=self.settings.bucket_name,
                Key=key,
            )
            return await asyncio.to_thread(response["Body"].read)
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "")
            if error_code == "NoSuchKey":
                raise RuntimeError(f"S3 key {key} does not exist") from e
            raise RuntimeError(f"Failed to download content from S3 key {key}: {e}") from e

    async def delete_object(self, key: str) -> None:
        """
        Delete the object stored under the given key. Deleting a missing key is not an error.

        Raises:
            RuntimeError: If deletion fails
        """
        try:
            await asyncio.to_thread(
                self.client.delete_object,
                Bucket=self.settings.bucket_name,
                Key=key,
            )
        except ClientError as e:
            raise RuntimeError(f"Failed to delete S3 key {key}: {e}") from e
        logger.info("Deleted %s", key)

    async def object_exists(self, key: str) -> bool:
        try:
            await asyncio.to_thread(
                self.client.head_object,
                Bucket=self.settings.bucket_name,
                Key=key,
            )
            return True
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "")
            if error_code in ("404", "NoSuchKey"):
                return False
            raise RuntimeError(f"Failed to check existence of S3 key {key}: {e}") from e

    async def generate_presigned_url(self, key: str, expiration: int = 3600) -> str:
        """
        Generate a pre-signed GET URL for the object.

        Args:
            key: Object key
            expiration: URL lifetime in seconds (default: 1 hour)

        Raises:
            RuntimeError: If URL generation fails
        """
        try:
            return await asyncio.to_thread(
                self.client.generate_presigned_url,
                "get_object",
                Params={"Bucket": self.settings.bucket_name, "Key": key},
                ExpiresIn=expiration,
            )
        except ClientError as e:
            raise RuntimeError(f"Failed to generate pre-signed URL for S3 key {key}: {e}") from e
