"""
S3 client for document download links.

Issues time-limited presigned `get_object` URLs for stored documents.

Dependencies: boto3
System role: UrlSigner for the document metadata loader
"""

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import boto3
from botocore.exceptions import ClientError

from ragdesk.core.interfaces import UrlSigner

logger = logging.getLogger(__name__)


class S3DocumentClient(UrlSigner):
    """S3 client for the document bucket (presigned downloads only)."""

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        client: Any | None = None,
    ) -> None:
        """
        Args:
            bucket: S3 bucket holding the documents
            region: AWS region of the bucket
            client: Preconfigured boto3 `s3` client (built if omitted)
        """
        self._bucket = bucket
        self._region = region
        self._s3_client = client or boto3.client("s3", region_name=region)

    def generate_presigned_download_url(
        self,
        s3_key: str,
        expires_in: int = 3600,
    ) -> tuple[str, datetime]:
        """
        Generate a presigned URL for downloading an S3 object.

        Args:
            s3_key: S3 object key (path in bucket)
            expires_in: URL expiry in seconds

        Returns:
            tuple[str, datetime]: (presigned_url, expires_at in UTC)

        Raises:
            ClientError: If presigned URL generation fails
        """
        presigned_url = self._s3_client.generate_presigned_url(
            ClientMethod="get_object",
            Params={
                "Bucket": self._bucket,
                "Key": s3_key,
            },
            ExpiresIn=expires_in,
        )
        expires_at = datetime.now(timezone.utc) + timedelta(seconds=expires_in)
        return presigned_url, expires_at

    async def sign(self, storage_path: str, expires_in: int) -> tuple[str, datetime]:
        """Async wrapper over generate_presigned_download_url."""
        try:
            return await asyncio.to_thread(
                self.generate_presigned_download_url, storage_path, expires_in
            )
        except ClientError as e:
            logger.error(
                f"{__name__}:sign - Failed to sign s3://{self._bucket}/{storage_path}: {e}"
            )
            raise
