"""AWS boundary: S3 document download links."""

from ragdesk.boundary.aws.s3_client import S3DocumentClient

__all__ = ["S3DocumentClient"]
