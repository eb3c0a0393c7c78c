"""
S3 Documents bucket configuration.

Settings for raw document storage and signed download URL freshness.

Dependencies: pydantic_settings
System role: S3 documents bucket configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class S3DocumentsSettings(BaseSettings):
    """Settings for S3 documents bucket operations."""

    model_config = SettingsConfigDict(
        env_prefix="S3_DOCUMENTS_",
        case_sensitive=False,
        extra="ignore",
    )

    bucket: str = Field(
        default="ragdesk-documents",
        description="S3 bucket for raw document storage",
    )
    region: str = Field(
        default="us-east-1",
        description="AWS region for S3 bucket",
    )
    signed_url_expiry: int = Field(
        default=7 * 24 * 60 * 60,
        description="Signed download URL lifetime in seconds (default 7 days)",
    )
    refresh_threshold_hours: int = Field(
        default=24,
        description="Regenerate signed URLs expiring within this many hours",
    )
