"""
Document metadata loader.

Reads document records from the metadata store and makes sure each carries
a usable signed download URL. URLs that are missing, have no expiry, or
expire within the refresh threshold are regenerated and written back.

Dependencies: ragdesk.core.interfaces
System role: Source of fresh records for the metadata cache
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

from pydantic import ValidationError

from ragdesk.core.exceptions import MetadataStoreError
from ragdesk.core.interfaces import MetadataStore, UrlSigner
from ragdesk.models.external_document import ExternalDocumentMeta

logger = logging.getLogger(__name__)

SEVEN_DAYS_S = 7 * 24 * 60 * 60


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: Any) -> datetime | None:
    """Coerce a stored timestamp (datetime or ISO string) to aware UTC."""
    if value is None or value == "":
        return None
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            logger.warning(f"{__name__}:_as_utc - Unparseable timestamp: {value!r}")
            return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class DocumentMetadataLoader:
    """
    Loads document records and refreshes their signed URLs.

    Attributes:
        store: Persistent document metadata
        signer: Issues new download URLs
        signed_url_expiry: Lifetime of regenerated URLs in seconds
        refresh_threshold: Remaining lifetime under which a URL is regenerated
    """

    def __init__(
        self,
        store: MetadataStore,
        signer: UrlSigner,
        signed_url_expiry: int = SEVEN_DAYS_S,
        refresh_threshold_hours: int = 24,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.store = store
        self.signer = signer
        self.signed_url_expiry = signed_url_expiry
        self.refresh_threshold = timedelta(hours=refresh_threshold_hours)
        self._clock = clock

    async def load_all(self) -> list[ExternalDocumentMeta]:
        """
        Load every document with a fresh signed URL where possible.

        A failure on one record never fails the load; that record keeps its
        current URL, or an empty one.

        Raises:
            MetadataStoreError: If the store cannot be read at all
        """
        rows = await self.store.fetch_all()
        logger.info(f"{__name__}:load_all - Loaded {len(rows)} document rows")

        documents = []
        for row in rows:
            try:
                documents.append(await self._ensure_fresh(row))
            except Exception as e:
                logger.warning(
                    f"{__name__}:load_all - Could not process document {row.get('id')}: {e}"
                )
                documents.append(self._fallback_meta(row))
        return documents

    async def get_by_id(self, document_id: str) -> ExternalDocumentMeta | None:
        """Load one document with the same freshness policy, or None."""
        try:
            row = await self.store.fetch_by_id(document_id)
        except MetadataStoreError as e:
            logger.error(f"{__name__}:get_by_id - Failed to fetch {document_id}: {e}")
            return None
        if row is None:
            return None
        return await self._ensure_fresh(row)

    def needs_refresh(self, row: dict[str, Any]) -> bool:
        """True when the URL is missing, has no expiry, or expires soon."""
        expires_at = _as_utc(row.get("signed_url_expires_at"))
        if not row.get("signed_url") or expires_at is None:
            return True
        return expires_at <= self._clock() + self.refresh_threshold

    async def _ensure_fresh(self, row: dict[str, Any]) -> ExternalDocumentMeta:
        signed_url = row.get("signed_url") or ""
        expires_at = _as_utc(row.get("signed_url_expires_at"))
        storage_path = row.get("storage_path")

        if self.needs_refresh(row) and storage_path:
            try:
                signed_url, expires_at = await self.signer.sign(
                    storage_path, self.signed_url_expiry
                )
            except Exception as e:
                logger.error(
                    f"{__name__}:_ensure_fresh - Failed to sign URL for {row['id']}: {e}"
                )
            else:
                await self._persist(str(row["id"]), signed_url, expires_at)

        return self._to_meta(row, signed_url, expires_at)

    async def _persist(self, document_id: str, signed_url: str, expires_at: datetime) -> None:
        try:
            await self.store.save_signed_url(document_id, signed_url, expires_at)
        except Exception as e:
            # The new URL is still valid for this snapshot
            logger.warning(
                f"{__name__}:_persist - Failed to store signed URL for {document_id}: {e}"
            )

    @staticmethod
    def _to_meta(
        row: dict[str, Any],
        signed_url: str,
        expires_at: datetime | None = None,
    ) -> ExternalDocumentMeta:
        return ExternalDocumentMeta(
            id=str(row["id"]),
            signed_url=signed_url,
            file_name=row.get("original_name"),
            file_size=row.get("file_size"),
            content_type=row.get("content_type"),
            storage_path=row.get("storage_path"),
            signed_url_expires_at=expires_at or _as_utc(row.get("signed_url_expires_at")),
            alias=row.get("alias"),
            description=row.get("description"),
            area=row.get("area"),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )

    @staticmethod
    def _fallback_meta(row: dict[str, Any]) -> ExternalDocumentMeta:
        """Record for a row that failed processing, keeping every well-typed field."""
        try:
            expires_at = _as_utc(row.get("signed_url_expires_at"))
        except (TypeError, AttributeError):
            expires_at = None

        candidates = {
            "signed_url": row.get("signed_url") or "",
            "file_name": row.get("original_name"),
            "file_size": row.get("file_size"),
            "content_type": row.get("content_type"),
            "storage_path": row.get("storage_path"),
            "signed_url_expires_at": expires_at,
            "alias": row.get("alias"),
            "description": row.get("description"),
            "area": row.get("area"),
            "created_at": row.get("created_at"),
            "updated_at": row.get("updated_at"),
        }
        document_id = str(row.get("id"))
        fields: dict[str, Any] = {}
        for key, value in candidates.items():
            try:
                ExternalDocumentMeta(id=document_id, **{key: value})
            except ValidationError:
                logger.debug(f"{__name__}:_fallback_meta - Dropping {key} of {document_id}")
                continue
            fields[key] = value
        return ExternalDocumentMeta(id=document_id, **fields)
