"""Sequential batch upload: media host first, then the data store."""

import logging
from dataclasses import dataclass
from pathlib import PurePath

from photoshare.adapters.cloudinary_client import MediaHostClient
from photoshare.domain.errors import StoreError, UploadError, ValidationError
from photoshare.domain.photos import NewPhoto
from photoshare.domain.uploads import (
    BatchUploadSummary,
    SelectedFile,
    UploadItemResult,
)
from photoshare.services.photos import PhotoRepository

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Untitled"


@dataclass
class UploadService:
    """Uploads selected files one at a time and records them."""

    media_client: MediaHostClient
    repository: PhotoRepository

    @staticmethod
    def validate_files(
        files: list[SelectedFile],
    ) -> tuple[list[SelectedFile], list[str]]:
        """Split files into accepted images and rejected filenames."""
        accepted: list[SelectedFile] = []
        rejected: list[str] = []
        for upload in files:
            if upload.content_type.startswith("image/") and upload.content:
                accepted.append(upload)
            else:
                logger.warning(
                    "Rejected non-image upload",
                    extra={"upload_filename": upload.filename},
                )
                rejected.append(upload.filename)
        return accepted, rejected

    async def upload_batch(
        self,
        files: list[SelectedFile],
        title: str | None = None,
        description: str | None = None,
    ) -> BatchUploadSummary:
        """Upload every valid file, continuing past per-file failures."""
        if not files:
            raise ValidationError("Please select at least one image")
        accepted, rejected = self.validate_files(files)
        cleaned_description = (description or "").strip() or None
        results = []
        for upload in accepted:
            results.append(
                await self._upload_one(
                    upload, _resolve_title(title, upload.filename), cleaned_description
                )
            )
        summary = BatchUploadSummary(results=results, rejected=rejected)
        logger.info(
            "Batch upload finished",
            extra={
                "status": summary.status.value,
                "success_count": summary.success_count,
                "failure_count": summary.failure_count,
                "rejected_count": len(rejected),
            },
        )
        return summary

    async def _upload_one(
        self, upload: SelectedFile, title: str, description: str | None
    ) -> UploadItemResult:
        try:
            media = await self.media_client.upload(
                upload.content, upload.filename, upload.content_type
            )
        except UploadError as exc:
            logger.exception(
                "Media upload failed", extra={"upload_filename": upload.filename}
            )
            return UploadItemResult(filename=upload.filename, error=str(exc))
        try:
            photo = self.repository.insert_photo(
                NewPhoto(
                    title=title,
                    description=description,
                    media_url=media.url,
                    media_id=media.media_id,
                )
            )
        except StoreError as exc:
            # The hosted asset stays behind without a record.
            logger.exception(
                "Failed to record uploaded media",
                extra={"upload_filename": upload.filename, "media_id": media.media_id},
            )
            return UploadItemResult(filename=upload.filename, error=str(exc))
        return UploadItemResult(filename=upload.filename, photo=photo)


def _resolve_title(title: str | None, filename: str) -> str:
    """Use the explicit title, else the file's base name without extension."""
    explicit = (title or "").strip()
    if explicit:
        return explicit
    return PurePath(filename).stem.strip() or DEFAULT_TITLE
