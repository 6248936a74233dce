"""Domain models for the batch upload flow."""

from dataclasses import dataclass, field
from enum import Enum

from photoshare.domain.photos import Photo


@dataclass(frozen=True)
class UploadedMedia:
    """Asset stored on the media host."""

    url: str
    media_id: str
    width: int | None
    height: int | None


@dataclass(frozen=True)
class SelectedFile:
    """A file selected by the user for upload."""

    filename: str
    content_type: str
    content: bytes


class BatchStatus(Enum):
    """Terminal state of a batch upload."""

    DONE = "done"
    PARTIAL_FAILURE = "partial_failure"
    FAILED = "failed"


@dataclass(frozen=True)
class UploadItemResult:
    """Per-file result: either a stored photo or an error message."""

    filename: str
    photo: Photo | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Return True when the file was uploaded and recorded."""
        return self.photo is not None


@dataclass(frozen=True)
class BatchUploadSummary:
    """Aggregated outcome of a batch upload."""

    results: list[UploadItemResult] = field(default_factory=list)
    rejected: list[str] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return sum(1 for result in self.results if result.ok)

    @property
    def failure_count(self) -> int:
        return sum(1 for result in self.results if not result.ok)

    @property
    def photos(self) -> list[Photo]:
        return [result.photo for result in self.results if result.photo is not None]

    @property
    def succeeded(self) -> bool:
        """Return True when at least one file made it, so views should refresh."""
        return self.success_count > 0

    @property
    def status(self) -> BatchStatus:
        if self.success_count == 0:
            return BatchStatus.FAILED
        if self.failure_count or self.rejected:
            return BatchStatus.PARTIAL_FAILURE
        return BatchStatus.DONE

    @property
    def error_message(self) -> str | None:
        """Return a user-facing message for failed or rejected files."""
        parts = []
        if self.failure_count:
            noun = "file" if self.failure_count == 1 else "files"
            parts.append(f"{self.failure_count} {noun} failed to upload.")
        if self.rejected:
            noun = "file was" if len(self.rejected) == 1 else "files were"
            parts.append(f"{len(self.rejected)} {noun} not a valid image.")
        if not parts:
            return None
        return " ".join(parts)
