"""Tests for the sequential batch upload flow."""

import asyncio

import pytest

from photoshare.domain.errors import ValidationError
from photoshare.domain.uploads import BatchStatus, SelectedFile
from photoshare.services.uploads import UploadService
from tests.conftest import FakeMediaHostClient, InMemoryPhotoRepository


def _image(filename: str) -> SelectedFile:
    return SelectedFile(filename=filename, content_type="image/jpeg", content=b"img")


def test_batch_continues_after_failed_upload() -> None:
    media_client = FakeMediaHostClient(failing_filenames={"two.jpg"})
    repository = InMemoryPhotoRepository()
    service = UploadService(media_client=media_client, repository=repository)

    summary = asyncio.run(
        service.upload_batch(
            [_image("one.jpg"), _image("two.jpg"), _image("three.jpg")]
        )
    )

    assert media_client.uploads == ["one.jpg", "two.jpg", "three.jpg"]
    assert summary.success_count == 2
    assert summary.failure_count == 1
    assert summary.succeeded
    assert summary.status is BatchStatus.PARTIAL_FAILURE
    assert summary.error_message == "1 file failed to upload."
    assert [photo.title for photo in repository.list_photos()] == ["three", "one"]


def test_zero_files_rejected_before_network() -> None:
    media_client = FakeMediaHostClient()
    service = UploadService(
        media_client=media_client, repository=InMemoryPhotoRepository()
    )

    with pytest.raises(ValidationError):
        asyncio.run(service.upload_batch([]))

    assert media_client.uploads == []


def test_non_images_are_excluded_and_reported() -> None:
    media_client = FakeMediaHostClient()
    service = UploadService(
        media_client=media_client, repository=InMemoryPhotoRepository()
    )
    notes = SelectedFile(filename="notes.txt", content_type="text/plain", content=b"x")

    summary = asyncio.run(service.upload_batch([notes, _image("cat.png")]))

    assert media_client.uploads == ["cat.png"]
    assert summary.rejected == ["notes.txt"]
    assert summary.success_count == 1
    assert summary.status is BatchStatus.PARTIAL_FAILURE


def test_all_invalid_files_fail_without_network() -> None:
    media_client = FakeMediaHostClient()
    service = UploadService(
        media_client=media_client, repository=InMemoryPhotoRepository()
    )
    empty = SelectedFile(filename="empty.jpg", content_type="image/jpeg", content=b"")

    summary = asyncio.run(service.upload_batch([empty]))

    assert media_client.uploads == []
    assert summary.status is BatchStatus.FAILED
    assert not summary.succeeded


def test_all_uploads_failing_reports_failure() -> None:
    media_client = FakeMediaHostClient(failing_filenames={"a.jpg", "b.jpg"})
    service = UploadService(
        media_client=media_client, repository=InMemoryPhotoRepository()
    )

    summary = asyncio.run(service.upload_batch([_image("a.jpg"), _image("b.jpg")]))

    assert summary.status is BatchStatus.FAILED
    assert summary.error_message == "2 files failed to upload."


def test_store_failure_counts_as_item_failure() -> None:
    media_client = FakeMediaHostClient()
    repository = InMemoryPhotoRepository(fail_insert=True)
    service = UploadService(media_client=media_client, repository=repository)

    summary = asyncio.run(service.upload_batch([_image("a.jpg")]))

    assert media_client.uploads == ["a.jpg"]
    assert summary.failure_count == 1
    assert summary.results[0].error == "Failed to save photo"


def test_explicit_title_and_description_are_trimmed() -> None:
    repository = InMemoryPhotoRepository()
    service = UploadService(media_client=FakeMediaHostClient(), repository=repository)

    summary = asyncio.run(
        service.upload_batch(
            [_image("IMG_0001.jpeg")], title="  Summer  ", description="   "
        )
    )

    photo = summary.photos[0]
    assert photo.title == "Summer"
    assert photo.description is None
    assert photo.media_id == "gallery/1"


def test_title_falls_back_to_file_stem() -> None:
    repository = InMemoryPhotoRepository()
    service = UploadService(media_client=FakeMediaHostClient(), repository=repository)

    summary = asyncio.run(
        service.upload_batch([_image("holiday.photo.jpg")], title="  ")
    )

    assert summary.photos[0].title == "holiday.photo"
    assert summary.status is BatchStatus.DONE
    assert summary.error_message is None
