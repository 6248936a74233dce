"""Error taxonomy shared by services and adapters."""


class PhotoShareError(Exception):
    """Base class for application errors."""


class ValidationError(PhotoShareError):
    """Raised when user input is missing or invalid."""


class UploadError(PhotoShareError):
    """Raised when the media host rejects or fails an upload."""


class StoreError(PhotoShareError):
    """Raised when a data store query fails."""


class NotFoundError(StoreError):
    """Raised when a photo record does not exist."""
