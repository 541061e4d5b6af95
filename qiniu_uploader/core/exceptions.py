"""
Custom exceptions for the uploader.

Every error the tool reports to the user derives from UploaderError, so the
command dispatch boundaries (interactive session, CLI commands, HTTP routes)
can recover from all of them with a single except clause.
"""
from typing import Optional


class UploaderError(Exception):
    """Base exception for all uploader errors."""

    def __init__(self, message: str, error_code: Optional[str] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            error_code: Short machine-readable code (if available)
        """
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class ConfigError(UploaderError):
    """Raised when the configuration file cannot be read or written."""
    pass


class NotConfiguredError(UploaderError):
    """Raised when an operation needs Qiniu credentials that are not set."""

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(
            message or "Qiniu client is not configured, run 'qu config init' first",
            error_code="NOT_CONFIGURED"
        )


class PathNotFoundError(UploaderError):
    """Raised when a normalized path does not exist on the filesystem."""

    def __init__(self, path: str, message: Optional[str] = None) -> None:
        """
        Initialize the exception.

        Args:
            path: The path that could not be found
            message: Optional custom message
        """
        self.path = path
        super().__init__(message or f"File not found: {path}", error_code="NOT_FOUND")


class PathConversionFailedError(PathNotFoundError):
    """Raised when a Windows path maps to a WSL path that does not exist."""

    def __init__(self, original: str, converted: str) -> None:
        """
        Initialize the exception.

        Args:
            original: Path as typed by the user
            converted: The /mnt/<drive>/... path it was rewritten to
        """
        self.original = original
        self.converted = converted
        super().__init__(
            converted,
            f"Converted path does not exist: {converted} (from {original})"
        )
        self.error_code = "PATH_CONVERSION_FAILED"


class FileMissingError(UploaderError):
    """Raised when the file selected for upload is missing."""

    def __init__(self, path: str, message: Optional[str] = None) -> None:
        self.path = path
        super().__init__(message or f"File not found: {path}", error_code="FILE_MISSING")


class PolicyRejectedError(UploaderError):
    """Raised when a file violates the size limit or extension allow-list."""

    def __init__(self, reason: str, error_code: str = "POLICY_REJECTED") -> None:
        self.reason = reason
        super().__init__(reason, error_code=error_code)


class StorageError(UploaderError):
    """Raised by the Qiniu SDK wrapper when a request fails."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message returned by the service
            status_code: HTTP status code of the failed request
        """
        self.status_code = status_code
        super().__init__(message, error_code="STORAGE_ERROR")


class RemoteUploadFailedError(UploaderError):
    """Raised when the storage service rejects or fails an upload."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Upload failed: {message}", error_code="REMOTE_UPLOAD_FAILED")


class ListFailedError(UploaderError):
    """Raised when listing remote files fails."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Failed to list files: {message}", error_code="LIST_FAILED")
