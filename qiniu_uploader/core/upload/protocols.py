"""
Protocol definitions for upload module.

Defines the interfaces the upload coordinator depends on, so the Qiniu SDK
wrapper can be replaced by a fake in tests.
"""
from typing import Protocol, Dict, Any, List, Optional, Callable

from .models import PutResult


ProgressHandler = Callable[[int, int], None]


class StorageBackend(Protocol):
    """
    Protocol for the object storage collaborator.

    Implemented by QiniuClient.
    """

    def upload_token(self, bucket: str, key: Optional[str] = None) -> str:
        """
        Create an upload token scoped to a bucket.

        Args:
            bucket: Target bucket
            key: Optional key the token is restricted to

        Returns:
            Signed upload token
        """
        ...

    def put_file(
        self,
        token: str,
        key: str,
        file_path: str,
        progress_handler: Optional[ProgressHandler] = None
    ) -> PutResult:
        """
        Upload a local file.

        Args:
            token: Upload token
            key: Object key
            file_path: Local file to upload
            progress_handler: Called with (uploaded_bytes, total_bytes)

        Returns:
            PutResult with stored key and hash
        """
        ...

    def put_data(self, token: str, key: str, data: bytes) -> PutResult:
        """Upload an in-memory payload."""
        ...

    def list_files(self, bucket: str, prefix: str, limit: int) -> List[Dict[str, Any]]:
        """
        List objects in a bucket.

        Returns:
            Raw listing entries with key, fsize, mimeType and putTime
        """
        ...


class FileValidatorProtocol(Protocol):
    """Protocol for upload policy checks."""

    def validate(self, file_path: str) -> int:
        """
        Validate a file for upload.

        Returns:
            File size in bytes
        """
        ...

    def validate_extension(self, file_name: str) -> None:
        ...

    def validate_size(self, file_size: int, max_size: Optional[int] = None) -> None:
        ...


class LoggerProtocol(Protocol):
    """Protocol for logger objects."""

    def debug(self, msg: str) -> None: ...
    def info(self, msg: str) -> None: ...
    def warning(self, msg: str) -> None: ...
    def error(self, msg: str) -> None: ...
