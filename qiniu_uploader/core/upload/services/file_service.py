"""
File validation service.

Applies the upload policy: regular file, size limit and image extension
allow-list.
"""
import os
from pathlib import Path
from typing import Iterable, Optional, Union

from ...exceptions import FileMissingError, PolicyRejectedError

MAX_FILE_SIZE = 10 * 1024 * 1024
IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp", ".bmp")


def get_extension(name: str) -> str:
    """Extension of a file name or key, including the dot, as typed."""
    return os.path.splitext(name)[1]


def is_image_file(name: str, allowed: Iterable[str] = IMAGE_EXTENSIONS) -> bool:
    """Check the extension against the allow-list, case-insensitively."""
    return get_extension(name).lower() in tuple(allowed)


class FileValidator:
    """
    Validates files before upload.

    Responsibilities:
    - Check file existence
    - Verify file is not a directory
    - Enforce the size limit and extension allow-list
    """

    def __init__(
        self,
        max_size: int = MAX_FILE_SIZE,
        allowed_extensions: Iterable[str] = IMAGE_EXTENSIONS
    ):
        self.max_size = max_size
        self.allowed_extensions = tuple(ext.lower() for ext in allowed_extensions)

    def validate(self, file_path: Union[str, Path]) -> int:
        """
        Validate a file for upload.

        Args:
            file_path: Path to the file

        Returns:
            File size in bytes

        Raises:
            FileMissingError: If file doesn't exist
            PolicyRejectedError: If the file is not a regular file or violates policy
        """
        path = Path(file_path)

        if not path.exists():
            raise FileMissingError(str(path))

        if not path.is_file():
            raise PolicyRejectedError(f"Path is not a file: {path}", "NOT_A_FILE")

        self.validate_extension(path.name)

        file_size = path.stat().st_size
        self.validate_size(file_size)

        return file_size

    def validate_extension(self, file_name: str) -> None:
        """
        Validate the file extension.

        Raises:
            PolicyRejectedError: If the extension is not allowed
        """
        if not is_image_file(file_name, self.allowed_extensions):
            allowed = ", ".join(ext.lstrip(".") for ext in self.allowed_extensions)
            raise PolicyRejectedError(
                f"Unsupported file type {file_name!r}, only images are allowed ({allowed})",
                "INVALID_FILE_TYPE"
            )

    def validate_size(self, file_size: int, max_size: Optional[int] = None) -> None:
        """
        Validate file size.

        Args:
            file_size: File size in bytes
            max_size: Optional override for the maximum allowed size

        Raises:
            PolicyRejectedError: If the size exceeds the limit
        """
        limit = max_size if max_size is not None else self.max_size
        if file_size > limit:
            raise PolicyRejectedError(
                f"File size {file_size} bytes exceeds the {limit // (1024 * 1024)}MB limit",
                "FILE_TOO_LARGE"
            )
