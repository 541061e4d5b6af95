"""
Upload coordinator.

Orchestrates path normalization, the upload policy and the storage calls.
Every entry point of the tool (single-shot CLI upload, interactive session,
HTTP routes) goes through this one class.
"""
import os
from typing import Optional, Callable, List

from ..config import UploaderConfig
from ..exceptions import (
    NotConfiguredError,
    PathNotFoundError,
    FileMissingError,
    StorageError,
    RemoteUploadFailedError,
    ListFailedError,
)
from ..logging import get_logger
from ..path import PathNormalizer
from .models import UploadOutcome, UploadProgress, RemoteFile
from .protocols import StorageBackend, FileValidatorProtocol, LoggerProtocol
from .services import FileValidator, KeyGenerator, build_url, is_image_file, KEY_PREFIX

DEFAULT_LIST_LIMIT = 20


class UploadCoordinator:
    """
    Coordinates the file upload process.

    Uses dependency injection for all components, making it:
    - Testable (fake storage backend, fake WSL detection)
    - Independent of the Qiniu SDK at import time
    """

    def __init__(
        self,
        config: UploaderConfig,
        storage: Optional[StorageBackend] = None,
        normalizer: Optional[PathNormalizer] = None,
        validator: Optional[FileValidatorProtocol] = None,
        key_generator: Optional[KeyGenerator] = None,
        logger: Optional[LoggerProtocol] = None
    ):
        """
        Initialize upload coordinator.

        Args:
            config: Uploader configuration
            storage: Storage collaborator; None when credentials are missing
            normalizer: Path normalizer
            validator: Upload policy validator
            key_generator: Storage key generator
            logger: Logger instance
        """
        self.config = config
        self.storage = storage
        self.normalizer = normalizer or PathNormalizer()
        self.validator = validator or FileValidator()
        self.key_generator = key_generator or KeyGenerator()
        self._logger = logger or get_logger("qiniu_uploader.upload.coordinator")

    @classmethod
    def from_config(cls, config: UploaderConfig) -> "UploadCoordinator":
        """
        Build a coordinator with a Qiniu client if the config has credentials.

        Args:
            config: Loaded configuration

        Returns:
            UploadCoordinator (without storage when not configured)
        """
        storage = None
        if config.is_configured:
            from ...client import QiniuClient
            storage = QiniuClient(config.access_key, config.secret_key)
        return cls(config, storage=storage)

    @property
    def is_configured(self) -> bool:
        return self.storage is not None and self.config.is_configured

    def _require_storage(self) -> StorageBackend:
        if not self.is_configured:
            raise NotConfiguredError()
        return self.storage

    def upload(
        self,
        raw_path: str,
        progress_callback: Optional[Callable[[UploadProgress], None]] = None
    ) -> UploadOutcome:
        """
        Upload a local file.

        Args:
            raw_path: Path as typed by the user (quotes, padding and Windows
                paths under WSL are handled)
            progress_callback: Optional callback for progress updates

        Returns:
            UploadOutcome for the stored object

        Raises:
            NotConfiguredError: If no credentials are configured
            FileMissingError: If the path doesn't exist
            PolicyRejectedError: If the file violates the upload policy
            RemoteUploadFailedError: If the storage call fails
        """
        storage = self._require_storage()

        try:
            normalized = self.normalizer.normalize(raw_path)
        except PathNotFoundError as e:
            raise FileMissingError(e.path, e.message) from e

        file_path = normalized.value
        file_size = self.validator.validate(file_path)
        file_name = os.path.basename(file_path)
        key = self.key_generator.generate(file_name)

        self._logger.info(f"Uploading {file_path} ({file_size} bytes) as {key}")

        progress_handler = None
        if progress_callback is not None:
            def progress_handler(uploaded: int, total: int) -> None:
                progress_callback(UploadProgress(total_bytes=total, uploaded_bytes=uploaded))

        try:
            token = storage.upload_token(self.config.bucket)
            result = storage.put_file(token, key, file_path, progress_handler=progress_handler)
        except StorageError as e:
            self._logger.error(f"Upload of {file_path} failed: {e}")
            raise RemoteUploadFailedError(e.message) from e

        return UploadOutcome(
            success=True,
            remote_key=result.key,
            url=build_url(result.key, self.config.domain),
            size_bytes=file_size,
            hash=result.hash,
            file_name=file_name,
        )

    def upload_bytes(self, data: bytes, file_name: str) -> UploadOutcome:
        """
        Upload an in-memory payload, such as an HTTP multipart file.

        Args:
            data: File content
            file_name: Original file name (extension is checked and kept)

        Returns:
            UploadOutcome for the stored object

        Raises:
            NotConfiguredError: If no credentials are configured
            PolicyRejectedError: If the payload violates the upload policy
            RemoteUploadFailedError: If the storage call fails
        """
        storage = self._require_storage()

        self.validator.validate_extension(file_name)
        self.validator.validate_size(len(data))
        key = self.key_generator.generate(file_name)

        self._logger.info(f"Uploading {file_name} ({len(data)} bytes) as {key}")

        try:
            token = storage.upload_token(self.config.bucket)
            result = storage.put_data(token, key, data)
        except StorageError as e:
            self._logger.error(f"Upload of {file_name} failed: {e}")
            raise RemoteUploadFailedError(e.message) from e

        return UploadOutcome(
            success=True,
            remote_key=result.key,
            url=build_url(result.key, self.config.domain),
            size_bytes=len(data),
            hash=result.hash,
            file_name=file_name,
        )

    def list_files(
        self,
        prefix: str = KEY_PREFIX,
        limit: int = DEFAULT_LIST_LIMIT
    ) -> List[RemoteFile]:
        """
        List uploaded images.

        Args:
            prefix: Key prefix to list
            limit: Maximum number of entries requested from the service

        Returns:
            Image objects only, in listing order

        Raises:
            NotConfiguredError: If no credentials are configured
            ListFailedError: If the listing call fails
        """
        storage = self._require_storage()

        try:
            entries = storage.list_files(self.config.bucket, prefix, limit)
        except StorageError as e:
            raise ListFailedError(e.message) from e

        return [
            RemoteFile.from_entry(entry, build_url(entry["key"], self.config.domain))
            for entry in entries
            if is_image_file(entry.get("key", ""))
        ]
