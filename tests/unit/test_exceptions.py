"""Tests for the exception hierarchy."""
from qiniu_uploader.core.exceptions import (
    ConfigError,
    FileMissingError,
    ListFailedError,
    NotConfiguredError,
    PathConversionFailedError,
    PathNotFoundError,
    PolicyRejectedError,
    RemoteUploadFailedError,
    StorageError,
    UploaderError,
)


def test_all_derive_from_uploader_error():
    errors = [
        ConfigError("x"),
        NotConfiguredError(),
        PathNotFoundError("/a"),
        PathConversionFailedError("C:\\a", "/mnt/c/a"),
        FileMissingError("/a"),
        PolicyRejectedError("too big"),
        StorageError("boom", 500),
        RemoteUploadFailedError("boom"),
        ListFailedError("boom"),
    ]

    assert all(isinstance(e, UploaderError) for e in errors)


def test_conversion_failure_is_not_found():
    error = PathConversionFailedError("C:\\a.png", "/mnt/c/a.png")

    assert isinstance(error, PathNotFoundError)
    assert error.path == "/mnt/c/a.png"
    assert error.error_code == "PATH_CONVERSION_FAILED"
    assert "C:\\a.png" in error.message


def test_messages():
    assert str(PathNotFoundError("/a.png")) == "File not found: /a.png"
    assert RemoteUploadFailedError("denied").message == "Upload failed: denied"
    assert ListFailedError("denied").message == "Failed to list files: denied"
    assert "qu config init" in NotConfiguredError().message
    assert NotConfiguredError().error_code == "NOT_CONFIGURED"
