"""Tests for UploadCoordinator."""
from unittest.mock import patch

import pytest

from qiniu_uploader.core.config import UploaderConfig
from qiniu_uploader.core.exceptions import (
    FileMissingError,
    ListFailedError,
    NotConfiguredError,
    PathConversionFailedError,
    PolicyRejectedError,
    RemoteUploadFailedError,
)
from qiniu_uploader.core.path import PathNormalizer
from qiniu_uploader.core.upload import UploadCoordinator
from qiniu_uploader.core.upload.services import KeyGenerator, MAX_FILE_SIZE

from tests.conftest import FakeStorage


class TestUpload:
    """Test suite for UploadCoordinator.upload."""

    def test_upload_success(self, coordinator, storage, make_file):
        path = make_file("cat.png", size=2048)

        outcome = coordinator.upload(str(path))

        assert outcome.success is True
        assert outcome.remote_key == "images/1700000000123456789.png"
        assert outcome.url == "https://cdn.example.org/images/1700000000123456789.png"
        assert outcome.size_bytes == 2048
        assert outcome.hash == "FhashOfFile"
        assert outcome.file_name == "cat.png"
        assert storage.tokens == ["test-bucket"]
        assert storage.uploads == [
            ("token-test-bucket", "images/1700000000123456789.png", str(path))
        ]

    def test_quoted_padded_input(self, coordinator, storage, make_file):
        path = make_file("cat.JPG")

        outcome = coordinator.upload(f'   "{path}"  ')

        assert outcome.remote_key.endswith(".JPG")
        assert storage.uploads[0][2] == str(path)

    def test_fallback_url_without_domain(self, config, storage, make_file):
        config.domain = ""
        coordinator = UploadCoordinator(
            config,
            storage=storage,
            normalizer=PathNormalizer(wsl_detector=lambda: False),
            key_generator=KeyGenerator(clock=lambda: 7),
        )

        outcome = coordinator.upload(str(make_file("a.gif")))

        assert outcome.url == "https://example.com/images/7.gif"

    def test_progress_callback(self, coordinator, make_file):
        seen = []

        coordinator.upload(str(make_file()), progress_callback=lambda p: seen.append(p.percentage))

        assert seen == [50.0, 100.0]

    def test_not_configured_without_storage(self, config, make_file):
        coordinator = UploadCoordinator(config, storage=None)

        with pytest.raises(NotConfiguredError):
            coordinator.upload(str(make_file()))

    def test_not_configured_without_credentials(self, storage, make_file):
        coordinator = UploadCoordinator(UploaderConfig(bucket="b"), storage=storage)

        with pytest.raises(NotConfiguredError):
            coordinator.upload(str(make_file()))
        assert storage.uploads == []

    def test_missing_file(self, coordinator, storage, tmp_path):
        with pytest.raises(FileMissingError) as exc_info:
            coordinator.upload(str(tmp_path / "gone.png"))

        assert exc_info.value.path == str(tmp_path / "gone.png")
        assert storage.uploads == []

    def test_missing_converted_path(self, config, storage):
        coordinator = UploadCoordinator(
            config,
            storage=storage,
            normalizer=PathNormalizer(wsl_detector=lambda: True, exists=lambda p: False),
        )

        with pytest.raises(FileMissingError) as exc_info:
            coordinator.upload("C:\\Users\\me\\cat.png")

        assert isinstance(exc_info.value.__cause__, PathConversionFailedError)
        assert exc_info.value.path == "/mnt/c/Users/me/cat.png"

    def test_windows_path_uploads_converted_path(self, config, storage):
        class RecordingValidator:
            def __init__(self):
                self.paths = []

            def validate(self, file_path):
                self.paths.append(file_path)
                return 5

        validator = RecordingValidator()
        coordinator = UploadCoordinator(
            config,
            storage=storage,
            normalizer=PathNormalizer(wsl_detector=lambda: True, exists=lambda p: True),
            validator=validator,
        )

        outcome = coordinator.upload('"C:\\Users\\me\\cat.png"')

        assert validator.paths == ["/mnt/c/Users/me/cat.png"]
        assert storage.uploads[0][2] == "/mnt/c/Users/me/cat.png"
        assert outcome.file_name == "cat.png"
        assert outcome.size_bytes == 5

    def test_policy_rejects_type(self, coordinator, storage, make_file):
        with pytest.raises(PolicyRejectedError):
            coordinator.upload(str(make_file("doc.pdf")))
        assert storage.uploads == []

    def test_policy_size_boundary(self, coordinator, storage, make_file):
        coordinator.upload(str(make_file("exact.png", size=MAX_FILE_SIZE)))

        with pytest.raises(PolicyRejectedError):
            coordinator.upload(str(make_file("over.png", size=MAX_FILE_SIZE + 1)))

        assert len(storage.uploads) == 1

    def test_remote_failure(self, config, make_file):
        coordinator = UploadCoordinator(
            config,
            storage=FakeStorage(fail_upload=True),
            normalizer=PathNormalizer(wsl_detector=lambda: False),
        )

        with pytest.raises(RemoteUploadFailedError, match="incorrect region"):
            coordinator.upload(str(make_file()))


class TestUploadBytes:
    """Test suite for UploadCoordinator.upload_bytes."""

    def test_success(self, coordinator, storage):
        outcome = coordinator.upload_bytes(b"\x89PNG", "screen.png")

        assert outcome.remote_key == "images/1700000000123456789.png"
        assert outcome.size_bytes == 4
        assert outcome.hash == "FhashOfData"
        assert storage.uploads[0][2] == b"\x89PNG"

    def test_rejects_type(self, coordinator):
        with pytest.raises(PolicyRejectedError):
            coordinator.upload_bytes(b"text", "notes.txt")

    def test_rejects_size(self, coordinator):
        with pytest.raises(PolicyRejectedError):
            coordinator.upload_bytes(b"x" * (MAX_FILE_SIZE + 1), "big.jpg")

    def test_not_configured(self, config):
        with pytest.raises(NotConfiguredError):
            UploadCoordinator(config).upload_bytes(b"x", "a.png")


class TestListFiles:
    """Test suite for UploadCoordinator.list_files."""

    def test_filters_images(self, config, sample_entries):
        storage = FakeStorage(entries=sample_entries)
        coordinator = UploadCoordinator(config, storage=storage)

        files = coordinator.list_files()

        assert [f.key for f in files] == [
            "images/1700000000000000001.png",
            "images/1700000000000000002.JPG",
        ]
        assert files[0].url == "https://cdn.example.org/images/1700000000000000001.png"
        assert storage.list_calls == [("test-bucket", "images/", 20)]

    def test_custom_prefix_and_limit(self, config):
        storage = FakeStorage()
        coordinator = UploadCoordinator(config, storage=storage)

        assert coordinator.list_files(prefix="", limit=50) == []
        assert storage.list_calls == [("test-bucket", "", 50)]

    def test_failure(self, config):
        coordinator = UploadCoordinator(config, storage=FakeStorage(fail_list=True))

        with pytest.raises(ListFailedError, match="no such bucket"):
            coordinator.list_files()

    def test_not_configured(self):
        with pytest.raises(NotConfiguredError):
            UploadCoordinator(UploaderConfig()).list_files()


class TestFromConfig:
    """Test suite for UploadCoordinator.from_config."""

    def test_without_credentials(self):
        coordinator = UploadCoordinator.from_config(UploaderConfig())

        assert coordinator.storage is None
        assert coordinator.is_configured is False

    def test_with_credentials(self, config):
        with patch("qiniu_uploader.client.QiniuClient") as client_cls:
            coordinator = UploadCoordinator.from_config(config)

        client_cls.assert_called_once_with("AKtest1234", "SKsecret5678")
        assert coordinator.storage is client_cls.return_value
        assert coordinator.is_configured is True
