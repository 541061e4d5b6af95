"""Pytest fixtures for qiniu_uploader tests."""
import pytest

from qiniu_uploader.core.config import UploaderConfig
from qiniu_uploader.core.exceptions import StorageError
from qiniu_uploader.core.path import PathNormalizer
from qiniu_uploader.core.upload import UploadCoordinator, PutResult
from qiniu_uploader.core.upload.services import KeyGenerator


class FakeStorage:
    """In-memory stand-in for QiniuClient."""

    def __init__(self, entries=None, fail_upload=False, fail_list=False):
        self.entries = entries or []
        self.fail_upload = fail_upload
        self.fail_list = fail_list
        self.tokens = []
        self.uploads = []
        self.list_calls = []

    def upload_token(self, bucket, key=None):
        self.tokens.append(bucket)
        return f"token-{bucket}"

    def put_file(self, token, key, file_path, progress_handler=None):
        if self.fail_upload:
            raise StorageError("incorrect region (status 400)", 400)
        self.uploads.append((token, key, file_path))
        if progress_handler is not None:
            progress_handler(50, 100)
            progress_handler(100, 100)
        return PutResult(key=key, hash="FhashOfFile")

    def put_data(self, token, key, data):
        if self.fail_upload:
            raise StorageError("incorrect region (status 400)", 400)
        self.uploads.append((token, key, data))
        return PutResult(key=key, hash="FhashOfData")

    def list_files(self, bucket, prefix, limit):
        self.list_calls.append((bucket, prefix, limit))
        if self.fail_list:
            raise StorageError("no such bucket (status 631)", 631)
        return self.entries


@pytest.fixture
def config():
    """Returns a fully configured UploaderConfig."""
    return UploaderConfig(
        access_key="AKtest1234",
        secret_key="SKsecret5678",
        bucket="test-bucket",
        domain="cdn.example.org",
        show_progress=False,
    )


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def coordinator(config, storage):
    """Coordinator with fake storage, fixed clock and WSL detection off."""
    return UploadCoordinator(
        config,
        storage=storage,
        normalizer=PathNormalizer(wsl_detector=lambda: False),
        key_generator=KeyGenerator(clock=lambda: 1700000000123456789),
    )


@pytest.fixture
def make_file(tmp_path):
    """Factory creating a file of a given size under tmp_path."""
    def _make(name="photo.png", size=128):
        path = tmp_path / name
        with open(path, "wb") as fh:
            fh.truncate(size)
        return path
    return _make


@pytest.fixture
def sample_entries():
    """Returns bucket listing entries as the Qiniu API reports them."""
    return [
        {
            'key': 'images/1700000000000000001.png',
            'hash': 'Fhash1',
            'fsize': 2 * 1024 * 1024,
            'mimeType': 'image/png',
            'putTime': 17000000000000000,
        },
        {
            'key': 'images/notes.txt',
            'hash': 'Fhash2',
            'fsize': 10,
            'mimeType': 'text/plain',
            'putTime': 17000000000000000,
        },
        {
            'key': 'images/1700000000000000002.JPG',
            'hash': 'Fhash3',
            'fsize': 512,
            'mimeType': 'image/jpeg',
            'putTime': 17000000010000000,
        },
    ]
