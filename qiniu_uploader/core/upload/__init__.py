"""
Upload module.

Provides the single upload path of the tool: normalize the input path, apply
the upload policy, then store the file through the storage collaborator.
"""
from .coordinator import UploadCoordinator
from .models import UploadOutcome, UploadProgress, UploadRequest, RemoteFile, PutResult
from .protocols import StorageBackend, FileValidatorProtocol
from .services import FileValidator, KeyGenerator, build_url

__all__ = [
    # Main classes
    'UploadCoordinator',
    'FileValidator',
    'KeyGenerator',
    'build_url',

    # Models
    'UploadOutcome',
    'UploadProgress',
    'UploadRequest',
    'RemoteFile',
    'PutResult',

    # Protocols
    'StorageBackend',
    'FileValidatorProtocol',
]
