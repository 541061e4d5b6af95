"""Upload models."""
from .upload_models import (
    UploadRequest,
    PutResult,
    UploadOutcome,
    RemoteFile,
    UploadProgress,
    format_size
)

__all__ = [
    'UploadRequest',
    'PutResult',
    'UploadOutcome',
    'RemoteFile',
    'UploadProgress',
    'format_size'
]
