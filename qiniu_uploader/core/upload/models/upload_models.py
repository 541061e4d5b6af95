"""
Data models for upload module.

Uses dataclasses for immutable, type-safe data structures.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Any, Optional


@dataclass(frozen=True)
class UploadRequest:
    """
    A single upload request as typed at the prompt.

    Attributes:
        raw_input: Unprocessed user input
    """
    raw_input: str


@dataclass(frozen=True)
class PutResult:
    """
    Result returned by the storage service for a stored object.

    Attributes:
        key: Object key
        hash: Content hash (Qiniu etag)
    """
    key: str
    hash: str


@dataclass(frozen=True)
class UploadOutcome:
    """
    Result of a successful upload.

    Attributes:
        success: Always True for a completed upload
        remote_key: Key of the stored object
        url: Public URL of the object
        size_bytes: Uploaded size
        hash: Content hash reported by the storage service
        message: Short status message
        file_name: Base name of the local file
    """
    success: bool
    remote_key: str
    url: str
    size_bytes: int
    hash: str = ""
    message: str = "Upload succeeded"
    file_name: str = ""


@dataclass(frozen=True)
class RemoteFile:
    """
    An object listed from the bucket.

    Attributes:
        key: Object key
        url: Public URL
        size: Size in bytes
        mime_type: MIME type reported by the service
        uploaded: Upload time (local timezone)
        hash: Content hash
    """
    key: str
    url: str
    size: int
    mime_type: str
    uploaded: datetime
    hash: str = ""

    @property
    def name(self) -> str:
        """Base name of the key."""
        return self.key.rsplit("/", 1)[-1]

    @classmethod
    def from_entry(cls, entry: Dict[str, Any], url: str) -> "RemoteFile":
        """
        Create from a bucket listing entry.

        Qiniu reports ``putTime`` in units of 100 nanoseconds.
        """
        put_time = int(entry.get("putTime", 0))
        return cls(
            key=entry["key"],
            url=url,
            size=int(entry.get("fsize", 0)),
            mime_type=entry.get("mimeType", ""),
            uploaded=datetime.fromtimestamp(put_time // 10_000_000),
            hash=entry.get("hash", ""),
        )


@dataclass
class UploadProgress:
    """
    Upload progress information.

    Attributes:
        total_bytes: Total file size
        uploaded_bytes: Bytes uploaded so far
    """
    total_bytes: int
    uploaded_bytes: int = 0

    @property
    def percentage(self) -> float:
        """Returns upload progress as percentage."""
        if self.total_bytes == 0:
            return 0.0
        return min(100.0, (self.uploaded_bytes / self.total_bytes) * 100)

    @property
    def is_complete(self) -> bool:
        """Returns True if upload is complete."""
        return self.uploaded_bytes >= self.total_bytes


def format_size(size: Optional[int]) -> str:
    """Format a byte count as ``1.23 MB``."""
    return f"{(size or 0) / 1024 / 1024:.2f} MB"
