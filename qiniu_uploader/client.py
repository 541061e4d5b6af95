"""
QiniuClient - thin wrapper around the official Qiniu SDK.

Example:
    >>> client = QiniuClient(access_key, secret_key)
    >>> token = client.upload_token("my-bucket")
    >>> result = client.put_file(token, "images/1.png", "/tmp/1.png")
    >>> print(result.key, result.hash)
"""
from typing import Optional, List, Dict, Any, Tuple

import qiniu

from .core.exceptions import StorageError
from .core.logging import get_logger
from .core.upload.models import PutResult
from .core.upload.protocols import ProgressHandler

logger = get_logger("qiniu_uploader.client")

DEFAULT_TOKEN_EXPIRES = 3600


class QiniuClient:
    """
    Storage collaborator backed by Qiniu Kodo.

    The SDK's ``Auth`` and ``BucketManager`` are built once per client and
    reused for every call of the session.
    """

    def __init__(self, access_key: str, secret_key: str):
        """
        Initialize client.

        Args:
            access_key: Qiniu access key
            secret_key: Qiniu secret key
        """
        self._auth = qiniu.Auth(access_key, secret_key)
        self._bucket_manager: Optional[qiniu.BucketManager] = None

    @property
    def bucket_manager(self) -> qiniu.BucketManager:
        if self._bucket_manager is None:
            self._bucket_manager = qiniu.BucketManager(self._auth)
        return self._bucket_manager

    def upload_token(
        self,
        bucket: str,
        key: Optional[str] = None,
        expires: int = DEFAULT_TOKEN_EXPIRES
    ) -> str:
        """
        Create an upload token scoped to a bucket.

        Args:
            bucket: Target bucket
            key: Optional key the token is restricted to
            expires: Token lifetime in seconds

        Returns:
            Signed upload token
        """
        return self._auth.upload_token(bucket, key, expires)

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
            progress_handler: Called by the SDK with (uploaded_bytes, total_bytes)

        Returns:
            PutResult with stored key and hash

        Raises:
            StorageError: If the upload fails
        """
        logger.debug(f"put_file key={key} path={file_path}")
        try:
            ret, info = qiniu.put_file_v2(
                token,
                key,
                file_path,
                progress_handler=progress_handler
            )
        except Exception as e:
            raise StorageError(f"Request failed: {e}") from e
        return self._put_result(key, ret, info)

    def put_data(self, token: str, key: str, data: bytes) -> PutResult:
        """
        Upload an in-memory payload.

        Raises:
            StorageError: If the upload fails
        """
        logger.debug(f"put_data key={key} size={len(data)}")
        try:
            ret, info = qiniu.put_data(token, key, data)
        except Exception as e:
            raise StorageError(f"Request failed: {e}") from e
        return self._put_result(key, ret, info)

    def list_files(
        self,
        bucket: str,
        prefix: Optional[str] = None,
        limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """
        List objects in a bucket.

        Only the first page is fetched.

        Args:
            bucket: Bucket name
            prefix: Key prefix filter
            limit: Maximum number of entries

        Returns:
            Listing entries (key, fsize, mimeType, putTime, hash, ...)

        Raises:
            StorageError: If the listing fails
        """
        try:
            ret, eof, info = self.bucket_manager.list(bucket, prefix=prefix, limit=limit)
        except Exception as e:
            raise StorageError(f"Request failed: {e}") from e
        self._check(info)
        if not ret:
            return []
        items = ret.get("items", [])
        logger.debug(f"Listed {len(items)} objects in {bucket} (eof={eof})")
        return items

    def _put_result(self, key: str, ret: Optional[Dict[str, Any]], info: Any) -> PutResult:
        self._check(info)
        if not ret:
            raise StorageError("Empty response from upload", getattr(info, "status_code", None))
        return PutResult(key=ret.get("key", key), hash=ret.get("hash", ""))

    @staticmethod
    def _check(info: Any) -> None:
        if info is None or info.ok():
            return
        message, status = _describe(info)
        raise StorageError(message, status)


def _describe(info: Any) -> Tuple[str, Optional[int]]:
    status = getattr(info, "status_code", None)
    message = getattr(info, "error", None) or getattr(info, "text_body", None) or "unknown error"
    return f"{message} (status {status})", status
