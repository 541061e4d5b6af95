"""Object key and public URL generation."""
import time
from typing import Callable, Optional

from .file_service import get_extension

KEY_PREFIX = "images/"
FALLBACK_HOST = "example.com"


class KeyGenerator:
    """
    Builds storage keys as ``images/<unix-nanoseconds><extension>``.

    Keys are unique by timestamp; there is no collision check.
    """

    def __init__(
        self,
        prefix: str = KEY_PREFIX,
        clock: Optional[Callable[[], int]] = None
    ):
        self.prefix = prefix
        self._clock = clock or time.time_ns

    def generate(self, file_name: str) -> str:
        return f"{self.prefix}{self._clock()}{get_extension(file_name)}"


def build_url(key: str, domain: Optional[str] = None) -> str:
    """
    Public URL of an object.

    Args:
        key: Object key
        domain: Custom domain bound to the bucket; a placeholder host is
            used when it is not configured

    Returns:
        ``https://<domain>/<key>``
    """
    host = (domain or "").strip().rstrip("/")
    if host.startswith("http://") or host.startswith("https://"):
        return f"{host}/{key}"
    return f"https://{host or FALLBACK_HOST}/{key}"
