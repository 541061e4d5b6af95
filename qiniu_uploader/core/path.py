"""
Local path normalization.

Paths dropped into a terminal arrive padded, sometimes quoted, and under WSL
often in Windows form (``C:\\Users\\me\\cat.png``). PathNormalizer turns such
input into a path the local filesystem understands and verifies it exists.
"""
import os
import string
import sys
from dataclasses import dataclass
from typing import Callable, Optional

from .exceptions import PathConversionFailedError, PathNotFoundError
from .logging import get_logger

logger = get_logger("qiniu_uploader.path")

PROC_VERSION_PATH = "/proc/version"
WSL_ENV_MARKERS = ("WSL_DISTRO_NAME", "WSL_INTEROP")
WSL_MOUNT_ROOT = "/mnt"

_DRIVE_LETTERS = frozenset(string.ascii_letters)


@dataclass(frozen=True)
class NormalizedPath:
    """
    A path ready for local filesystem use.

    Attributes:
        value: Cleaned (and, under WSL, converted) path string
        existed_on_disk: Whether the path existed when it was normalized
    """
    value: str
    existed_on_disk: bool


def clean_input(raw: str) -> str:
    """
    Strip surrounding whitespace and one layer of enclosing double quotes.

    Args:
        raw: Text as typed or dropped into the terminal

    Returns:
        The cleaned string
    """
    cleaned = raw.strip()
    if len(cleaned) >= 2 and cleaned.startswith('"') and cleaned.endswith('"'):
        cleaned = cleaned[1:-1]
    return cleaned


def is_windows_path(path: str) -> bool:
    """
    Check for a drive-letter path such as ``C:\\dir`` or ``d:/dir``.

    Args:
        path: Candidate path

    Returns:
        True if the path starts with ``<letter>:\\`` or ``<letter>:/``
    """
    if len(path) < 3:
        return False
    return path[0] in _DRIVE_LETTERS and path[1] == ":" and path[2] in ("\\", "/")


def is_wsl_environment(proc_version_path: str = PROC_VERSION_PATH) -> bool:
    """
    Detect whether the process runs inside Windows Subsystem for Linux.

    The kernel version file is checked first, then the WSL environment
    variables; the first positive marker wins. Nothing is cached.

    Args:
        proc_version_path: Kernel version file to inspect

    Returns:
        True when running under WSL
    """
    if not sys.platform.startswith("linux"):
        return False

    try:
        with open(proc_version_path, "r", encoding="utf-8", errors="replace") as fh:
            version = fh.read().lower()
    except OSError:
        version = ""

    if "microsoft" in version or "wsl" in version:
        return True

    return any(os.environ.get(marker) for marker in WSL_ENV_MARKERS)


def convert_windows_path(path: str) -> str:
    """
    Rewrite a Windows drive-letter path to its WSL mount location.

    ``C:\\Users\\test\\file.txt`` becomes ``/mnt/c/Users/test/file.txt``.
    Anything that is not a Windows path is returned unchanged, which makes
    the conversion idempotent.

    Args:
        path: Cleaned path string

    Returns:
        The converted path
    """
    if not is_windows_path(path):
        return path

    drive = path[0].lower()
    rest = path[3:].replace("\\", "/")
    return f"{WSL_MOUNT_ROOT}/{drive}/{rest}"


class PathNormalizer:
    """
    Turns raw user input into an existence-verified NormalizedPath.

    Responsibilities:
    - Clean terminal input (whitespace, quotes)
    - Convert Windows paths when running under WSL
    - Verify the result exists
    """

    def __init__(
        self,
        wsl_detector: Optional[Callable[[], bool]] = None,
        exists: Optional[Callable[[str], bool]] = None
    ):
        """
        Initialize normalizer.

        Args:
            wsl_detector: Callable returning True under WSL (default: is_wsl_environment)
            exists: Existence check for the final path (default: os.path.exists)
        """
        self._is_wsl = wsl_detector or is_wsl_environment
        self._exists = exists or os.path.exists

    def normalize(self, raw: str) -> NormalizedPath:
        """
        Normalize a raw path string.

        Args:
            raw: Path as typed by the user

        Returns:
            NormalizedPath for an existing path

        Raises:
            PathConversionFailedError: If a converted Windows path doesn't exist
            PathNotFoundError: If the path is empty or doesn't exist
        """
        cleaned = clean_input(raw)
        if not cleaned:
            raise PathNotFoundError(raw, "Empty file path")

        if is_windows_path(cleaned) and self._is_wsl():
            converted = convert_windows_path(cleaned)
            logger.debug(f"Converted Windows path {cleaned!r} -> {converted!r}")
            if not self._exists(converted):
                raise PathConversionFailedError(cleaned, converted)
            return NormalizedPath(value=converted, existed_on_disk=True)

        if not self._exists(cleaned):
            raise PathNotFoundError(cleaned)

        return NormalizedPath(value=cleaned, existed_on_disk=True)
