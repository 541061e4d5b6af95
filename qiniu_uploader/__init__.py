"""
qiniu_uploader - Upload images to Qiniu Kodo from the command line.

Usage:
    >>> from qiniu_uploader import load_config, UploadCoordinator
    >>>
    >>> config = load_config()
    >>> uploader = UploadCoordinator.from_config(config)
    >>> outcome = uploader.upload(r"C:\\Users\\me\\cat.png")
    >>> print(outcome.url)
"""
import logging

from .core.config import UploaderConfig, load_config, save_config
from .core.exceptions import (
    UploaderError,
    ConfigError,
    NotConfiguredError,
    FileMissingError,
    PolicyRejectedError,
    PathNotFoundError,
    PathConversionFailedError,
    RemoteUploadFailedError,
    ListFailedError,
)
from .core.logging import configure_logging
from .core.path import PathNormalizer, NormalizedPath
from .core.upload import UploadCoordinator, UploadOutcome, RemoteFile

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for qiniu_uploader modules.

    Args:
        level: Logging level (default: logging.INFO)
    """
    configure_logging(level)


__all__ = [
    'UploaderConfig',
    'load_config',
    'save_config',
    'UploadCoordinator',
    'UploadOutcome',
    'RemoteFile',
    'PathNormalizer',
    'NormalizedPath',
    'UploaderError',
    'ConfigError',
    'NotConfiguredError',
    'FileMissingError',
    'PolicyRejectedError',
    'PathNotFoundError',
    'PathConversionFailedError',
    'RemoteUploadFailedError',
    'ListFailedError',
    'setup_logging',
]
