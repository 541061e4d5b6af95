"""Upload services module."""
from .file_service import (
    FileValidator,
    MAX_FILE_SIZE,
    IMAGE_EXTENSIONS,
    get_extension,
    is_image_file
)
from .key_service import KeyGenerator, build_url, KEY_PREFIX

__all__ = [
    'FileValidator',
    'MAX_FILE_SIZE',
    'IMAGE_EXTENSIONS',
    'get_extension',
    'is_image_file',
    'KeyGenerator',
    'build_url',
    'KEY_PREFIX',
]
