"""
Storage Utility
===============

Project image upload and removal against the Supabase storage bucket.
"""

import time
import logging
from urllib.parse import urlparse

from .errors import BackendError, StorageError
from .logging_service import LoggingService

logger = logging.getLogger(__name__)

CONTENT_TYPES = {
    'jpg': 'image/jpeg', 'jpeg': 'image/jpeg',
    'png': 'image/png', 'gif': 'image/gif', 'webp': 'image/webp',
    'svg': 'image/svg+xml',
}


def generate_image_filename(original_filename, now=None):
    """Object name from the current time in milliseconds plus the original extension.

    "shot.final.PNG" uploaded at 1699000000500 ms becomes "1699000000500.PNG".
    """
    millis = int((time.time() if now is None else now) * 1000)
    ext = original_filename.rsplit('.', 1)[-1]
    return f"{millis}.{ext}"


def guess_content_type(filename):
    ext = filename.rsplit('.', 1)[-1].lower() if '.' in filename else ''
    return CONTENT_TYPES.get(ext, 'application/octet-stream')


def filename_from_url(file_url):
    """Object name of an uploaded image: the last path segment of its URL"""
    if not file_url:
        return ''
    path = urlparse(file_url).path
    return path.rsplit('/', 1)[-1]


def upload_file(backend, file_bytes, original_filename, content_type=None, now=None):
    """Upload bytes to the image bucket.

    Returns:
        Public URL of the stored object.

    Raises:
        StorageError: the upload was rejected; nothing should reference it.
    """
    filename = generate_image_filename(original_filename, now=now)
    content_type = content_type or guess_content_type(filename)

    try:
        path = backend.upload_object(filename, file_bytes, content_type)
        return backend.public_url(path)
    except BackendError as e:
        LoggingService.error('storage', f"Upload failed for {filename}", {'error': e.message})
        raise StorageError(e.message) from e


def delete_file(backend, file_url):
    """Best-effort removal of an uploaded image by its URL.

    Returns True when the bucket accepted the removal. Failures are logged,
    never raised.
    """
    filename = filename_from_url(file_url)
    if not filename:
        return False

    try:
        backend.remove_objects([filename])
        return True
    except BackendError as e:
        logger.error(f"Error deleting image {filename}: {e.message}")
        LoggingService.error('storage', f"Image delete failed for {filename}", {'error': e.message, 'url': file_url})
        return False
