"""
Image uploads for company logos and employee photos.

Files are written through Django's default storage and the public URL is
kept on the owning record (Company.logo_url, Employee.image_url).
"""
import logging
import os
import secrets
import time

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.files.storage import default_storage

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = ('image/jpeg', 'image/jpg', 'image/png', 'image/gif', 'image/webp')


def validate_image(uploaded_file):
    """Reject files over the size limit or with a non-image content type."""
    max_bytes = settings.UPLOAD_MAX_IMAGE_BYTES
    if uploaded_file.size > max_bytes:
        raise ValidationError(
            f'File size exceeds maximum allowed size of {max_bytes // (1024 * 1024)}MB'
        )

    content_type = (getattr(uploaded_file, 'content_type', '') or '').lower()
    if content_type not in ALLOWED_IMAGE_TYPES:
        raise ValidationError(
            f'Invalid file type. Allowed types: {", ".join(ALLOWED_IMAGE_TYPES)}'
        )
    return uploaded_file


def store_image(uploaded_file, folder, prefix):
    """
    Save an uploaded image under <folder>/ and return its URL.

    The stored name is <prefix>-<epoch ms>-<random><ext>, so two uploads
    never overwrite each other.
    """
    validate_image(uploaded_file)
    extension = os.path.splitext(uploaded_file.name)[1].lower()
    name = f'{folder}/{prefix}-{int(time.time() * 1000)}-{secrets.token_hex(4)}{extension}'

    path = default_storage.save(name, uploaded_file)
    logger.info("Stored upload %s (%s bytes)", path, uploaded_file.size)
    return default_storage.url(path)


def payload_with(request, **extra):
    """
    Copy of the request body with path values merged in.

    Multipart bodies are flattened with QueryDict.dict() so uploaded files
    are passed through instead of deep-copied.
    """
    data = request.data.dict() if hasattr(request.data, 'dict') else dict(request.data)
    data.update(extra)
    return data
