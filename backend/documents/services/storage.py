"""Object store access for uploaded files.

Files live in Django's `default_storage`. Private downloads go through
signed, expiring tokens checked by `documents.views.file_views`.
"""
import logging
from typing import Optional

from django.conf import settings
from django.core import signing
from django.core.files.storage import default_storage
from django.urls import reverse

from rdms.exceptions import BackendError

logger = logging.getLogger(__name__)

SIGNING_SALT = 'documents.storage.signed-url'


def _signer() -> signing.TimestampSigner:
    return signing.TimestampSigner(salt=SIGNING_SALT)


def upload(path: str, content) -> str:
    """Store `content` at `path` and return the name actually used."""
    try:
        stored = default_storage.save(path, content)
    except OSError as exc:
        raise BackendError(f'Could not store file: {exc}') from exc
    logger.debug('stored file path=%s', stored)
    return stored


def delete(path: str) -> None:
    if not path:
        return
    try:
        default_storage.delete(path)
    except OSError as exc:
        raise BackendError(f'Could not delete file: {exc}') from exc


def open_file(path: str):
    try:
        return default_storage.open(path, 'rb')
    except FileNotFoundError:
        raise
    except OSError as exc:
        raise BackendError(f'Could not read file: {exc}') from exc


def create_signed_url(path: str, ttl_seconds: Optional[int] = None) -> str:
    """Return a download URL for `path` valid for `ttl_seconds`."""
    if not path or not default_storage.exists(path):
        raise BackendError(f'Object not found: {path}')
    ttl = int(ttl_seconds or settings.RDMS_SIGNED_URL_TTL)
    token = _signer().sign_object({'p': path, 'ttl': ttl})
    return reverse('document-file', kwargs={'token': token})


def verify_signed_token(token: str) -> str:
    """Return the storage path of a signed token.

    Raises `signing.SignatureExpired` or `signing.BadSignature`.
    """
    signer = _signer()
    payload = signer.unsign_object(token)
    # second pass enforces the ttl recorded in the token
    signer.unsign_object(token, max_age=int(payload.get('ttl') or settings.RDMS_SIGNED_URL_TTL))
    return payload['p']
