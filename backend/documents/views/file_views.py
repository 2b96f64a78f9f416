import logging
import mimetypes
import os

from django.core import signing
from django.http import FileResponse, Http404
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import AllowAny
from rest_framework.views import APIView

from documents.services import storage

logger = logging.getLogger(__name__)


class SignedFileView(APIView):
    """Serve a stored file to anyone holding a valid, unexpired link."""

    permission_classes = (AllowAny,)
    authentication_classes = ()

    def get(self, request, token):
        try:
            path = storage.verify_signed_token(token)
        except signing.SignatureExpired:
            raise PermissionDenied('This link has expired.')
        except signing.BadSignature:
            raise PermissionDenied('Invalid link.')

        try:
            fh = storage.open_file(path)
        except FileNotFoundError:
            logger.info('signed link points at missing file path=%s', path)
            raise Http404('File not found.')

        content_type, _ = mimetypes.guess_type(path)
        return FileResponse(fh, content_type=content_type or 'application/octet-stream', filename=os.path.basename(path))
