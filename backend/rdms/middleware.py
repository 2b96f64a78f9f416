import logging
import time
from typing import Callable

from django.conf import settings
from django.http import HttpRequest, HttpResponse

logger = logging.getLogger('django.request')


def _actor_label(request: HttpRequest) -> str:
    user = getattr(request, 'user', None)
    if user is None or not getattr(user, 'is_authenticated', False):
        return 'anonymous'
    return getattr(user, 'email', None) or str(user.pk)


class SlowRequestLoggingMiddleware:
    """Warn about requests slower than ``SLOW_REQUEST_LOG_MS``.

    Uploads and PDF exports are the usual offenders, so the log line carries
    the content length next to the timing.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]):
        self.get_response = get_response

    def __call__(self, request: HttpRequest):
        if not getattr(settings, 'SLOW_REQUEST_LOG_ENABLED', True):
            return self.get_response(request)

        threshold_ms = int(getattr(settings, 'SLOW_REQUEST_LOG_MS', 1200))
        started = time.perf_counter()
        response = self.get_response(request)
        elapsed_ms = (time.perf_counter() - started) * 1000.0

        if elapsed_ms >= threshold_ms:
            logger.warning(
                'SLOW_REQUEST method=%s path=%s status=%s duration_ms=%.2f bytes_in=%s actor=%s',
                request.method,
                request.path,
                getattr(response, 'status_code', 'NA'),
                elapsed_ms,
                request.META.get('CONTENT_LENGTH') or 0,
                _actor_label(request),
            )
        return response
