from django.core.exceptions import PermissionDenied

from rdms.exceptions import AuthenticationRequired


def require_actor(actor):
    """Return `actor` or raise when no authenticated user is acting."""
    if actor is None or not getattr(actor, 'is_authenticated', False):
        raise AuthenticationRequired()
    if not getattr(actor, 'is_active', True):
        raise PermissionDenied('User account is disabled.')
    return actor


def require_coordinator(actor):
    require_actor(actor)
    if not getattr(actor, 'is_coordinator', False):
        raise PermissionDenied('Only coordinators may perform this action.')
    return actor


def require_student(actor):
    require_actor(actor)
    if not getattr(actor, 'is_student', False):
        raise PermissionDenied('Only students may perform this action.')
    return actor
