from django.core.exceptions import PermissionDenied

from accounts.utils import require_actor


def can_user_view_student(profile, user) -> bool:
    """Coordinators see every student; students see only themselves."""
    if user is None or not getattr(user, 'is_authenticated', False):
        return False
    if getattr(user, 'is_coordinator', False):
        return True
    return profile.user_id == user.pk


def can_user_view_document(document, user) -> bool:
    return can_user_view_student(document.student, user)


def ensure_can_view_document(actor, document):
    require_actor(actor)
    if not can_user_view_document(document, actor):
        raise PermissionDenied('You do not have access to this document.')
    return document


def ensure_can_view_student(actor, profile):
    require_actor(actor)
    if not can_user_view_student(profile, actor):
        raise PermissionDenied('You do not have access to this student.')
    return profile
