from rest_framework import permissions


class IsCoordinator(permissions.BasePermission):
    """Coordinators, admins and superusers."""

    message = 'Only coordinators may access this resource.'

    def has_permission(self, request, view):
        user = getattr(request, 'user', None)
        if not user or not user.is_authenticated:
            return False
        return bool(getattr(user, 'is_coordinator', False))


class IsStudent(permissions.BasePermission):
    message = 'Only students may access this resource.'

    def has_permission(self, request, view):
        user = getattr(request, 'user', None)
        if not user or not user.is_authenticated:
            return False
        return bool(getattr(user, 'is_student', False))
