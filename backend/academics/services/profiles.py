"""Student profile lookup with auto-provisioning.

A student may authenticate before a profile row exists (accounts created in
the admin, or a registration whose profile write failed). Dashboards must
still render, so a missing profile is rebuilt from the user's
`signup_metadata` instead of surfacing a NotFound.
"""
import logging
from typing import Optional

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from academics.models import Batch, Program, StudentProfile

logger = logging.getLogger(__name__)


def _lookup(model, pk):
    if not pk:
        return None
    try:
        return model.objects.filter(pk=pk).first()
    except (TypeError, ValueError):
        return None


def provision_student_profile(user) -> StudentProfile:
    """Create the profile for `user` from its registration metadata."""
    meta = getattr(user, 'signup_metadata', None) or {}

    coordinator = _lookup(get_user_model(), meta.get('coordinator_id'))
    if coordinator is not None and not coordinator.is_coordinator:
        coordinator = None

    profile = StudentProfile(
        user=user,
        registration_number=(meta.get('registration_number') or '').strip() or None,
        department=(meta.get('department') or '').strip(),
        program=_lookup(Program, meta.get('program_id')),
        batch=_lookup(Batch, meta.get('batch_id')),
        coordinator=coordinator,
        status=StudentProfile.Status.PENDING,
    )
    try:
        with transaction.atomic():
            profile.save()
    except (IntegrityError, ValidationError):
        # Registration number already taken; provision without it.
        logger.warning('registration number clash while provisioning user=%s', user.pk)
        profile.registration_number = None
        profile.pk = None
        profile.save()

    logger.info('student profile provisioned user=%s profile=%s', user.pk, profile.pk)
    return profile


def get_or_provision_student_profile(user) -> Optional[StudentProfile]:
    """Return the profile of a student user, creating it when missing.

    Non-student users get None.
    """
    if user is None or not getattr(user, 'is_student', False):
        return None

    profile = (
        StudentProfile.objects.select_related('program', 'batch', 'coordinator')
        .filter(user=user)
        .first()
    )
    if profile is not None:
        return profile
    return provision_student_profile(user)
