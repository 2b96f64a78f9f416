import logging

from django.core.exceptions import ValidationError
from django.db import transaction

from academics.models import StudentProfile
from academics.services import get_or_provision_student_profile
from accounts.utils import require_actor, require_coordinator
from documents.services import notification_service

logger = logging.getLogger(__name__)


def _set_student_status(actor, profile_id, status: str) -> StudentProfile:
    require_coordinator(actor)

    with transaction.atomic():
        profile = StudentProfile.objects.select_for_update().select_related('user').get(pk=profile_id)
        if profile.status == status:
            return profile
        previous = profile.status
        profile.status = status
        profile.save(update_fields=['status'])

    notification_service.notify_student_status_changed(profile, actor, previous)
    return profile


def approve_student(actor, profile_id) -> StudentProfile:
    """Mark a registration as accepted so the student shows up as active."""
    return _set_student_status(actor, profile_id, StudentProfile.Status.APPROVED)


def reject_student(actor, profile_id) -> StudentProfile:
    return _set_student_status(actor, profile_id, StudentProfile.Status.REJECTED)


def update_own_profile(actor, data: dict):
    """Edit the acting user's name and, for students, registration number
    and department.

    Keys missing from `data` are left alone; the full name may not be blank.
    """
    require_actor(actor)
    full_name = (data.get('full_name') or '').strip()
    if not full_name:
        raise ValidationError({'full_name': 'Full name is required.'})

    with transaction.atomic():
        actor.full_name = full_name
        actor.save(update_fields=['full_name'])

        profile = get_or_provision_student_profile(actor)
        if profile is not None:
            profile = StudentProfile.objects.select_for_update().get(pk=profile.pk)
            if 'registration_number' in data:
                reg_no = (data.get('registration_number') or '').strip() or None
                if reg_no and StudentProfile.objects.filter(
                    registration_number__iexact=reg_no,
                ).exclude(pk=profile.pk).exists():
                    raise ValidationError({'registration_number': 'This registration number is already registered.'})
                profile.registration_number = reg_no
            if 'department' in data:
                profile.department = (data.get('department') or '').strip()
            profile.save()

    logger.info('profile updated user=%s', actor.pk)
    return actor
