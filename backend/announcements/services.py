import logging

from django.core.exceptions import ValidationError

from accounts.utils import require_actor, require_coordinator
from documents.services import notification_service
from rdms.results import FetchResult, fetch
from .models import Announcement

logger = logging.getLogger(__name__)


def list_announcements(actor) -> FetchResult:
    """All announcements, pinned first then newest."""
    require_actor(actor)
    return fetch(
        lambda: Announcement.objects.select_related('created_by').order_by('-is_pinned', '-created_at', '-id'),
        what='announcements',
    )


def create_announcement(actor, title, content, is_pinned=False) -> Announcement:
    require_coordinator(actor)
    title = (title or '').strip()
    content = (content or '').strip()
    errors = {}
    if not title:
        errors['title'] = 'Title is required.'
    if not content:
        errors['content'] = 'Content is required.'
    if errors:
        raise ValidationError(errors)

    announcement = Announcement.objects.create(
        title=title,
        content=content,
        is_pinned=bool(is_pinned),
        created_by=actor,
    )
    notification_service.notify_announcement_published(announcement)
    return announcement


def delete_announcement(actor, announcement_id) -> None:
    require_coordinator(actor)
    announcement = Announcement.objects.get(pk=announcement_id)
    announcement.delete()
    logger.info('announcement deleted id=%s by=%s', announcement_id, actor.pk)
