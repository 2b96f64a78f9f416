import logging
from typing import List, Optional

logger = logging.getLogger(__name__)


def _log(event: str, target_user_ids: List[int], reason: str, **extra):
    payload = {
        'event': event,
        'target_user_ids': target_user_ids,
        'reason': reason,
    }
    payload.update(extra)
    logger.info('%s', payload)


def _document_fields(document) -> dict:
    return {
        'document_id': document.id,
        'checklist_item_id': document.checklist_item_id,
        'student_id': document.student_id,
        'status': document.status,
        'version': document.version,
    }


def _coordinator_targets(document) -> List[int]:
    coordinator_id = getattr(document.student, 'coordinator_id', None)
    return [coordinator_id] if coordinator_id else []


def notify_document_uploaded(document, actor):
    """A student uploaded (or re-uploaded) a document; the coordinator reviews it."""
    reason = 'Re-uploaded by student' if document.version > 1 else 'Uploaded by student'
    _log('document_uploaded', _coordinator_targets(document), reason, actor_id=actor.pk, **_document_fields(document))


def notify_document_approved(document, actor):
    _log('document_approved', [document.student.user_id], 'Approved by coordinator', actor_id=actor.pk, **_document_fields(document))


def notify_document_rejected(document, actor):
    _log('document_rejected', [document.student.user_id], document.remarks or '', actor_id=actor.pk, **_document_fields(document))


def notify_student_status_changed(profile, actor, previous: Optional[str]):
    _log(
        'student_status_changed',
        [profile.user_id],
        f'{previous} -> {profile.status}',
        actor_id=actor.pk,
        profile_id=profile.pk,
    )


def notify_announcement_published(announcement):
    _log(
        'announcement_published',
        [],
        announcement.title,
        announcement_id=announcement.pk,
        is_pinned=announcement.is_pinned,
    )


def notify_message_sent(message):
    _log(
        'message_sent',
        [message.receiver_id],
        'attachment' if message.file_path else 'text',
        message_id=message.pk,
        sender_id=message.sender_id,
    )
