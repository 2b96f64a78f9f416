import logging
import os
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.exceptions import PermissionDenied, ValidationError
from django.db import DatabaseError
from django.db.models import Q
from django.utils.crypto import get_random_string

from accounts.utils import require_actor, require_coordinator
from documents.services import notification_service, storage
from rdms.exceptions import BackendError
from rdms.results import FetchResult, fetch
from . import change_feed
from .models import Message

logger = logging.getLogger(__name__)

ATTACHMENT_PREVIEW = 'Attachment'


@dataclass
class ConversationSummary:
    user_id: int
    full_name: str
    email: str
    last_message: Optional[str] = None
    last_message_time: Optional[datetime] = None


def _check_pair(actor, receiver):
    if receiver.pk == actor.pk:
        raise ValidationError({'receiver': 'You cannot message yourself.'})
    # chats always involve a coordinator
    if not (actor.is_coordinator or receiver.is_coordinator):
        raise PermissionDenied('Students can only message coordinators.')


def _attachment_path(receiver_id, file_name: str) -> str:
    ext = os.path.splitext(file_name or '')[1].lstrip('.').lower() or 'bin'
    return f'chat_files/{receiver_id}/{int(time.time() * 1000)}_{get_random_string(6).lower()}.{ext}'


def _discard_file(path):
    if not path:
        return
    try:
        storage.delete(path)
    except BackendError as exc:
        logger.warning('could not remove orphaned attachment path=%s: %s', path, exc)


def send_message(actor, receiver_id, content: str = '', uploaded_file=None) -> Message:
    require_actor(actor)
    content = (content or '').strip()
    if not content and uploaded_file is None:
        raise ValidationError({'content': 'Message text or a file is required.'})
    if uploaded_file is not None and uploaded_file.size > settings.RDMS_MAX_UPLOAD_MB * 1024 * 1024:
        raise ValidationError({'file': f'File exceeds the {settings.RDMS_MAX_UPLOAD_MB} MB limit.'})

    receiver = get_user_model().objects.get(pk=receiver_id)
    _check_pair(actor, receiver)

    stored_path = None
    attachment = {}
    if uploaded_file is not None:
        stored_path = storage.upload(_attachment_path(receiver.pk, uploaded_file.name), uploaded_file)
        attachment = {
            'file_path': stored_path,
            'file_name': uploaded_file.name,
            'file_size': uploaded_file.size,
        }

    try:
        message = Message.objects.create(sender=actor, receiver=receiver, content=content, **attachment)
    except DatabaseError as exc:
        _discard_file(stored_path)
        raise BackendError(f'Could not send message: {exc}') from exc

    notification_service.notify_message_sent(message)
    return message


def conversation(actor, other_user_id, after_id=None) -> FetchResult:
    """Messages between `actor` and another user, oldest first.

    `after_id` limits the result to messages newer than one the client
    already has, for polling.
    """
    require_actor(actor)

    def load():
        qs = Message.objects.filter(
            Q(sender=actor, receiver_id=other_user_id) | Q(sender_id=other_user_id, receiver=actor)
        )
        if after_id:
            qs = qs.filter(id__gt=after_id)
        return qs.order_by('created_at', 'id')

    return fetch(load, what='messages')


def conversations(actor) -> List[ConversationSummary]:
    """Coordinator sidebar: every student with the latest exchanged message.

    Students with recent messages come first; the rest follow by name.
    """
    require_coordinator(actor)
    User = get_user_model()

    latest = {}
    recent = Message.objects.filter(Q(sender=actor) | Q(receiver=actor)).order_by('-created_at', '-id')[:500]
    for msg in recent:
        other_id = msg.receiver_id if msg.sender_id == actor.pk else msg.sender_id
        if other_id not in latest:
            latest[other_id] = msg

    summaries = []
    for student in User.objects.filter(role=User.Role.STUDENT, is_active=True):
        summary = ConversationSummary(user_id=student.pk, full_name=student.display_name(), email=student.email)
        msg = latest.get(student.pk)
        if msg is not None:
            summary.last_message = msg.content or (ATTACHMENT_PREVIEW if msg.file_path else '')
            summary.last_message_time = msg.created_at
        summaries.append(summary)

    with_messages = sorted(
        (s for s in summaries if s.last_message_time is not None),
        key=lambda s: s.last_message_time,
        reverse=True,
    )
    without = sorted(
        (s for s in summaries if s.last_message_time is None),
        key=lambda s: (s.full_name.lower(), s.user_id),
    )
    return with_messages + without


def subscribe_conversation(user_id, other_user_id, callback: Callable[[dict], None]) -> Callable[[], None]:
    """Deliver new messages of one conversation to `callback`, once each.

    In-process hook for code that shares a process with the writer. HTTP
    clients poll `GET /api/messages/?with=<id>&after=<last id>` instead.
    """
    dedup = change_feed.MessageDeduplicator()
    pair = {user_id, other_user_id}

    def on_insert(row):
        if {row.get('sender_id'), row.get('receiver_id')} != pair:
            return
        if dedup.accept(row.get('id')):
            callback(row)

    return change_feed.subscribe('messages', 'INSERT', on_insert)
