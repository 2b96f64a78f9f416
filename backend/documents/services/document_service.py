"""Upload, review and history of student documents.

Every transition is checked against `lifecycle.next_state` before anything is
written, and the document row is locked for the duration of the write so
that two coordinators reviewing the same file cannot interleave.
"""
import logging
import mimetypes
import os
import time
from typing import List

from django.conf import settings
from django.core.exceptions import PermissionDenied, ValidationError
from django.db import DatabaseError, transaction
from django.utils import timezone

from academics.services import get_or_provision_student_profile
from accounts.utils import require_actor, require_coordinator, require_student
from documents.models import DocumentLog, StudentDocument
from documents.services import access_control, lifecycle, notification_service, storage
from rdms.exceptions import BackendError
from rdms.results import FetchResult, fetch

logger = logging.getLogger(__name__)

UPLOAD_REMARKS = 'Uploaded by student'
REUPLOAD_REMARKS = 'Re-uploaded by student'
APPROVE_REMARKS = 'Approved by coordinator'


def detect_content_type(uploaded_file) -> str:
    """Declared content type, falling back to a guess from the file name."""
    declared = (getattr(uploaded_file, 'content_type', None) or '').split(';')[0].strip().lower()
    if declared and declared != 'application/octet-stream':
        return declared
    guessed, _ = mimetypes.guess_type(getattr(uploaded_file, 'name', '') or '')
    return (guessed or declared or '').lower()


def validate_upload(uploaded_file) -> str:
    """Raise ValidationError unless the file may be stored; returns its type."""
    if uploaded_file is None:
        raise ValidationError({'file': 'A file is required.'})

    content_type = detect_content_type(uploaded_file)
    if content_type not in settings.RDMS_ALLOWED_UPLOAD_TYPES:
        raise ValidationError({'file': f'Unsupported file type {content_type or "unknown"!r}. Allowed: PDF, JPEG, PNG, TXT, DOCX.'})

    max_bytes = settings.RDMS_MAX_UPLOAD_MB * 1024 * 1024
    if uploaded_file.size > max_bytes:
        raise ValidationError({'file': f'File exceeds the {settings.RDMS_MAX_UPLOAD_MB} MB limit.'})
    return content_type


def _extension(uploaded_file, content_type: str) -> str:
    ext = os.path.splitext(getattr(uploaded_file, 'name', '') or '')[1].lstrip('.').lower()
    if not ext:
        ext = (mimetypes.guess_extension(content_type) or '.bin').lstrip('.')
    return ext


def build_storage_path(user_id, checklist_item_id, ext: str) -> str:
    return f'{user_id}/{checklist_item_id}/{int(time.time() * 1000)}.{ext}'


def _discard_file(path: str):
    try:
        storage.delete(path)
    except BackendError as exc:
        logger.warning('could not remove orphaned upload path=%s: %s', path, exc)


def _append_log(document: StudentDocument, old_status: str, new_status: str, actor, remarks: str) -> DocumentLog:
    return DocumentLog.objects.create(
        document=document,
        old_status=old_status,
        new_status=new_status,
        changed_by=actor,
        remarks=remarks,
    )


def upload_document(actor, checklist_item, uploaded_file) -> StudentDocument:
    """Store a student's file for `checklist_item` and mark it pending.

    First upload creates version 1; an upload after rejection overwrites the
    same row with version + 1 and clears the remarks.
    """
    require_student(actor)
    content_type = validate_upload(uploaded_file)

    profile = get_or_provision_student_profile(actor)
    if profile.program_id != checklist_item.program_id:
        raise PermissionDenied('This checklist item does not belong to your program.')

    existing = StudentDocument.objects.filter(student=profile, checklist_item=checklist_item).first()
    lifecycle.next_state(lifecycle.state_of(existing), lifecycle.Upload())

    path = build_storage_path(actor.pk, checklist_item.pk, _extension(uploaded_file, content_type))
    stored_path = storage.upload(path, uploaded_file)

    try:
        with transaction.atomic():
            document = (
                StudentDocument.objects.select_for_update()
                .filter(student=profile, checklist_item=checklist_item)
                .first()
            )
            before = lifecycle.state_of(document)
            after = lifecycle.next_state(before, lifecycle.Upload())
            now = timezone.now()

            if document is None:
                document = StudentDocument.objects.create(
                    student=profile,
                    checklist_item=checklist_item,
                    title=checklist_item.title,
                    file_path=stored_path,
                    status=after.name,
                    version=1,
                    remarks=None,
                    submission_date=now,
                )
                remarks = UPLOAD_REMARKS
            else:
                document.file_path = stored_path
                document.status = after.name
                document.version = document.version + 1
                document.remarks = None
                document.submission_date = now
                document.save(update_fields=['file_path', 'status', 'version', 'remarks', 'submission_date', 'updated_at'])
                remarks = REUPLOAD_REMARKS

            _append_log(document, before.name, after.name, actor, remarks)
    except DatabaseError as exc:
        _discard_file(stored_path)
        raise BackendError(f'Could not save document: {exc}') from exc
    except Exception:
        _discard_file(stored_path)
        raise

    notification_service.notify_document_uploaded(document, actor)
    return document


def approve_document(actor, document_id) -> StudentDocument:
    require_coordinator(actor)

    try:
        with transaction.atomic():
            document = StudentDocument.objects.select_for_update().select_related('student').get(pk=document_id)
            before = lifecycle.state_of(document)
            after = lifecycle.next_state(before, lifecycle.Approve())
            if lifecycle.is_noop(before, after):
                return document

            document.status = after.name
            document.remarks = None
            document.save(update_fields=['status', 'remarks', 'updated_at'])
            _append_log(document, before.name, after.name, actor, APPROVE_REMARKS)
    except DatabaseError as exc:
        raise BackendError(f'Could not approve document: {exc}') from exc

    notification_service.notify_document_approved(document, actor)
    return document


def reject_document(actor, document_id, remarks) -> StudentDocument:
    remarks = (remarks or '').strip()
    if not remarks:
        raise ValidationError({'remarks': 'Remarks are required when rejecting a document.'})
    require_coordinator(actor)

    try:
        with transaction.atomic():
            document = StudentDocument.objects.select_for_update().select_related('student').get(pk=document_id)
            before = lifecycle.state_of(document)
            after = lifecycle.next_state(before, lifecycle.Reject(remarks=remarks))

            document.status = after.name
            document.remarks = after.remarks
            document.save(update_fields=['status', 'remarks', 'updated_at'])
            _append_log(document, before.name, after.name, actor, remarks)
    except DatabaseError as exc:
        raise BackendError(f'Could not reject document: {exc}') from exc

    notification_service.notify_document_rejected(document, actor)
    return document


def document_history(actor, document) -> List[DocumentLog]:
    """Status log of `document`, oldest first."""
    access_control.ensure_can_view_document(actor, document)
    return list(document.logs.select_related('changed_by').order_by('created_at', 'id'))


def list_my_documents(actor) -> FetchResult:
    """The acting student's submissions, newest first."""
    require_student(actor)
    profile = get_or_provision_student_profile(actor)
    return fetch(
        lambda: StudentDocument.objects.filter(student=profile)
        .select_related('checklist_item')
        .order_by('-submission_date', '-id'),
        what='documents',
    )


def get_document_for(actor, document_id) -> StudentDocument:
    require_actor(actor)
    document = StudentDocument.objects.select_related('student', 'checklist_item').get(pk=document_id)
    return access_control.ensure_can_view_document(actor, document)
