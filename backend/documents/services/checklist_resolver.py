"""Merge a program checklist with a student's submissions.

The merge is pure: it works on any objects exposing the model attributes,
so the coordinator list view can resolve many students from rows it has
already fetched in bulk.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from django.conf import settings

from rdms.exceptions import BackendError
from documents.models import StudentDocument, normalize_status
from documents.services import storage

logger = logging.getLogger(__name__)

MISSING = 'missing'

LABEL_COMPLETE = 'Complete'
LABEL_PENDING = 'Pending'
LABEL_INCOMPLETE = 'Incomplete'

AVATAR_KEYWORDS = ('profile', 'photo', 'picture')


@dataclass
class DerivedChecklistRow:
    item_id: int
    title: str
    description: str
    is_required: bool
    order_index: int
    status: str
    version: int = 0
    file_path: Optional[str] = None
    remarks: Optional[str] = None
    document_id: Optional[int] = None
    submission_date: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_missing(self) -> bool:
        return self.status == MISSING


@dataclass
class StudentSummary:
    approved: int = 0
    pending: int = 0
    rejected: int = 0
    missing: int = 0
    total: int = 0
    required: int = 0
    approved_required: int = 0
    completion_percentage: int = 0
    status_label: str = LABEL_COMPLETE


def _recency(sub):
    return (sub.updated_at is not None, sub.updated_at, sub.id or 0)


def _latest_by_item(submissions: Iterable) -> Dict[int, object]:
    by_item: Dict[int, object] = {}
    for sub in submissions:
        current = by_item.get(sub.checklist_item_id)
        if current is None or _recency(sub) > _recency(current):
            by_item[sub.checklist_item_id] = sub
    return by_item


def resolve_checklist(items: Iterable, submissions: Iterable) -> List[DerivedChecklistRow]:
    """One row per checklist item, in `order_index` order.

    Submissions for items not in `items` are ignored.
    """
    by_item = _latest_by_item(submissions)
    rows = []
    for item in sorted(items, key=lambda i: (i.order_index, i.id)):
        sub = by_item.get(item.id)
        row = DerivedChecklistRow(
            item_id=item.id,
            title=item.title,
            description=item.description or '',
            is_required=bool(item.is_required),
            order_index=item.order_index,
            status=MISSING,
        )
        if sub is not None:
            row.status = normalize_status(sub.status)
            row.version = sub.version
            row.file_path = sub.file_path or None
            row.remarks = sub.remarks
            row.document_id = sub.id
            row.submission_date = sub.submission_date
            row.updated_at = sub.updated_at
        rows.append(row)
    return rows


def summarize(rows: Sequence[DerivedChecklistRow]) -> StudentSummary:
    summary = StudentSummary(total=len(rows))
    for row in rows:
        if row.status == StudentDocument.Status.APPROVED:
            summary.approved += 1
        elif row.status == StudentDocument.Status.PENDING:
            summary.pending += 1
        elif row.status == StudentDocument.Status.REJECTED:
            summary.rejected += 1
        else:
            summary.missing += 1
        if row.is_required:
            summary.required += 1
            if row.status == StudentDocument.Status.APPROVED:
                summary.approved_required += 1

    if summary.required:
        summary.completion_percentage = round(100 * summary.approved_required / summary.required)

    if summary.missing > 0:
        summary.status_label = LABEL_INCOMPLETE
    elif summary.pending > 0:
        summary.status_label = LABEL_PENDING
    else:
        summary.status_label = LABEL_COMPLETE
    return summary


def build_student_checklist(profile) -> Tuple[List[DerivedChecklistRow], StudentSummary]:
    """Load checklist and submissions of `profile` and resolve them."""
    if profile.program_id is None:
        items = []
    else:
        items = list(profile.program.checklist_items.all())
    submissions = list(StudentDocument.objects.filter(student=profile))
    rows = resolve_checklist(items, submissions)
    return rows, summarize(rows)


def find_avatar_item(items: Iterable):
    for item in items:
        title = (item.title or '').lower()
        if any(word in title for word in AVATAR_KEYWORDS):
            return item
    return None


def resolve_avatar_url(rows: Sequence[DerivedChecklistRow], ttl_seconds: Optional[int] = None) -> Optional[str]:
    """Signed URL of the student's photo, when one is uploaded and not rejected."""
    row = find_avatar_item(rows)
    if row is None or not row.file_path:
        return None
    if row.status not in (StudentDocument.Status.APPROVED, StudentDocument.Status.PENDING):
        return None
    return storage.create_signed_url(row.file_path, ttl_seconds or settings.RDMS_SIGNED_URL_TTL)


def resolve_avatar_urls(rows_by_student: Dict[int, Sequence[DerivedChecklistRow]]) -> Dict[int, Optional[str]]:
    urls: Dict[int, Optional[str]] = {}
    for student_id, rows in rows_by_student.items():
        try:
            urls[student_id] = resolve_avatar_url(rows)
        except BackendError as exc:
            logger.debug('avatar signing skipped student=%s: %s', student_id, exc)
            urls[student_id] = None
    return urls
