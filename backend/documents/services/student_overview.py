"""Coordinator-facing views over all students.

The list view fetches checklist items and submissions in two bulk queries
and resolves every student in memory.
"""
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from academics.models import ChecklistItem, StudentProfile
from accounts.utils import require_coordinator
from documents.models import StudentDocument
from rdms.exceptions import BackendError
from research.models import ResearchDetails
from documents.services import access_control
from documents.services.checklist_resolver import (
    LABEL_COMPLETE,
    LABEL_INCOMPLETE,
    LABEL_PENDING,
    DerivedChecklistRow,
    StudentSummary,
    build_student_checklist,
    resolve_avatar_url,
    resolve_avatar_urls,
    resolve_checklist,
    summarize,
)

logger = logging.getLogger(__name__)

INACTIVE_ACCOUNT_STATUSES = (StudentProfile.Status.PENDING, StudentProfile.Status.REJECTED)


@dataclass
class StudentOverviewRow:
    profile_id: int
    user_id: int
    name: str
    email: str
    registration_number: Optional[str]
    program: Optional[str]
    department: str
    batch: Optional[str]
    account_status: str
    status_label: str
    missing: int
    completion_percentage: int
    avatar_url: Optional[str] = None


@dataclass
class StudentOverview:
    students: List[StudentOverviewRow] = field(default_factory=list)
    pending_accounts: List[StudentOverviewRow] = field(default_factory=list)
    totals: Dict[str, int] = field(default_factory=dict)


@dataclass
class StudentQuickView:
    profile: StudentProfile
    rows: List[DerivedChecklistRow]
    summary: StudentSummary
    avatar_url: Optional[str]
    research: Optional[object]


def _overview_row(profile, summary: StudentSummary, avatar_url=None) -> StudentOverviewRow:
    return StudentOverviewRow(
        profile_id=profile.pk,
        user_id=profile.user_id,
        name=profile.user.display_name(),
        email=profile.user.email,
        registration_number=profile.registration_number,
        program=profile.program.name if profile.program_id else None,
        department=profile.department,
        batch=profile.batch.name if profile.batch_id else None,
        account_status=profile.status,
        status_label=summary.status_label,
        missing=summary.missing,
        completion_percentage=summary.completion_percentage,
        avatar_url=avatar_url,
    )


def _sort_key(row: StudentOverviewRow):
    return (row.name.lower(), row.profile_id)


def student_overview(actor) -> StudentOverview:
    require_coordinator(actor)

    profiles = list(StudentProfile.objects.select_related('user', 'program', 'batch'))
    program_ids = {p.program_id for p in profiles if p.program_id}

    items_by_program = defaultdict(list)
    for item in ChecklistItem.objects.filter(program_id__in=program_ids):
        items_by_program[item.program_id].append(item)

    submissions_by_student = defaultdict(list)
    for sub in StudentDocument.objects.filter(student__in=profiles):
        submissions_by_student[sub.student_id].append(sub)

    rows_by_student = {}
    summaries = {}
    for profile in profiles:
        rows = resolve_checklist(items_by_program.get(profile.program_id, []), submissions_by_student.get(profile.pk, []))
        rows_by_student[profile.pk] = rows
        summaries[profile.pk] = summarize(rows)

    active = [p for p in profiles if p.status not in INACTIVE_ACCOUNT_STATUSES]
    avatars = resolve_avatar_urls({p.pk: rows_by_student[p.pk] for p in active})

    overview = StudentOverview()
    overview.students = sorted(
        (_overview_row(p, summaries[p.pk], avatars.get(p.pk)) for p in active),
        key=_sort_key,
    )
    overview.pending_accounts = sorted(
        (_overview_row(p, summaries[p.pk]) for p in profiles if p.status == StudentProfile.Status.PENDING),
        key=_sort_key,
    )
    labels = [row.status_label for row in overview.students]
    overview.totals = {
        'total_students': len(overview.students),
        'pending_reviews': labels.count(LABEL_PENDING),
        'incomplete': labels.count(LABEL_INCOMPLETE),
        'complete': labels.count(LABEL_COMPLETE),
        'pending_accounts': len(overview.pending_accounts),
    }
    return overview


def student_quick_view(actor, profile_id) -> StudentQuickView:
    """Checklist rows, summary and research details of one student."""
    profile = StudentProfile.objects.select_related('user', 'program', 'batch').get(pk=profile_id)
    access_control.ensure_can_view_student(actor, profile)

    rows, summary = build_student_checklist(profile)
    try:
        avatar_url = resolve_avatar_url(rows)
    except BackendError as exc:
        logger.debug('avatar signing skipped student=%s: %s', profile.pk, exc)
        avatar_url = None

    research = ResearchDetails.objects.filter(student=profile).first()

    return StudentQuickView(profile=profile, rows=rows, summary=summary, avatar_url=avatar_url, research=research)
