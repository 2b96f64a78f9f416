"""Batch aggregation behind the reports page and its exports.

`aggregate` is pure: it only looks at the values handed in, and its output
does not depend on the order of any input sequence.
"""
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from academics.models import ChecklistItem, StudentProfile
from accounts.utils import require_coordinator
from documents.models import StudentDocument, normalize_status

COMPLETE = 'COMPLETE'
IN_PROGRESS = 'IN PROGRESS'
NOT_STARTED = 'NOT STARTED'
LABELS = (COMPLETE, IN_PROGRESS, NOT_STARTED)

NO_PROGRAM = 'Unassigned'

HEADERS = ('Name', 'Reg. No', 'Program', 'Status', 'Submitted', 'Approved', 'Rejected')


@dataclass(frozen=True)
class ReportStudent:
    id: int
    name: str
    registration_number: Optional[str]
    program_id: Optional[int]
    program_name: Optional[str]


@dataclass
class ReportRow:
    student_id: int
    name: str
    registration_number: Optional[str]
    program: str
    total: int
    approved: int
    pending: int
    rejected: int
    required_count: int
    status_label: str

    def as_table_row(self):
        return (
            self.name,
            self.registration_number or '',
            self.program,
            self.status_label,
            self.total,
            self.approved,
            self.rejected,
        )


@dataclass
class ReportResult:
    rows: List[ReportRow] = field(default_factory=list)
    total_students: int = 0
    active: int = 0
    completed: int = 0
    program_distribution: Dict[str, int] = field(default_factory=dict)
    status_distribution: Dict[str, int] = field(default_factory=dict)
    document_totals: Dict[str, int] = field(default_factory=dict)

    def summary(self) -> Dict[str, int]:
        return {
            'Total students': self.total_students,
            'Active (in progress)': self.active,
            'Completed': self.completed,
            'Documents approved': self.document_totals.get('approved', 0),
            'Documents pending': self.document_totals.get('pending', 0),
            'Documents rejected': self.document_totals.get('rejected', 0),
        }


def coarse_label(approved: int, total: int, required_count: int) -> str:
    if required_count > 0 and approved >= required_count:
        return COMPLETE
    if total > 0:
        return IN_PROGRESS
    return NOT_STARTED


def aggregate(
    students: Iterable[ReportStudent],
    submissions: Iterable,
    checklist_items: Iterable,
    program_filter: Optional[str] = None,
    status_filter: Optional[str] = None,
) -> ReportResult:
    required_by_program = Counter(i.program_id for i in checklist_items if i.is_required)

    counts = defaultdict(Counter)
    for sub in submissions:
        counts[sub.student_id][normalize_status(sub.status)] += 1

    rows = []
    for student in students:
        c = counts.get(student.id, Counter())
        total = sum(c.values())
        required = required_by_program.get(student.program_id, 0)
        rows.append(ReportRow(
            student_id=student.id,
            name=student.name,
            registration_number=student.registration_number,
            program=student.program_name or NO_PROGRAM,
            total=total,
            approved=c[StudentDocument.Status.APPROVED],
            pending=c[StudentDocument.Status.PENDING],
            rejected=c[StudentDocument.Status.REJECTED],
            required_count=required,
            status_label=coarse_label(c[StudentDocument.Status.APPROVED], total, required),
        ))

    if program_filter and program_filter != 'all':
        rows = [r for r in rows if r.program == program_filter]
    if status_filter and status_filter != 'all':
        rows = [r for r in rows if r.status_label == status_filter]

    rows.sort(key=lambda r: (r.name, r.student_id))

    programs = Counter(r.program for r in rows)
    labels = Counter(r.status_label for r in rows)
    return ReportResult(
        rows=rows,
        total_students=len(rows),
        active=labels[IN_PROGRESS],
        completed=labels[COMPLETE],
        program_distribution=dict(sorted(programs.items())),
        status_distribution={label: labels[label] for label in LABELS},
        document_totals={
            'approved': sum(r.approved for r in rows),
            'pending': sum(r.pending for r in rows),
            'rejected': sum(r.rejected for r in rows),
            'total': sum(r.total for r in rows),
        },
    )


def build_report(actor, program_filter=None, status_filter=None) -> ReportResult:
    """Load students, submissions and checklist items and aggregate them."""
    require_coordinator(actor)
    profiles = StudentProfile.objects.select_related('user', 'program')
    students = [
        ReportStudent(
            id=p.pk,
            name=p.user.display_name(),
            registration_number=p.registration_number,
            program_id=p.program_id,
            program_name=p.program.name if p.program_id else None,
        )
        for p in profiles
    ]
    submissions = StudentDocument.objects.only('student_id', 'status')
    items = ChecklistItem.objects.only('program_id', 'is_required')
    return aggregate(students, submissions, items, program_filter=program_filter, status_filter=status_filter)
