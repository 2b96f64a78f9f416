"""Document review state machine.

States are small tagged values rather than raw strings so that every write
goes through `next_state`, which rejects transitions the review workflow
does not allow:

    Missing  --upload-->  Pending
    Pending  --approve--> Approved
    Pending  --reject-->  Rejected(remarks)
    Rejected --upload-->  Pending
    Approved --approve--> Approved   (no-op)
"""
from dataclasses import dataclass
from typing import Optional, Union

from django.core.exceptions import ValidationError

from documents.models import normalize_status


@dataclass(frozen=True)
class Missing:
    name = 'missing'


@dataclass(frozen=True)
class Pending:
    name = 'pending'


@dataclass(frozen=True)
class Approved:
    name = 'approved'


@dataclass(frozen=True)
class Rejected:
    remarks: str = ''
    name = 'rejected'


State = Union[Missing, Pending, Approved, Rejected]


@dataclass(frozen=True)
class Upload:
    name = 'upload'


@dataclass(frozen=True)
class Approve:
    name = 'approve'


@dataclass(frozen=True)
class Reject:
    remarks: str
    name = 'reject'


Event = Union[Upload, Approve, Reject]


class IllegalTransition(ValidationError):
    def __init__(self, state: State, event: Event):
        self.state = state
        self.event = event
        super().__init__(
            f'Cannot {event.name} a document that is {state.name}.',
            code='illegal_transition',
        )


def state_of(document) -> State:
    """Current lifecycle state of `document` (None means never uploaded)."""
    if document is None:
        return Missing()
    status = normalize_status(document.status)
    if status == 'approved':
        return Approved()
    if status == 'rejected':
        return Rejected(remarks=document.remarks or '')
    if status == 'pending':
        return Pending()
    raise ValidationError(f'Unknown document status {document.status!r}.')


def next_state(state: State, event: Event) -> State:
    if isinstance(event, Upload) and isinstance(state, (Missing, Rejected)):
        return Pending()
    if isinstance(event, Approve):
        if isinstance(state, Pending):
            return Approved()
        if isinstance(state, Approved):
            return state
    if isinstance(event, Reject) and isinstance(state, Pending):
        return Rejected(remarks=event.remarks)
    raise IllegalTransition(state, event)


def is_noop(before: State, after: Optional[State]) -> bool:
    return before == after
