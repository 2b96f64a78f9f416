import logging
from typing import Iterable, List, Optional, Union

from django.core.exceptions import ValidationError
from django.db import transaction

from academics.services import get_or_provision_student_profile
from accounts.utils import require_student
from .models import ResearchDetails

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ('title', 'abstract', 'supervisor_name', 'co_supervisor_name', 'keywords')


def parse_keywords(value: Union[str, Iterable[str], None]) -> List[str]:
    """Accept "a, b, c" or a list; drop blanks and case-insensitive repeats.

    The first spelling of a keyword wins and order is kept.
    """
    if value is None:
        return []
    parts = value.split(',') if isinstance(value, str) else value
    keywords = []
    seen = set()
    for part in parts:
        kw = str(part).strip()
        if kw and kw.lower() not in seen:
            seen.add(kw.lower())
            keywords.append(kw)
    return keywords


def get_research_details(actor) -> Optional[ResearchDetails]:
    require_student(actor)
    profile = get_or_provision_student_profile(actor)
    return ResearchDetails.objects.filter(student=profile).first()


@transaction.atomic
def upsert_research_details(actor, data: dict) -> ResearchDetails:
    """Create or update the acting student's research topic."""
    require_student(actor)
    title = (data.get('title') or '').strip()
    if not title:
        raise ValidationError({'title': 'Research title is required.'})

    profile = get_or_provision_student_profile(actor)
    details, created = ResearchDetails.objects.select_for_update().get_or_create(
        student=profile,
        defaults={'title': title},
    )
    details.title = title
    details.abstract = (data.get('abstract') or '').strip()
    details.supervisor_name = (data.get('supervisor_name') or '').strip()
    details.co_supervisor_name = (data.get('co_supervisor_name') or '').strip()
    details.keywords = parse_keywords(data.get('keywords'))
    details.save()

    logger.info('research details %s student=%s', 'created' if created else 'updated', profile.pk)
    return details
