from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional
import logging

from django.db import DatabaseError

logger = logging.getLogger(__name__)


@dataclass
class FetchResult:
    """Outcome of a read: either items (possibly none) or an error message."""

    items: List[Any] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def is_empty(self) -> bool:
        return self.ok and not self.items


def fetch(loader: Callable[[], Any], what: str = 'rows') -> FetchResult:
    """Run ``loader`` and capture database failures instead of hiding them."""
    try:
        return FetchResult(items=list(loader()))
    except DatabaseError as exc:
        logger.warning('failed to fetch %s: %s', what, exc)
        return FetchResult(error=f'Could not load {what}: {exc}')
