"""In-process change feed for inserted rows.

Receivers in `messaging.signals` publish a plain row dict after the writing
transaction commits; subscribers register per (table, event) and get back a
function that removes them again.
"""
import logging
import threading
from collections import OrderedDict, defaultdict
from typing import Callable, Dict, List, Tuple

logger = logging.getLogger(__name__)

TABLES = ('messages', 'student_documents', 'announcements')
EVENTS = ('INSERT', 'UPDATE')

Callback = Callable[[dict], None]

_lock = threading.Lock()
_subscribers: Dict[Tuple[str, str], List[Callback]] = defaultdict(list)


def subscribe(table_name: str, event: str, callback: Callback) -> Callable[[], None]:
    if table_name not in TABLES:
        raise ValueError(f'Unknown table {table_name!r}')
    event = event.upper()
    if event not in EVENTS:
        raise ValueError(f'Unknown event {event!r}')

    key = (table_name, event)
    with _lock:
        _subscribers[key].append(callback)

    def unsubscribe():
        with _lock:
            if callback in _subscribers[key]:
                _subscribers[key].remove(callback)

    return unsubscribe


def publish(table_name: str, event: str, row: dict) -> int:
    """Deliver `row` to current subscribers; returns how many were called."""
    with _lock:
        callbacks = list(_subscribers.get((table_name, event), ()))
    for callback in callbacks:
        try:
            callback(row)
        except Exception:
            # one broken subscriber must not block the others
            logger.exception('change feed subscriber failed table=%s event=%s', table_name, event)
    return len(callbacks)


def row_dict(instance) -> dict:
    return {f.attname: getattr(instance, f.attname) for f in instance._meta.concrete_fields}


def clear():
    with _lock:
        _subscribers.clear()


class MessageDeduplicator:
    """Remembers recently delivered message ids.

    The polling endpoint and the change feed can both surface the same
    message; `accept` returns True only the first time an id is seen.
    """

    def __init__(self, capacity: int = 1000):
        self.capacity = capacity
        self._seen = OrderedDict()

    def accept(self, message_id) -> bool:
        if message_id in self._seen:
            return False
        self._seen[message_id] = True
        if len(self._seen) > self.capacity:
            self._seen.popitem(last=False)
        return True

    def __contains__(self, message_id):
        return message_id in self._seen
