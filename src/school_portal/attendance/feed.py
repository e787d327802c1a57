from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from .model import AttendanceRecord

logger = logging.getLogger(__name__)

Listener = Callable[[Sequence[AttendanceRecord]], None]
Loader = Callable[["AttendanceFilter"], Sequence[AttendanceRecord]]


@dataclass(frozen=True)
class AttendanceFilter:
    class_id: Optional[int] = None
    enrollment_id: Optional[int] = None

    def matches(self, record: AttendanceRecord) -> bool:
        if self.class_id is not None and record.class_id != self.class_id:
            return False
        if self.enrollment_id is not None and record.enrollment_id != self.enrollment_id:
            return False
        return True


class AttendanceFeed:
    """Live attendance listeners.

    Each listener gets the full current record list for its filter right away
    and again after every change touching that filter (snapshots, not deltas).
    ``subscribe`` returns the function that removes the listener.
    """

    def __init__(self, loader: Loader):
        self._loader = loader
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self._listeners: dict[int, tuple[AttendanceFilter, Listener]] = {}

    def subscribe(self, listener: Listener, *, class_id: Optional[int] = None, enrollment_id: Optional[int] = None) -> Callable[[], None]:
        flt = AttendanceFilter(class_id=class_id, enrollment_id=enrollment_id)
        with self._lock:
            token = next(self._ids)
            self._listeners[token] = (flt, listener)
        logger.debug("Listener %s subscribed (%s)", token, flt)
        self._deliver(token, flt, listener)

        def unsubscribe() -> None:
            with self._lock:
                removed = self._listeners.pop(token, None)
            if removed:
                logger.debug("Listener %s unsubscribed", token)

        return unsubscribe

    def publish(self, record: AttendanceRecord) -> None:
        with self._lock:
            targets = [(t, f, l) for t, (f, l) in self._listeners.items() if f.matches(record)]
        for token, flt, listener in targets:
            self._deliver(token, flt, listener)

    def _deliver(self, token: int, flt: AttendanceFilter, listener: Listener) -> None:
        try:
            listener(list(self._loader(flt)))
        except Exception:
            # Listener failures never reach the writer or the other listeners.
            logger.exception("Attendance listener %s failed", token)

    def __len__(self) -> int:
        with self._lock:
            return len(self._listeners)
