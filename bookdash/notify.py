"""Transient success/error notifications."""
import time
from dataclasses import dataclass
from typing import Callable, Optional

SUCCESS = "success"
ERROR = "error"


@dataclass(frozen=True)
class Notification:
    message: str
    kind: str = SUCCESS


class Notifier:
    """Holds at most one notification and drops it after ``duration`` seconds."""
    
    def __init__(self, duration: float = 3.0, clock: Callable[[], float] = time.monotonic):
        self.duration = duration
        self._clock = clock
        self._notification: Optional[Notification] = None
        self._shown_at = 0.0
    
    def show(self, message: str, kind: str = SUCCESS) -> Notification:
        """Replace the current notification and restart the timer."""
        self._notification = Notification(message, kind)
        self._shown_at = self._clock()
        return self._notification
    
    def current(self) -> Optional[Notification]:
        """The visible notification, or None once it has expired."""
        if self._notification is not None and self._clock() - self._shown_at >= self.duration:
            self._notification = None
        return self._notification
    
    def dismiss(self):
        self._notification = None
