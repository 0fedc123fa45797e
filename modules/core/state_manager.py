from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional
import logging

from modules.core.error_handler import AuthRequired, ValidationError, error_message, log_error

IDLE = "idle"
LOADING = "loading"
ERROR = "error"


@dataclass
class ComponentState:
    """State slice owned by exactly one component."""
    status: str = IDLE
    error: Optional[str] = None
    message: Optional[str] = None

    def start(self):
        self.status = LOADING
        self.error = None

    def succeed(self, message: Optional[str] = None):
        self.status = IDLE
        if message is not None:
            self.message = message

    def fail(self, message: str):
        self.status = ERROR
        self.error = message

    @property
    def loading(self) -> bool:
        return self.status == LOADING


@dataclass(frozen=True)
class Event:
    source: str
    level: str
    message: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class EventLog:
    """Append-only record of messages raised by the components of a view."""

    def __init__(self):
        self._events: List[Event] = []

    def info(self, source: str, message: str) -> Event:
        return self._append(Event(source, "info", message))

    def error(self, source: str, message: str) -> Event:
        return self._append(Event(source, "error", message))

    def _append(self, event: Event) -> Event:
        self._events.append(event)
        return event

    @property
    def events(self) -> List[Event]:
        return list(self._events)

    def errors(self) -> List[Event]:
        return [event for event in self._events if event.level == "error"]

    def latest(self) -> Optional[Event]:
        return self._events[-1] if self._events else None

    def __len__(self):
        return len(self._events)


class Component:
    """Shared plumbing for the data components of a view.

    Each subclass owns a ``ComponentState`` and reports into the view's
    ``EventLog``. Failures are caught here, at the component boundary.
    """

    name = "component"

    def __init__(self, api, events: Optional[EventLog] = None):
        self.api = api
        self.events = events if events is not None else EventLog()
        self.state = ComponentState()
        self.logger = logging.getLogger(f"{__name__}.{self.name}")

    def _report_failure(self, error: Exception, fallback: str) -> bool:
        """Record a failure. Returns False for a missing session, which is silent."""
        if isinstance(error, AuthRequired):
            self.logger.info(f"{self.name}: skipped, no session")
            self.state.status = IDLE
            return False
        message = error_message(error, fallback)
        log_error(error, context=self.name)
        self.state.fail(message)
        self.events.error(self.name, message)
        return True

    def _report_invalid(self, error: ValidationError):
        self.state.fail(error.message)
        self.events.error(self.name, error.message)

    def _report_info(self, message: str):
        self.state.message = message
        self.events.info(self.name, message)
