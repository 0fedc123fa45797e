from typing import Callable, Optional

from config.environment import AppConfig
from modules.core.session import SessionStore
from modules.core.session_gate import SessionGate
from modules.core.state_manager import EventLog
from modules.services.credits_service import CONSUMPTION_ORDER
from modules.services.upload_service import UploadFeed, UploadSubmission
from modules.views.activation import ViewActivation


class GenerateView:
    """Upload form plus the paginated history of processing jobs."""

    consumption_order = CONSUMPTION_ORDER

    def __init__(self, api, session_store: SessionStore, navigate: Callable[[str], None],
                 config: AppConfig):
        self.api = api
        self.config = config
        self.session_store = session_store
        self.gate = SessionGate(session_store, navigate)
        self.activation: Optional[ViewActivation] = None
        self._owner: Optional[str] = None
        self.reset()

    def reset(self):
        """Drop the history, the pending input and the event log."""
        self.deactivate()
        self.events = EventLog()
        self.feed = UploadFeed(self.api, page_size=self.config.uploads_page_size, events=self.events)
        self.submission = UploadSubmission(self.api, self.feed, events=self.events)
        self._owner = None

    async def activate(self) -> bool:
        self.deactivate()
        if not self.gate.check():
            return False
        token = self.session_store.get_token()
        if token != self._owner:
            self.reset()
            self._owner = token
        self.activation = ViewActivation("generate")
        self.activation.launch(self.feed.refresh())
        return True

    async def load(self) -> bool:
        if not await self.activate():
            return False
        await self.activation.wait()
        return True

    def deactivate(self):
        if self.activation is not None:
            self.activation.deactivate()
