from typing import Callable, Optional

from config.environment import AppConfig
from modules.core.session import SessionStore
from modules.core.session_gate import SessionGate
from modules.core.state_manager import EventLog
from modules.services.catalog_service import CatalogView
from modules.services.credits_service import CreditsSummary
from modules.services.payment_service import PaymentInitiator, open_in_new_tab
from modules.services.subscription_service import SubscriptionManager
from modules.views.activation import ViewActivation


class DashboardView:
    """Credits, catalog, payments and subscriptions for the signed-in user.

    Component state belongs to one session token; activating under a
    different token starts from empty components.
    """

    def __init__(self, api, session_store: SessionStore, navigate: Callable[[str], None],
                 config: AppConfig, open_url: Callable[[str], None] = open_in_new_tab):
        self.api = api
        self.config = config
        self.open_url = open_url
        self.session_store = session_store
        self.gate = SessionGate(session_store, navigate)
        self.activation: Optional[ViewActivation] = None
        self._owner: Optional[str] = None
        self.reset()

    def reset(self):
        """Drop everything loaded so far."""
        self.deactivate()
        self.events = EventLog()
        self.credits = CreditsSummary(self.api, events=self.events)
        self.catalog = CatalogView(self.api, featured_price=self.config.featured_price, events=self.events)
        self.subscriptions = SubscriptionManager(
            self.api, enabled=self.config.subscriptions_enabled, events=self.events
        )
        self.payments = PaymentInitiator(self.api, open_url=self.open_url, events=self.events)
        self._owner = None

    @property
    def subscriptions_enabled(self) -> bool:
        return self.subscriptions.enabled

    async def activate(self) -> bool:
        """Start the initial fetches without waiting for them."""
        self.deactivate()
        if not self.gate.check():
            return False
        token = self.session_store.get_token()
        if token != self._owner:
            self.reset()
            self._owner = token
        self.activation = ViewActivation("dashboard")
        self.activation.launch(self.credits.load())
        self.activation.launch(self.catalog.load())
        if self.subscriptions.enabled:
            self.activation.launch(self.subscriptions.list())
        return True

    async def load(self) -> bool:
        """Activate and wait until every initial fetch has settled."""
        if not await self.activate():
            return False
        await self.activation.wait()
        return True

    def deactivate(self):
        if self.activation is not None:
            self.activation.deactivate()
