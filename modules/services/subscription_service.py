from typing import List, Optional

from modules.core.models import Subscription
from modules.core.state_manager import Component, EventLog
from modules.services.api_client import run_request


class SubscriptionManager(Component):
    """Active subscriptions for the current session.

    Status is never patched locally: every cancel is followed by a full
    refetch, since cancelling can also change the credit ledger server-side.
    """

    name = "subscriptions"

    def __init__(self, api, enabled: bool = True, events: Optional[EventLog] = None):
        super().__init__(api, events)
        self.enabled = enabled
        self.subscriptions: List[Subscription] = []

    async def list(self) -> bool:
        if not self.enabled:
            self.subscriptions = []
            self.logger.info("Subscriptions disabled, skipping fetch")
            return False
        self.state.start()
        try:
            subscriptions = await run_request(self.api.list_subscriptions)
        except Exception as e:
            self._report_failure(e, "Failed to load subscriptions")
            return False
        self.subscriptions = subscriptions
        self.state.succeed()
        return True

    async def cancel(self, subscription_id: int) -> bool:
        if not self.enabled:
            return False
        self.state.error = None
        try:
            await run_request(self.api.cancel_subscription, subscription_id)
            self.logger.info(f"Cancel requested for subscription {subscription_id}")
            subscriptions = await run_request(self.api.list_subscriptions)
        except Exception as e:
            self._report_failure(e, "Cancel failed")
            return False
        self.subscriptions = subscriptions
        self.state.succeed()
        return True

    def get(self, subscription_id: int) -> Optional[Subscription]:
        for subscription in self.subscriptions:
            if subscription.id == subscription_id:
                return subscription
        return None
