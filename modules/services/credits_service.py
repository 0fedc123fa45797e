from typing import List, Optional, Tuple

from modules.core.models import CreditsStatus
from modules.core.state_manager import Component, EventLog
from modules.services.api_client import run_request

# Order in which the backend consumes credits for a generation.
CONSUMPTION_ORDER: List[Tuple[str, str]] = [
    ("Monthly quota", "Used first"),
    ("One-time credits", "Backup"),
    ("Free generation", "Last resort"),
]


class CreditsSummary(Component):
    """Read-only snapshot of the credit balance."""

    name = "credits"

    def __init__(self, api, events: Optional[EventLog] = None):
        super().__init__(api, events)
        self.status: Optional[CreditsStatus] = None

    async def load(self) -> bool:
        self.state.start()
        try:
            status = await run_request(self.api.get_credits_status)
        except Exception as e:
            self._report_failure(e, "Failed to load credits")
            return False
        self.status = status
        self.state.succeed()
        return True

    @property
    def free_generation_label(self) -> Optional[str]:
        if self.status is None:
            return None
        return "Used" if self.status.free_generation_used else "Available"

    def next_source(self) -> Optional[str]:
        """Which balance the next generation draws from, if known."""
        if self.status is None:
            return None
        if self.status.monthly_quota > 0:
            return "Monthly quota"
        if self.status.credits > 0:
            return "One-time credits"
        if not self.status.free_generation_used:
            return "Free generation"
        return None
