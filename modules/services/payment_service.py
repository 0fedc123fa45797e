import webbrowser
from typing import Callable, Optional

from modules.core.models import PaymentResponse
from modules.core.state_manager import Component, EventLog
from modules.services.api_client import run_request

PAYMENT_OPENED_MESSAGE = "Payment link opened in a new tab."
PAYMENT_FALLBACK_MESSAGE = "Payment created. Check your Lava dashboard."


def open_in_new_tab(url: str) -> None:
    webbrowser.open_new_tab(url)


class PaymentInitiator(Component):
    """Starts a purchase; completion shows up later through credits and uploads."""

    name = "payment"

    def __init__(self, api, open_url: Callable[[str], None] = open_in_new_tab,
                 events: Optional[EventLog] = None):
        super().__init__(api, events)
        self.open_url = open_url
        self.last_payment: Optional[PaymentResponse] = None

    async def buy(self, slug: str, buyer_email: Optional[str] = None,
                  periodicity: Optional[str] = None) -> Optional[PaymentResponse]:
        """
        Create a payment for a catalog product.

        Args:
            slug: Product slug from the catalog
            buyer_email: Optional receipt address forwarded to the provider
            periodicity: Optional billing period for subscription plans

        Returns:
            PaymentResponse or None if the request failed
        """
        self.state.start()
        self.state.message = None
        try:
            result = await run_request(
                self.api.create_payment, slug,
                buyer_email=buyer_email, periodicity=periodicity
            )
        except Exception as e:
            self._report_failure(e, "Payment failed")
            return None

        self.last_payment = result
        self.logger.info(f"Payment {result.transaction_id} created for {slug}")
        if result.payment_url:
            self.open_url(result.payment_url)
            self._report_info(PAYMENT_OPENED_MESSAGE)
        else:
            self._report_info(PAYMENT_FALLBACK_MESSAGE)
        self.state.succeed()
        return result
