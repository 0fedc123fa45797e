from typing import Dict, Any

from modules.core.models import Subscription, UploadItem


class SubscriptionIndicator:
    @staticmethod
    def get_action(subscription: Subscription) -> Dict[str, Any]:
        """Cancel control for a subscription; disabled once it is canceled."""
        if subscription.is_canceled:
            return {"label": "Canceled", "disabled": True}
        return {"label": "Cancel", "disabled": False}


class UploadIndicator:
    @staticmethod
    def get_result(item: UploadItem) -> Dict[str, Any]:
        """Download link when the cleaned file exists, otherwise a processing badge."""
        if item.cleaned_url:
            return {"label": "Download", "url": item.cleaned_url, "color": "success"}
        return {"label": "Processing", "url": None, "color": "info"}


class CreditIndicator:
    @staticmethod
    def get_free_generation(used: bool) -> Dict[str, str]:
        if used:
            return {"label": "Used", "color": "warning"}
        return {"label": "Available", "color": "success"}
