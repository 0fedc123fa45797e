import unittest

from modules.services.subscription_service import SubscriptionManager
from modules.ui.indicators import SubscriptionIndicator
from tests.mocks import MockApiClient, make_subscription


class TestSubscriptionManager(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.api = MockApiClient()
        self.api.subscriptions = {
            1: make_subscription(1),
            2: make_subscription(2, status="canceled"),
        }
        self.manager = SubscriptionManager(self.api)

    async def test_list(self):
        self.assertTrue(await self.manager.list())
        self.assertEqual([s.id for s in self.manager.subscriptions], [1, 2])

    async def test_cancel_refetches_instead_of_patching(self):
        await self.manager.list()
        before = self.manager.get(1)

        self.assertTrue(await self.manager.cancel(1))

        self.assertEqual(
            self.api.call_names(),
            ['list_subscriptions', 'cancel_subscription', 'list_subscriptions']
        )
        self.assertEqual(before.status, "active")
        self.assertEqual(self.manager.get(1).status, "canceled")

    async def test_canceled_subscription_action_disabled_after_refetch(self):
        await self.manager.list()
        await self.manager.cancel(1)
        action = SubscriptionIndicator.get_action(self.manager.get(1))
        self.assertEqual(action, {"label": "Canceled", "disabled": True})

    async def test_cancel_failure_reports_error(self):
        await self.manager.list()
        self.api.fail('cancel_subscription', "Subscription not found", status_code=404)

        self.assertFalse(await self.manager.cancel(1))

        self.assertEqual(self.manager.state.error, "Subscription not found")
        self.assertEqual(self.manager.get(1).status, "active")

    async def test_disabled_manager_never_fetches(self):
        manager = SubscriptionManager(self.api, enabled=False)
        self.assertFalse(await manager.list())
        self.assertFalse(await manager.cancel(1))
        self.assertEqual(self.api.calls, [])
        self.assertEqual(manager.subscriptions, [])


if __name__ == '__main__':
    unittest.main()
