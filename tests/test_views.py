import asyncio
import threading
import unittest
from unittest.mock import MagicMock

from config.environment import AppConfig
from config.feature_flags import FeatureFlags
from modules.core.models import CreditsStatus
from modules.core.session import SessionStore
from modules.core.session_gate import LOGIN_PAGE
from modules.services.auth_service import AuthService
from modules.utils.helpers import reset_session
from modules.views import DashboardView, GenerateView
from tests.mocks import MockApiClient, make_product, make_subscription, make_uploads


def make_config(subscriptions=True):
    return AppConfig(
        api_base_url="https://api.example.com",
        features=FeatureFlags({'subscriptions': subscriptions})
    )


class TestDashboardView(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.api = MockApiClient()
        self.api.products = [make_product(1, "Pack 10", credits_granted=10)]
        self.api.subscriptions = {1: make_subscription(1)}
        self.store = SessionStore({})
        self.navigate = MagicMock()

    def make_view(self, subscriptions=True):
        return DashboardView(self.api, self.store, self.navigate, make_config(subscriptions),
                             open_url=MagicMock())

    async def test_no_session_issues_no_requests_and_redirects(self):
        view = self.make_view()

        self.assertFalse(await view.load())

        self.assertEqual(self.api.calls, [])
        self.navigate.assert_called_once_with(LOGIN_PAGE)
        self.assertIsNone(view.activation)

    async def test_activation_loads_every_component(self):
        self.store.set_token("abc")
        view = self.make_view()

        self.assertTrue(await view.load())

        self.assertEqual(
            sorted(self.api.call_names()),
            ['get_credits_status', 'get_products', 'list_subscriptions']
        )
        self.assertEqual(len(view.catalog.one_time), 1)
        self.assertEqual(len(view.subscriptions.subscriptions), 1)
        self.assertIsNotNone(view.credits.status)
        self.navigate.assert_not_called()

    async def test_disabled_subscriptions_are_not_fetched(self):
        self.store.set_token("abc")
        view = self.make_view(subscriptions=False)

        await view.load()

        self.assertNotIn('list_subscriptions', self.api.call_names())
        self.assertFalse(view.subscriptions_enabled)

    async def test_one_failure_does_not_block_the_others(self):
        self.store.set_token("abc")
        self.api.fail('get_credits_status', "ledger offline")
        view = self.make_view()

        await view.load()

        self.assertEqual(view.credits.state.error, "ledger offline")
        self.assertEqual(len(view.catalog.products), 1)
        self.assertEqual([event.source for event in view.events.errors()], ['credits'])

    async def test_failures_are_kept_per_component(self):
        self.store.set_token("abc")
        self.api.fail('get_credits_status', "ledger offline")
        self.api.fail('get_products', "catalog offline")
        view = self.make_view()

        await view.load()

        self.assertEqual(view.credits.state.error, "ledger offline")
        self.assertEqual(view.catalog.state.error, "catalog offline")
        self.assertEqual(len(view.events.errors()), 2)

    async def test_deactivate_drops_late_responses(self):
        self.store.set_token("abc")
        release = threading.Event()
        original = self.api.get_products

        def slow_products():
            release.wait(5)
            return original()

        self.api.get_products = slow_products
        view = self.make_view()

        await view.activate()
        await asyncio.sleep(0.05)
        cancelled = view.activation.deactivate()
        release.set()
        await view.activation.wait()

        self.assertGreaterEqual(cancelled, 1)
        self.assertEqual(view.catalog.products, [])
        self.assertEqual(view.activation.pending, 0)

    async def test_launch_after_deactivate_is_refused(self):
        self.store.set_token("abc")
        view = self.make_view()
        await view.load()
        view.deactivate()

        with self.assertRaises(RuntimeError):
            view.activation.launch(view.credits.load())


class TestGenerateView(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.api = MockApiClient()
        self.store = SessionStore({})
        self.navigate = MagicMock()
        self.view = GenerateView(self.api, self.store, self.navigate, make_config())

    async def test_no_session(self):
        self.assertFalse(await self.view.load())
        self.assertEqual(self.api.calls, [])
        self.navigate.assert_called_once_with(LOGIN_PAGE)

    async def test_activation_refreshes_feed(self):
        self.store.set_token("abc")
        self.api.upload_pages = [make_uploads(2)]

        await self.view.load()

        self.assertEqual(self.api.calls, [('list_uploads', 50, 0)])
        self.assertEqual(len(self.view.feed.items), 2)
        self.assertFalse(self.view.feed.has_more)



class TestAccountSwitch(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.api = MockApiClient()
        self.api.products = [make_product(1, "Pack 10", credits_granted=10)]
        self.api.subscriptions = {1: make_subscription(1)}
        self.api.credits = CreditsStatus(credits=99, monthly_quota=7, free_generation_used=False)
        self.storage = {}
        self.store = SessionStore(self.storage)
        self.navigate = MagicMock()
        self.auth = AuthService(self.api, self.store, self.navigate,
                                on_logout=lambda: reset_session(self.storage))
        self.dashboard = DashboardView(self.api, self.store, self.navigate, make_config(),
                                       open_url=MagicMock())
        self.generate = GenerateView(self.api, self.store, self.navigate, make_config())
        self.storage.update({
            'dashboard_view': self.dashboard,
            'generate_view': self.generate,
            'active_page': 'dashboard_view',
            'pending_payment_url': "https://pay.example.com/checkout/1",
        })

    async def sign_in_as_first_account(self):
        self.store.set_token("user-a")
        self.api.fail('list_subscriptions', "subscriptions offline")
        await self.dashboard.load()
        self.assertEqual(self.dashboard.credits.status.credits, 99)
        self.api.upload_pages = [make_uploads(2)]
        await self.generate.load()
        self.generate.submission.url = "https://example.com/a.mp4"

    async def test_logout_forgets_cached_views_and_flags(self):
        await self.sign_in_as_first_account()

        self.auth.logout()

        for key in ('dashboard_view', 'generate_view', 'active_page', 'pending_payment_url', 'auth_token'):
            self.assertNotIn(key, self.storage)

    async def test_second_account_never_sees_first_account_data(self):
        await self.sign_in_as_first_account()
        self.auth.logout()

        self.store.set_token("user-b")
        self.api.failures.clear()
        self.api.fail('get_credits_status', "ledger offline")
        self.api.fail('list_uploads', "uploads offline")
        await self.dashboard.load()
        await self.generate.load()

        self.assertIsNone(self.dashboard.credits.status)
        self.assertEqual(self.dashboard.credits.state.error, "ledger offline")
        self.assertEqual([event.message for event in self.dashboard.events.errors()], ["ledger offline"])
        self.assertEqual(self.generate.feed.items, [])
        self.assertEqual(self.generate.submission.url, "")

    async def test_same_token_keeps_loaded_data(self):
        self.store.set_token("user-a")
        await self.dashboard.load()
        self.api.fail('get_credits_status', "ledger offline")

        await self.dashboard.load()

        self.assertEqual(self.dashboard.credits.status.credits, 99)

    def test_reset_session_deactivates_views(self):
        view = MagicMock()
        storage = {'dashboard_view': view, 'reload_dashboard': True, 'auth_token': "kept"}

        reset_session(storage)

        view.deactivate.assert_called_once_with()
        self.assertEqual(storage, {'auth_token': "kept"})


if __name__ == '__main__':
    unittest.main()
