import math
from typing import Dict, List, Optional

from modules.core.models import Product, ProductType
from modules.core.state_manager import Component, EventLog
from modules.services.api_client import run_request

# Packs whose name or slug carries "10" are the marketing entry pack and are
# always listed first. This is a naming convention, not a numeric comparison.
ENTRY_PACK_MARKER = "10"


def partition_products(products: List[Product]) -> Dict[ProductType, List[Product]]:
    """Split the catalog into one-time packs and subscription plans."""
    groups = {ProductType.ONE_TIME: [], ProductType.SUBSCRIPTION: []}
    for product in products:
        groups[ProductType(product.product_type)].append(product)
    return groups


def is_entry_pack(product: Product) -> bool:
    return ENTRY_PACK_MARKER in product.name or ENTRY_PACK_MARKER in product.slug


def one_time_sort_key(product: Product):
    credits = product.credits_granted if product.credits_granted is not None else math.inf
    return (not is_entry_pack(product), credits)


def rank_one_time(products: List[Product]) -> List[Product]:
    """Entry packs first, then by granted credits ascending (missing last)."""
    return sorted(products, key=one_time_sort_key)


def is_featured(product: Product, featured_price: str) -> bool:
    return product.price == featured_price


class CatalogView(Component):
    """Product catalog loaded once per activation."""

    name = "catalog"

    def __init__(self, api, featured_price: str = "14.99", events: Optional[EventLog] = None):
        super().__init__(api, events)
        self.featured_price = featured_price
        self.products: List[Product] = []

    async def load(self) -> bool:
        self.state.start()
        try:
            products = await run_request(self.api.get_products)
        except Exception as e:
            self._report_failure(e, "Failed to load products")
            return False
        self.products = products
        self.state.succeed()
        self.logger.info(f"Loaded {len(products)} products")
        return True

    @property
    def one_time(self) -> List[Product]:
        return rank_one_time(partition_products(self.products)[ProductType.ONE_TIME])

    @property
    def subscription_plans(self) -> List[Product]:
        return partition_products(self.products)[ProductType.SUBSCRIPTION]

    def is_featured(self, product: Product) -> bool:
        return is_featured(product, self.featured_price)
