from decimal import Decimal
from typing import List

import pytest

from teapot.application.order_submitter import OrderSubmitter
from teapot.domain.exceptions import OrderServiceError
from teapot.domain.menu import find_item
from teapot.domain.models import DeliveryInfo, Order, OrderItem
from teapot.infrastructure.cart_store import CartStore
from teapot.infrastructure.event_bus import EventBus
from teapot.interfaces.IOrderGateway import IOrderGateway


class FakeOrderGateway(IOrderGateway):
    """In-memory order service. Flip the fail_* flags to simulate an outage."""

    def __init__(self):
        self.orders: List[Order] = []
        self.fail_submit = False
        self.fail_list = False
        self.fail_remove = False
        self.list_calls = 0

    async def submit_order(self, order: Order) -> Order:
        if self.fail_submit:
            raise OrderServiceError("Order service is unreachable")
        self.orders.insert(0, order)
        return order

    async def list_orders(self) -> List[Order]:
        self.list_calls += 1
        if self.fail_list:
            raise OrderServiceError("Order service is unreachable")
        return list(self.orders)

    async def remove_order(self, order: Order) -> None:
        if self.fail_remove:
            raise OrderServiceError("Order service refused the request (500)")
        self.orders = [o for o in self.orders if o.removal_key != order.removal_key]


def make_order(phone: str = "0712345678", address: str = "12 Moi Avenue", **kwargs) -> Order:
    item = find_item("Mango Lassi")
    defaults = dict(
        items=[OrderItem(**item.model_dump(), quantity=1)],
        timestamp="10/19/2026, 02:30:00 PM",
        total=Decimal("7.98"),
        delivery_info=DeliveryInfo(address=address, phone=phone),
    )
    defaults.update(kwargs)
    return Order(**defaults)


@pytest.fixture
def cart_store() -> CartStore:
    """RAM-only cart store, no Redis involved."""
    return CartStore(redis_url=None)


@pytest.fixture
def gateway() -> FakeOrderGateway:
    return FakeOrderGateway()


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def submitter(gateway, bus) -> OrderSubmitter:
    return OrderSubmitter(gateway=gateway, bus=bus, delivery_fee=Decimal("2.99"), timezone="Africa/Nairobi")
