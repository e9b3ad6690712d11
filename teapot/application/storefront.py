import logging
from decimal import Decimal
from typing import Optional

from teapot.application.cart_manager import CartManager
from teapot.application.delivery_form import DeliveryForm
from teapot.application.order_submitter import OrderSubmitter, SubmissionResult
from teapot.domain.events import ItemAdded
from teapot.domain.exceptions import UnknownMenuItem
from teapot.domain.menu import find_item
from teapot.infrastructure.event_bus import EventBus
from teapot.interfaces.ICartStore import ICartStore

logger = logging.getLogger(__name__)


class Storefront:
    """
    Customer side of the café, one cart per session id.
    Carts are rebuilt from the store on each call, so the store stays the
    single source of truth.
    """

    def __init__(self, cart_store: ICartStore, submitter: OrderSubmitter, bus: EventBus):
        self.cart_store = cart_store
        self.submitter = submitter
        self.bus = bus
        self.bus.subscribe(ItemAdded, self._on_item_added)

    @property
    def delivery_fee(self) -> Decimal:
        return self.submitter.delivery_fee

    def cart_for(self, cart_id: str) -> CartManager:
        return CartManager(cart_id, self.cart_store)

    async def add_to_cart(self, cart_id: str, name: str) -> CartManager:
        item = find_item(name)
        if item is None:
            raise UnknownMenuItem(name)
        await self.bus.publish(ItemAdded(cart_id=cart_id, item=item))
        return self.cart_for(cart_id)

    def increase(self, cart_id: str, name: str) -> CartManager:
        cart = self.cart_for(cart_id)
        cart.increase_quantity(name)
        return cart

    def decrease(self, cart_id: str, name: str) -> CartManager:
        cart = self.cart_for(cart_id)
        cart.decrease_quantity(name)
        return cart

    def remove(self, cart_id: str, name: str) -> CartManager:
        cart = self.cart_for(cart_id)
        cart.remove_item(name)
        return cart

    def summary(self, cart_id: str, cart: Optional[CartManager] = None) -> dict:
        cart = cart or self.cart_for(cart_id)
        subtotal = cart.total()
        return {
            "items": [item.model_dump() for item in cart.snapshot()],
            "subtotal": subtotal,
            "delivery_fee": self.delivery_fee,
            "total": subtotal + self.delivery_fee,
        }

    def check_delivery(self, address: str, phone: str) -> DeliveryForm:
        """Keystroke validation: normalizes both fields and reports inline errors."""
        form = DeliveryForm()
        if address is not None:
            form.set_address(address)
        if phone is not None:
            form.set_phone(phone)
        return form

    async def checkout(self, cart_id: str, address: str, phone: str) -> SubmissionResult:
        cart = self.cart_for(cart_id)
        form = DeliveryForm(address=address, phone=phone)
        return await self.submitter.submit(cart, form)

    def _on_item_added(self, event: ItemAdded):
        self.cart_for(event.cart_id).add_item(event.item)
        logger.info(f"🛒 {event.item.name} added to cart {event.cart_id}")
