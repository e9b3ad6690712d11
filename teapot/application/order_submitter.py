import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Callable, List, Optional

import pytz

from teapot.application.cart_manager import CartManager
from teapot.application.delivery_form import DeliveryForm
from teapot.domain.events import OrderPlaced
from teapot.domain.exceptions import OrderServiceError
from teapot.domain.models import ZERO, Order, OrderItem
from teapot.infrastructure.event_bus import EventBus
from teapot.interfaces.IOrderGateway import IOrderGateway

logger = logging.getLogger(__name__)

# Same look as a browser's toLocaleString(): "10/19/2026, 02:30:00 PM"
TIMESTAMP_FORMAT = "%m/%d/%Y, %I:%M:%S %p"

SUCCESS_MESSAGE = "Order Placed Successfully! Your order will be delivered shortly."
FAILURE_MESSAGE = "We couldn't place your order. Please try again."


@dataclass
class SubmissionResult:
    success: bool
    message: str
    order: Optional[Order] = None
    items: List[OrderItem] = field(default_factory=list)
    subtotal: Decimal = ZERO
    delivery_fee: Decimal = ZERO
    total: Decimal = ZERO


class OrderSubmitter:
    """
    Checkout. Turns the cart and delivery details into an Order and hands it
    to the gateway; only a confirmed submission empties the cart.
    """

    def __init__(
        self,
        gateway: IOrderGateway,
        bus: EventBus,
        delivery_fee: Decimal,
        timezone: str = "UTC",
        notifier=None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.gateway = gateway
        self.bus = bus
        self.delivery_fee = delivery_fee
        self.tz = pytz.timezone(timezone)
        self.notifier = notifier  # Injected NotificationService
        self.clock = clock or (lambda: datetime.now(self.tz))

    def build_order(self, cart: CartManager, form: DeliveryForm) -> Order:
        # Raises ValidationError before anything leaves the process
        delivery_info = form.validate(cart_is_empty=cart.is_empty)
        return Order(
            items=cart.snapshot(),
            timestamp=self.clock().strftime(TIMESTAMP_FORMAT),
            total=cart.total() + self.delivery_fee,
            delivery_info=delivery_info,
        )

    async def submit(self, cart: CartManager, form: DeliveryForm) -> SubmissionResult:
        order = self.build_order(cart, form)

        try:
            placed = await self.gateway.submit_order(order)
        except OrderServiceError as e:
            logger.error(f"❌ Order for cart {cart.cart_id} not placed: {e}")
            return SubmissionResult(success=False, message=FAILURE_MESSAGE)

        # --- ACCEPTED: FINALIZE ---
        cart.clear()
        form.reset()
        logger.info(f"✅ Order placed for {placed.delivery_info.phone} ({len(placed.items)} lines)")

        await self._announce(placed)

        return SubmissionResult(
            success=True,
            message=SUCCESS_MESSAGE,
            order=placed,
            items=placed.items,
            subtotal=placed.subtotal,
            delivery_fee=self.delivery_fee,
            total=placed.total,
        )

    async def _announce(self, order: Order):
        """Post-checkout side effects. Failures are logged, never raised: the order is already placed."""
        try:
            orders = await self.gateway.list_orders()
            await self.bus.publish(OrderPlaced(orders=orders))
        except OrderServiceError as e:
            # The staff feed will pick the order up on its next poll
            logger.warning(f"Could not refresh order list after checkout: {e}")
        except Exception as e:
            logger.error(f"❌ Order-placed handlers failed: {e}", exc_info=True)

        if self.notifier:
            try:
                # Twilio's client is blocking
                await asyncio.to_thread(self.notifier.notify_staff_new_order, order)
            except Exception as e:
                logger.error(f"❌ Staff notification failed: {e}", exc_info=True)
