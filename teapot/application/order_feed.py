import asyncio
import logging
from typing import List, Optional

from teapot.domain.events import OrderPlaced
from teapot.domain.exceptions import OrderServiceError
from teapot.domain.models import Order
from teapot.interfaces.IOrderGateway import IOrderGateway

logger = logging.getLogger(__name__)

# Define our States
STATE_IDLE = "IDLE"
STATE_POLLING = "POLLING"


class CancellationToken:
    """Handed to every fetch; once cancelled, whatever the fetch returns is dropped."""

    def __init__(self):
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class OrderFeed:
    """
    Staff view of open orders.
    While polling, the whole list is re-fetched every `interval` seconds
    and replaced wholesale.
    """

    def __init__(self, gateway: IOrderGateway, interval: float = 3.0):
        self.gateway = gateway
        self.interval = interval
        self.orders: List[Order] = []
        self.state = STATE_IDLE
        self.last_error: Optional[str] = None
        self._token: Optional[CancellationToken] = None
        self._task: Optional[asyncio.Task] = None

    async def start(self):
        if self.state == STATE_POLLING:
            return
        self.state = STATE_POLLING
        self._token = CancellationToken()
        await self.refresh(self._token)
        self._task = asyncio.create_task(self._poll(self._token))
        logger.info(f"Order feed polling every {self.interval}s")

    async def stop(self):
        if self.state == STATE_IDLE:
            return
        self.state = STATE_IDLE
        if self._token:
            self._token.cancel()
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        self._task = None
        self._token = None
        logger.info("Order feed stopped")

    async def refresh(self, token: Optional[CancellationToken] = None) -> bool:
        """Fetch the list once. Returns False if nothing was applied."""
        token = token or self._token
        try:
            orders = await self.gateway.list_orders()
        except OrderServiceError as e:
            logger.error(f"❌ Error loading orders: {e}")
            self.last_error = str(e)
            return False

        if token is None or token.cancelled:
            logger.debug("Dropping order list fetched after the feed stopped")
            return False

        self.orders = orders
        self.last_error = None
        return True

    async def mark_fulfilled(self, order: Order):
        """
        Takes the order off the list right away, then asks the store to drop it.
        Remote removal goes by phone, so every open order sharing the key goes
        with it. If the store refuses, they are put back where they were and
        the error re-raised.
        """
        key = order.removal_key
        removed = [(i, o) for i, o in enumerate(self.orders) if o.removal_key == key]
        self.orders = [o for o in self.orders if o.removal_key != key]

        try:
            await self.gateway.remove_order(order)
        except OrderServiceError:
            if self._index_of(key) is None:
                for index, kept in removed:
                    self.orders.insert(min(index, len(self.orders)), kept)
            raise

    def find(self, removal_key: str) -> Optional[Order]:
        index = self._index_of(removal_key)
        return self.orders[index] if index is not None else None

    def on_order_placed(self, event: OrderPlaced):
        if self.state == STATE_POLLING:
            self.orders = list(event.orders)

    async def _poll(self, token: CancellationToken):
        while not token.cancelled:
            await asyncio.sleep(self.interval)
            if token.cancelled:
                break
            await self.refresh(token)

    def _index_of(self, removal_key: str) -> Optional[int]:
        for i, order in enumerate(self.orders):
            if order.removal_key == removal_key:
                return i
        return None
