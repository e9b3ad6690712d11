import logging
from decimal import Decimal
from typing import Dict, List

from pydantic import ValidationError as PydanticValidationError

from teapot.domain.models import CartLine, MenuItem, OrderItem, subtotal
from teapot.interfaces.ICartStore import ICartStore

logger = logging.getLogger(__name__)


class CartManager:
    """
    The order a customer is still putting together.
    One line per item name, in the order items were first added. Every
    change is written straight through to the store.
    """

    def __init__(self, cart_id: str, store: ICartStore):
        self.cart_id = cart_id
        self.store = store
        self._lines: Dict[str, CartLine] = {}
        self._restore()

    @property
    def lines(self) -> List[CartLine]:
        return list(self._lines.values())

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def quantity_of(self, name: str) -> int:
        line = self._lines.get(name)
        return line.quantity if line else 0

    def add_item(self, item: MenuItem):
        line = self._lines.get(item.name)
        if line:
            line.quantity += 1
        else:
            self._lines[item.name] = CartLine(item=item, quantity=1)
        self._persist()

    def remove_item(self, name: str):
        if self._lines.pop(name, None) is not None:
            self._persist()

    def increase_quantity(self, name: str):
        line = self._lines.get(name)
        if not line:
            return
        line.quantity += 1
        self._persist()

    def decrease_quantity(self, name: str):
        line = self._lines.get(name)
        if not line:
            return
        line.quantity = max(0, line.quantity - 1)
        self._lines = {key: kept for key, kept in self._lines.items() if kept.quantity > 0}
        self._persist()

    def total(self) -> Decimal:
        return subtotal(self._lines.values())

    def snapshot(self) -> List[OrderItem]:
        return [line.to_order_item() for line in self._lines.values()]

    def clear(self):
        self._lines = {}
        self.store.clear(self.cart_id)

    def _persist(self):
        self.store.save(self.cart_id, [item.model_dump() for item in self.snapshot()])

    def _restore(self):
        for raw in self.store.load(self.cart_id):
            try:
                stored = OrderItem.model_validate(raw)
            except PydanticValidationError as e:
                logger.warning(f"Dropping unreadable line from cart {self.cart_id}: {e}")
                continue

            line = self._lines.get(stored.name)
            if line:
                line.quantity += stored.quantity
            else:
                self._lines[stored.name] = CartLine(item=stored.as_menu_item(), quantity=stored.quantity)
