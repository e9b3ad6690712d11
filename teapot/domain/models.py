from decimal import Decimal, InvalidOperation
from typing import Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

ZERO = Decimal("0")
CENTS = Decimal("0.01")
# Amounts at or above this are treated as corrupt
MAX_AMOUNT = Decimal("1e9")


def numeric_price(price: str, symbol: str = "$") -> Decimal:
    """
    Turns a menu price like "$5.99" into Decimal("5.99").
    Anything that doesn't parse counts as 0 instead of raising.
    """
    text = (price or "").strip()
    if symbol and text.startswith(symbol):
        text = text[len(symbol):].strip()
    try:
        value = Decimal(text)
    except InvalidOperation:
        return ZERO
    if not value.is_finite() or abs(value) >= MAX_AMOUNT:
        return ZERO
    return value


def format_money(amount: Decimal, symbol: str = "$") -> str:
    return f"{symbol}{amount.quantize(CENTS)}"


class MenuItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    price: str  # Kept as shown on the menu, e.g. "$5.99"
    description: str = ""
    image: str = ""
    category: str = ""


class OrderItem(MenuItem):
    """A menu item as it travels inside an order (flattened with its quantity)."""

    quantity: int = Field(ge=1)

    def as_menu_item(self) -> MenuItem:
        return MenuItem(**self.model_dump(exclude={"quantity"}))

    @property
    def line_total(self) -> Decimal:
        return numeric_price(self.price) * self.quantity


class CartLine(BaseModel):
    item: MenuItem
    quantity: int = 1

    @property
    def line_total(self) -> Decimal:
        return numeric_price(self.item.price) * self.quantity

    def to_order_item(self) -> OrderItem:
        return OrderItem(**self.item.model_dump(), quantity=self.quantity)


class DeliveryInfo(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    address: str
    phone: str


class Order(BaseModel):
    """
    Snapshot of a cart plus delivery details, in the shape the order
    service accepts and returns.
    """

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    id: Optional[str] = None  # Only orders kept in the local store have one
    items: List[OrderItem]
    timestamp: str
    total: Decimal
    delivery_info: DeliveryInfo = Field(alias="deliveryInfo")

    @field_validator("total")
    @classmethod
    def _total_in_range(cls, total: Decimal) -> Decimal:
        if not total.is_finite() or abs(total) >= MAX_AMOUNT:
            raise ValueError(f"total {total} is out of range")
        return total

    @field_serializer("total")
    def _total_as_number(self, total: Decimal) -> float:
        return float(total.quantize(CENTS))

    @property
    def removal_key(self) -> str:
        """Remote orders are removed by phone, local ones by their id."""
        return self.id or self.delivery_info.phone

    @property
    def subtotal(self) -> Decimal:
        return subtotal(self.items)

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def subtotal(lines: Iterable) -> Decimal:
    """Works for both CartLine and OrderItem, anything with a line_total."""
    return sum((line.line_total for line in lines), ZERO)
