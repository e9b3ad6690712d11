from typing import Annotated, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from teapot.domain.models import MenuItem, Order


class ItemAdded(BaseModel):
    """A customer picked an item from the menu."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["item_added"] = "item_added"
    cart_id: str
    item: MenuItem


class OrderPlaced(BaseModel):
    """An order went through. Carries the order list as it stands now."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["order_placed"] = "order_placed"
    orders: List[Order]


Event = Annotated[Union[ItemAdded, OrderPlaced], Field(discriminator="kind")]

event_adapter = TypeAdapter(Event)
