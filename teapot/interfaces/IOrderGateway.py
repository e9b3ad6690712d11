from abc import ABC, abstractmethod
from typing import List

from teapot.domain.models import Order

class IOrderGateway(ABC):
    """Where placed orders go. Failures raise OrderServiceError."""

    @abstractmethod
    async def submit_order(self, order: Order) -> Order:
        pass

    @abstractmethod
    async def list_orders(self) -> List[Order]:
        pass

    @abstractmethod
    async def remove_order(self, order: Order) -> None:
        pass
