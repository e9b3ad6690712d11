from abc import ABC, abstractmethod
from typing import List, Dict

class ICartStore(ABC):
    @abstractmethod
    def load(self, cart_id: str) -> List[Dict]:
        pass

    @abstractmethod
    def save(self, cart_id: str, lines: List[Dict]) -> None:
        pass

    @abstractmethod
    def clear(self, cart_id: str) -> None:
        pass
