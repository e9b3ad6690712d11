import inspect
import logging
from collections import defaultdict
from typing import Awaitable, Callable, Dict, List, Type, Union

from pydantic import ValidationError as PydanticValidationError

from teapot.domain.events import Event, ItemAdded, OrderPlaced, event_adapter
from teapot.domain.exceptions import InvalidEvent

logger = logging.getLogger(__name__)

Handler = Callable[[Event], Union[None, Awaitable[None]]]

class EventBus:
    """
    In-process publish/subscribe for the closed set of storefront events.
    Handlers run in subscription order; async handlers are awaited.
    """

    def __init__(self):
        self._handlers: Dict[Type, List[Handler]] = defaultdict(list)

    def subscribe(self, event_type: Type, handler: Handler) -> Callable[[], None]:
        if event_type not in (ItemAdded, OrderPlaced):
            raise InvalidEvent(f"Unknown event type {event_type!r}")
        self._handlers[event_type].append(handler)

        def unsubscribe():
            if handler in self._handlers[event_type]:
                self._handlers[event_type].remove(handler)

        return unsubscribe

    async def publish(self, payload) -> Event:
        event = self._validate(payload)
        for handler in list(self._handlers[type(event)]):
            result = handler(event)
            if inspect.isawaitable(result):
                await result
        return event

    def _validate(self, payload) -> Event:
        if isinstance(payload, (ItemAdded, OrderPlaced)):
            return payload
        try:
            return event_adapter.validate_python(payload)
        except PydanticValidationError as e:
            logger.warning(f"Rejected event payload: {e}")
            raise InvalidEvent(str(e)) from e
