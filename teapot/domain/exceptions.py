from typing import Dict


class TeapotError(Exception):
    """Base for everything the ordering flow raises on purpose."""


class ValidationError(TeapotError):
    """
    Delivery form or cart is not ready for submission.
    `errors` maps a field ("address", "phone", "cart") to the message shown next to it.
    """

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__("; ".join(self.errors.values()))


class OrderServiceError(TeapotError):
    """The order store could not be reached or refused the request."""


class UnknownMenuItem(TeapotError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"'{name}' is not on the menu")


class InvalidEvent(TeapotError):
    pass
