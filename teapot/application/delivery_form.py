import re
from typing import Dict

from teapot.domain.exceptions import ValidationError
from teapot.domain.models import DeliveryInfo

PHONE_LENGTH = 10

PHONE_ERROR = "Phone number must be exactly 10 digits"
ADDRESS_ERROR = "Address is required"
EMPTY_CART_ERROR = "Please add items to your order first!"


def normalize_phone(raw: str) -> str:
    """Digits only, at most ten of them."""
    return re.sub(r"\D", "", raw or "")[:PHONE_LENGTH]


class DeliveryForm:
    """
    Address and phone as typed at checkout.
    set_* runs on every keystroke and keeps inline errors current;
    validate() is the gate at submission time.
    """

    def __init__(self, address: str = "", phone: str = ""):
        self.address = ""
        self.phone = ""
        self.errors: Dict[str, str] = {}
        if address:
            self.set_address(address)
        if phone:
            self.set_phone(phone)

    def set_phone(self, raw: str) -> str:
        self.phone = normalize_phone(raw)
        # Empty input is not complained about until submission
        if self.phone and len(self.phone) != PHONE_LENGTH:
            self.errors["phone"] = PHONE_ERROR
        else:
            self.errors.pop("phone", None)
        return self.phone

    def set_address(self, raw: str) -> str:
        self.address = (raw or "").strip()
        if not self.address:
            self.errors["address"] = ADDRESS_ERROR
        else:
            self.errors.pop("address", None)
        return self.address

    def validate(self, cart_is_empty: bool = False) -> DeliveryInfo:
        errors = {}
        if len(self.phone) != PHONE_LENGTH:
            errors["phone"] = PHONE_ERROR
        if not self.address:
            errors["address"] = ADDRESS_ERROR
        if cart_is_empty:
            errors["cart"] = EMPTY_CART_ERROR

        self.errors = {key: msg for key, msg in errors.items() if key != "cart"}
        if errors:
            raise ValidationError(errors)
        return DeliveryInfo(address=self.address, phone=self.phone)

    def reset(self):
        self.address = ""
        self.phone = ""
        self.errors = {}
