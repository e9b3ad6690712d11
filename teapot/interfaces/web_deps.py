import uuid
from pathlib import Path

from fastapi import Request
from fastapi.templating import Jinja2Templates

from teapot.domain.models import format_money

CART_COOKIE = "cart_id"

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))
templates.env.filters["money"] = format_money


def get_cart_id(request: Request) -> str:
    """Session cart id from the cookie, or a fresh one for first-time visitors."""
    cart_id = request.cookies.get(CART_COOKIE)
    if not cart_id:
        cart_id = uuid.uuid4().hex
    return cart_id


def remember_cart(response, cart_id: str):
    response.set_cookie(CART_COOKIE, cart_id, httponly=True, samesite="lax")
    return response
