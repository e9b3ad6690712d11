import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request, Response
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel

from teapot.domain.exceptions import UnknownMenuItem, ValidationError
from teapot.domain.menu import DEFAULT_TAB, MENU_TABS, items_for_tab
from teapot.interfaces.web_deps import get_cart_id, remember_cart, templates

router = APIRouter()
logger = logging.getLogger(__name__)


class DeliveryDraft(BaseModel):
    # Only the field being typed in needs to be sent
    address: Optional[str] = None
    phone: Optional[str] = None


@router.get("/", response_class=HTMLResponse)
def home(request: Request, tab: str = DEFAULT_TAB, cart_id: str = Depends(get_cart_id)):
    """Landing page, the menu tab in view and the cart below it."""
    storefront = request.app.state.storefront
    if tab not in MENU_TABS:
        tab = DEFAULT_TAB
    response = templates.TemplateResponse(
        request,
        "index.html",
        {
            "tabs": list(MENU_TABS),
            "active_tab": tab,
            "menu_items": items_for_tab(tab),
            "cart": storefront.summary(cart_id),
        },
    )
    return remember_cart(response, cart_id)


@router.get("/menu")
def menu(tab: str = DEFAULT_TAB):
    return {"tab": tab if tab in MENU_TABS else DEFAULT_TAB, "items": items_for_tab(tab)}


@router.get("/cart")
def read_cart(request: Request, response: Response, cart_id: str = Depends(get_cart_id)):
    remember_cart(response, cart_id)
    return request.app.state.storefront.summary(cart_id)


@router.post("/cart/items")
async def add_item(request: Request, response: Response, name: str = Form(...), cart_id: str = Depends(get_cart_id)):
    storefront = request.app.state.storefront
    try:
        cart = await storefront.add_to_cart(cart_id, name)
    except UnknownMenuItem as e:
        return JSONResponse(status_code=404, content={"detail": str(e)})
    remember_cart(response, cart_id)
    return storefront.summary(cart_id, cart)


@router.post("/cart/items/{name}/increase")
def increase_item(name: str, request: Request, response: Response, cart_id: str = Depends(get_cart_id)):
    storefront = request.app.state.storefront
    remember_cart(response, cart_id)
    return storefront.summary(cart_id, storefront.increase(cart_id, name))


@router.post("/cart/items/{name}/decrease")
def decrease_item(name: str, request: Request, response: Response, cart_id: str = Depends(get_cart_id)):
    storefront = request.app.state.storefront
    remember_cart(response, cart_id)
    return storefront.summary(cart_id, storefront.decrease(cart_id, name))


@router.delete("/cart/items/{name}")
def remove_item(name: str, request: Request, response: Response, cart_id: str = Depends(get_cart_id)):
    storefront = request.app.state.storefront
    remember_cart(response, cart_id)
    return storefront.summary(cart_id, storefront.remove(cart_id, name))


@router.post("/order/delivery/validate")
def validate_delivery(draft: DeliveryDraft, request: Request):
    """Called on every keystroke in the delivery form."""
    form = request.app.state.storefront.check_delivery(draft.address, draft.phone)
    return {"address": form.address, "phone": form.phone, "errors": form.errors}


@router.post("/order/confirm")
async def confirm_order(
    request: Request,
    address: str = Form(""),
    phone: str = Form(""),
    cart_id: str = Depends(get_cart_id),
):
    storefront = request.app.state.storefront
    try:
        result = await storefront.checkout(cart_id, address, phone)
    except ValidationError as e:
        return remember_cart(JSONResponse(status_code=422, content={"errors": e.errors}), cart_id)

    if not result.success:
        # Cart is untouched, the form stays open for another try
        return remember_cart(JSONResponse(status_code=502, content={"message": result.message}), cart_id)

    content = jsonable_encoder({
        "message": result.message,
        "items": result.items,
        "subtotal": result.subtotal,
        "delivery_fee": result.delivery_fee,
        "total": result.total,
    })
    return remember_cart(JSONResponse(content=content), cart_id)
