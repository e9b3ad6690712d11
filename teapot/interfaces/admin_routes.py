import logging

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, JSONResponse

from teapot.domain.exceptions import OrderServiceError
from teapot.interfaces.web_deps import templates

router = APIRouter(prefix="/admin")
logger = logging.getLogger(__name__)

DELETE_FAILED = "Failed to delete order. Please try again."


@router.get("/orders", response_class=HTMLResponse)
def read_orders(request: Request):
    feed = request.app.state.order_feed
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {"orders": feed.orders, "poll_seconds": feed.interval},
    )


@router.get("/orders.json")
def read_orders_json(request: Request):
    feed = request.app.state.order_feed
    return {
        "state": feed.state,
        "orders": [order.to_wire() for order in feed.orders],
    }


@router.post("/orders/{key}/sent")
async def mark_sent(key: str, request: Request):
    """Staff pressed "Sent". `key` is the phone for remote orders, the id for local ones."""
    feed = request.app.state.order_feed
    order = feed.find(key)
    if order is None:
        return JSONResponse(status_code=404, content={"detail": f"No open order for {key}"})

    try:
        await feed.mark_fulfilled(order)
    except OrderServiceError as e:
        logger.error(f"❌ Error deleting order {key}: {e}")
        return JSONResponse(status_code=502, content={"message": DELETE_FAILED})

    return {"orders": [o.to_wire() for o in feed.orders]}
