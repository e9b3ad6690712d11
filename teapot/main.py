import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy.exc import OperationalError

from teapot.core.config import settings

# 1. Infrastructure & Domain Imports
from teapot.domain.events import OrderPlaced
from teapot.application.order_feed import OrderFeed
from teapot.application.order_submitter import OrderSubmitter
from teapot.application.storefront import Storefront
from teapot.infrastructure.cart_store import build_cart_store
from teapot.infrastructure.event_bus import EventBus
from teapot.infrastructure.notification_service import build_notifier
from teapot.interfaces import admin_routes, storefront_routes

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

# ---------------------------------------------------------
# ORDER STORE
# ---------------------------------------------------------
MAX_RETRIES = 10
WAIT_SECONDS = 3


def build_order_gateway():
    if settings.ORDER_BACKEND == "remote":
        from teapot.infrastructure.order_client import build_http_gateway
        print(f"🌐 Orders go to {settings.ORDER_API_URL}")
        return build_http_gateway()

    from teapot.domain.records import OrderRecord  # noqa: F401  (registers the table)
    from teapot.infrastructure.database import Base, engine
    from teapot.infrastructure.repositories.order_repository import SqlOrderRepository

    for attempt in range(MAX_RETRIES):
        try:
            print(f"🔄 Attempting DB connection ({attempt + 1}/{MAX_RETRIES})...")
            Base.metadata.create_all(bind=engine)
            print("✅ DB Connected and Tables Created.")
            break
        except OperationalError:
            print(f"⚠️ DB not ready yet. Waiting {WAIT_SECONDS}s...")
            time.sleep(WAIT_SECONDS)
    else:
        print("❌ Could not connect to DB after retries.")
    return SqlOrderRepository()


# ---------------------------------------------------------
# COMPOSITION ROOT
# ---------------------------------------------------------
bus = EventBus()
order_gateway = build_order_gateway()
order_feed = OrderFeed(order_gateway, interval=settings.POLL_INTERVAL_SECONDS)
bus.subscribe(OrderPlaced, order_feed.on_order_placed)

submitter = OrderSubmitter(
    gateway=order_gateway,
    bus=bus,
    delivery_fee=settings.DELIVERY_FEE,
    timezone=settings.TIMEZONE,
    notifier=build_notifier(),
)
storefront = Storefront(cart_store=build_cart_store(), submitter=submitter, bus=bus)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await order_feed.start()
    yield
    await order_feed.stop()
    if hasattr(order_gateway, "close"):
        await order_gateway.close()


app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)
app.state.storefront = storefront
app.state.order_feed = order_feed

# Include Routers
app.include_router(storefront_routes.router)
app.include_router(admin_routes.router)


@app.get("/health")
def health_check():
    return {"status": "active", "system": settings.PROJECT_NAME, "orders": settings.ORDER_BACKEND}
