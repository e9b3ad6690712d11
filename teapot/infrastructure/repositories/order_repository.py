import logging
from typing import List

from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError

from teapot.domain.exceptions import OrderServiceError
from teapot.domain.models import DeliveryInfo, Order, OrderItem
from teapot.domain.records import OrderRecord
from teapot.infrastructure.database import SessionLocal
from teapot.interfaces.IOrderGateway import IOrderGateway

logger = logging.getLogger(__name__)

class SqlOrderRepository(IOrderGateway):
    """Local order store, used when ORDER_BACKEND is "local". Orders are removed by id."""

    def __init__(self, session_factory=SessionLocal, limit: int = 50):
        self.session_factory = session_factory
        self.limit = limit

    async def submit_order(self, order: Order) -> Order:
        session = self.session_factory()
        try:
            record = OrderRecord(
                phone=order.delivery_info.phone,
                address=order.delivery_info.address,
                items=[item.model_dump() for item in order.items],
                timestamp=order.timestamp,
                total=order.total,
            )
            session.add(record)
            session.commit()
            return order.model_copy(update={"id": str(record.id)})
        except SQLAlchemyError as e:
            logger.error(f"❌ DB Error: {e}")
            session.rollback()
            raise OrderServiceError("Could not save the order") from e
        finally:
            session.close()

    async def list_orders(self) -> List[Order]:
        """
        Retrieves the latest orders from the database.
        Ordered by created_at DESC (Newest first).
        """
        session = self.session_factory()
        try:
            records = (
                session.query(OrderRecord)
                .order_by(desc(OrderRecord.created_at), desc(OrderRecord.id))
                .limit(self.limit)
                .all()
            )
            return [self._to_order(record) for record in records]
        except SQLAlchemyError as e:
            logger.error(f"❌ DB Read Error: {e}")
            raise OrderServiceError("Could not load orders") from e
        finally:
            session.close()

    async def remove_order(self, order: Order) -> None:
        if order.id is None:
            raise OrderServiceError("Order has no id to remove it by")

        session = self.session_factory()
        try:
            deleted = session.query(OrderRecord).filter(OrderRecord.id == int(order.id)).delete()
            session.commit()
        except (SQLAlchemyError, ValueError) as e:
            logger.error(f"❌ DB Delete Error: {e}")
            session.rollback()
            raise OrderServiceError("Could not remove the order") from e
        finally:
            session.close()

        if not deleted:
            raise OrderServiceError(f"Order {order.id} not found")

    def _to_order(self, record: OrderRecord) -> Order:
        return Order(
            id=str(record.id),
            items=[OrderItem(**item) for item in record.items or []],
            timestamp=record.timestamp,
            total=record.total,
            delivery_info=DeliveryInfo(address=record.address, phone=record.phone),
        )
