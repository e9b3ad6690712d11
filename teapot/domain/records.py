from sqlalchemy import Column, DateTime, Integer, JSON, Numeric, String
from sqlalchemy.sql import func

from teapot.infrastructure.database import Base

class OrderRecord(Base):
    """Orders kept by the café itself when no order service is configured."""

    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    phone = Column(String(10), index=True)
    address = Column(String)

    # Items are stored exactly as they travel on the wire: a JSON list of
    # {name, price, description, image, category, quantity}.
    items = Column(JSON)

    timestamp = Column(String)  # Display string taken at checkout
    total = Column(Numeric(10, 2))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
