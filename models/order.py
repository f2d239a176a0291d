from sqlalchemy import Column, Integer, DateTime, ForeignKey, Enum, Index
from sqlalchemy.orm import relationship
import enum
from database.base import Base

class OrderStatus(enum.Enum):
    COOKING = "COOKING"
    MEAL = "MEAL"
    COMPLETION = "COMPLETION"

# Заказы в этих статусах не дают освободить стол
ACTIVE_ORDER_STATUSES = (OrderStatus.COOKING, OrderStatus.MEAL)

class Order(Base):
    __tablename__ = "orders"
    
    id = Column(Integer, primary_key=True)
    order_table_id = Column(Integer, ForeignKey("order_tables.id"), nullable=False, index=True)
    order_status = Column(Enum(OrderStatus), nullable=False, default=OrderStatus.COOKING, index=True)
    ordered_time = Column(DateTime, nullable=False)
    
    order_line_items = relationship(
        "OrderLineItem",
        back_populates="order",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="OrderLineItem.seq"
    )
    
    __table_args__ = (
        Index('idx_order_table_status', 'order_table_id', 'order_status'),
    )

class OrderLineItem(Base):
    __tablename__ = "order_line_items"
    
    seq = Column(Integer, primary_key=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    menu_id = Column(Integer, ForeignKey("menus.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    
    order = relationship("Order", back_populates="order_line_items")
