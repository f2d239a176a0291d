from sqlalchemy import Column, Integer, Boolean, DateTime
from datetime import datetime, timezone
from database.base import Base

class OrderTable(Base):
    __tablename__ = "order_tables"
    
    id = Column(Integer, primary_key=True)
    number_of_guests = Column(Integer, nullable=False, default=0)
    empty = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
