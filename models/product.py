from sqlalchemy import Column, Integer, String, DateTime
from datetime import datetime, timezone
from database.base import Base
from database.types import Money

class Product(Base):
    __tablename__ = "products"
    
    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    price = Column(Money, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
