from sqlalchemy import Column, Integer, String, DateTime
from datetime import datetime, timezone
from database.base import Base

class MenuGroup(Base):
    __tablename__ = "menu_groups"
    
    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
