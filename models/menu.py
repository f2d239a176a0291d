from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from database.base import Base
from database.types import Money

class Menu(Base):
    __tablename__ = "menus"
    
    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    price = Column(Money, nullable=False)
    menu_group_id = Column(Integer, ForeignKey("menu_groups.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    
    menu_products = relationship(
        "MenuProduct",
        back_populates="menu",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="MenuProduct.seq"
    )

class MenuProduct(Base):
    __tablename__ = "menu_products"
    
    seq = Column(Integer, primary_key=True)
    menu_id = Column(Integer, ForeignKey("menus.id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    quantity = Column(Integer, nullable=False)
    
    menu = relationship("Menu", back_populates="menu_products")
