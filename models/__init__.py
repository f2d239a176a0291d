from .menu_group import MenuGroup
from .product import Product
from .menu import Menu, MenuProduct
from .order_table import OrderTable
from .order import Order, OrderLineItem, OrderStatus, ACTIVE_ORDER_STATUSES

__all__ = [
    "MenuGroup",
    "Product",
    "Menu", "MenuProduct",
    "OrderTable",
    "Order", "OrderLineItem", "OrderStatus", "ACTIVE_ORDER_STATUSES"
]
