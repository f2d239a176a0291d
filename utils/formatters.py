from datetime import datetime
from typing import Any, Dict, List
from models.menu import Menu, MenuProduct
from models.menu_group import MenuGroup
from models.order import Order, OrderLineItem
from models.order_table import OrderTable
from models.product import Product

def format_product(product: Product) -> Dict[str, Any]:
    return {"id": product.id, "name": product.name, "price": product.price}

def format_menu_group(menu_group: MenuGroup) -> Dict[str, Any]:
    return {"id": menu_group.id, "name": menu_group.name}

def format_menu_product(menu_product: MenuProduct) -> Dict[str, Any]:
    return {
        "seq": menu_product.seq,
        "menu_id": menu_product.menu_id,
        "product_id": menu_product.product_id,
        "quantity": menu_product.quantity
    }

def format_menu(menu: Menu) -> Dict[str, Any]:
    """Меню с позициями; цена остается Decimal"""
    return {
        "id": menu.id,
        "name": menu.name,
        "price": menu.price,
        "menu_group_id": menu.menu_group_id,
        "menu_products": [format_menu_product(item) for item in menu.menu_products]
    }

def format_order_line_item(item: OrderLineItem) -> Dict[str, Any]:
    return {
        "seq": item.seq,
        "order_id": item.order_id,
        "menu_id": item.menu_id,
        "quantity": item.quantity
    }

def format_order(order: Order) -> Dict[str, Any]:
    """Заказ с позициями: статус по имени, время в ISO-8601"""
    return {
        "id": order.id,
        "order_table_id": order.order_table_id,
        "order_status": order.order_status.name,
        "ordered_time": format_datetime(order.ordered_time),
        "order_line_items": [format_order_line_item(item) for item in order.order_line_items]
    }

def format_orders(orders: List[Order]) -> List[Dict[str, Any]]:
    return [format_order(order) for order in orders]

def format_table(table: OrderTable) -> Dict[str, Any]:
    return {
        "id": table.id,
        "number_of_guests": table.number_of_guests,
        "empty": table.empty
    }

def format_datetime(dt: datetime) -> str:
    return dt.isoformat()
