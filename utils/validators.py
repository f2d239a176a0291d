from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, List, Optional, Sequence, Tuple
from models.order import OrderStatus

# Допустимые переходы при строгой проверке статусов
NEXT_ORDER_STATUS = {
    OrderStatus.COOKING: OrderStatus.MEAL,
    OrderStatus.MEAL: OrderStatus.COMPLETION,
}

def to_decimal(value: Any) -> Optional[Decimal]:
    """Переводит цену в Decimal без потери точности; None если значение не число"""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value
    try:
        # float через str, чтобы не тащить двоичную погрешность
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None

def validate_name(name: Optional[str]) -> Tuple[bool, str]:
    if name is None or not str(name).strip():
        return False, "Название не может быть пустым"
    return True, ""

def validate_price(price: Any) -> Tuple[bool, str]:
    value = to_decimal(price)
    if value is None:
        return False, "Цена должна быть указана числом"
    if not value.is_finite():
        return False, "Цена должна быть конечным числом"
    if value < 0:
        return False, "Цена не может быть отрицательной"
    return True, ""

def validate_quantity(quantity: Any) -> Tuple[bool, str]:
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        return False, "Количество должно быть целым числом"
    if quantity < 0:
        return False, "Количество не может быть отрицательным"
    return True, ""

def validate_number_of_guests(number_of_guests: Any) -> Tuple[bool, str]:
    if isinstance(number_of_guests, bool) or not isinstance(number_of_guests, int):
        return False, "Количество гостей должно быть целым числом"
    if number_of_guests < 0:
        return False, "Количество гостей не может быть отрицательным"
    return True, ""

def validate_line_items(items: Optional[Sequence[dict]], id_key: str) -> Tuple[bool, str]:
    """
    Проверяет позиции меню или заказа: список не пустой, у каждой позиции
    есть идентификатор и корректное количество

    Args:
        items: Позиции вида [{id_key: int, "quantity": int}]
        id_key: Имя ключа идентификатора ("product_id" или "menu_id")
    """
    if items is None:
        return False, "Список позиций не может быть None"
    if len(items) == 0:
        return False, "Список позиций не может быть пустым"

    for item in items:
        if not isinstance(item, dict):
            return False, "Позиция должна быть словарем"
        if item.get(id_key) is None:
            return False, f"У позиции не указан {id_key}"
        is_valid, error_msg = validate_quantity(item.get("quantity"))
        if not is_valid:
            return False, error_msg
    return True, ""

def calculate_products_total(lines: Iterable[Tuple[Decimal, int]]) -> Decimal:
    """Сумма цен продуктов с учетом количества, точная арифметика Decimal"""
    total = Decimal("0")
    for price, quantity in lines:
        total += to_decimal(price) * quantity
    return total

def validate_menu_price(price: Any, products_total: Decimal) -> Tuple[bool, str]:
    """Цена меню не может превышать сумму цен входящих в него продуктов"""
    if to_decimal(price) > products_total:
        return False, f"Цена меню {price} больше суммы цен продуктов {products_total}"
    return True, ""

def validate_requested_menus(requested_count: int, found_count: int) -> Tuple[bool, str]:
    """Число найденных различных меню должно совпадать с числом позиций заказа"""
    if found_count < requested_count:
        return False, "Заказ содержит несуществующие или повторяющиеся меню"
    return True, ""

def validate_table_not_empty(empty: bool) -> Tuple[bool, str]:
    if empty:
        return False, "Нельзя выполнить операцию для пустого стола"
    return True, ""

def validate_no_active_orders(has_active_orders: bool) -> Tuple[bool, str]:
    if has_active_orders:
        return False, "У стола есть заказы в статусе COOKING или MEAL"
    return True, ""

def parse_order_status(value: Any) -> Optional[OrderStatus]:
    """OrderStatus по члену перечисления или его имени; None если статус неизвестен"""
    if isinstance(value, OrderStatus):
        return value
    if isinstance(value, str):
        try:
            return OrderStatus[value.strip().upper()]
        except KeyError:
            return None
    return None

def validate_order_not_completed(current: OrderStatus) -> Tuple[bool, str]:
    if current == OrderStatus.COMPLETION:
        return False, "Статус завершенного заказа изменить нельзя"
    return True, ""

def validate_status_transition(current: OrderStatus, target: OrderStatus) -> Tuple[bool, str]:
    """Строгий порядок COOKING -> MEAL -> COMPLETION, без пропусков и возвратов"""
    if NEXT_ORDER_STATUS.get(current) != target:
        return False, f"Переход {current.name} -> {target.name} не допускается"
    return True, ""

def find_missing_ids(requested_ids: Iterable[int], found_ids: Iterable[int]) -> List[int]:
    found = set(found_ids)
    return sorted({item_id for item_id in requested_ids if item_id not in found})
