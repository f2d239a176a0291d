"""
Сервис для работы с заказами
Обеспечивает создание заказа за столом, получение заказов и смену статуса
"""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from datetime import datetime
from loguru import logger
from config.settings import settings
from models.menu import Menu
from models.order import Order, OrderLineItem, OrderStatus
from services.table_service import get_table_by_id
from utils.decorators import log_operation
from utils.exceptions import InvalidArgumentError, NotFoundError, IllegalStateError
from utils.validators import (
    validate_table_not_empty,
    validate_line_items,
    validate_requested_menus,
    parse_order_status,
    validate_order_not_completed,
    validate_status_transition
)
from typing import List, Dict, Optional, Any, Union

@log_operation
async def create_order(
    session: AsyncSession,
    order_table_id: int,
    order_line_items: Optional[List[Dict[str, Any]]]
) -> Order:
    """
    Создает заказ за столом

    Args:
        session: Сессия базы данных
        order_table_id: ID стола
        order_line_items: Позиции заказа [{"menu_id": int, "quantity": int}]

    Returns:
        Order: Созданный заказ в статусе COOKING

    Raises:
        NotFoundError: Стол не существует
        InvalidArgumentError: Стол пустой, позиций нет, меню не найдено или повторяется
    """
    table = await get_table_by_id(session, order_table_id)
    if not table:
        raise NotFoundError(f"Стол с ID {order_table_id} не найден")

    is_valid, error_msg = validate_table_not_empty(table.empty)
    if not is_valid:
        raise InvalidArgumentError(error_msg)

    is_valid, error_msg = validate_line_items(order_line_items, "menu_id")
    if not is_valid:
        raise InvalidArgumentError(error_msg)

    # Одним запросом: повторяющиеся и несуществующие меню уменьшают счетчик
    menu_ids = [item["menu_id"] for item in order_line_items]
    found_count = await session.scalar(
        select(func.count(Menu.id)).where(Menu.id.in_(list(set(menu_ids))))
    )
    is_valid, error_msg = validate_requested_menus(len(menu_ids), found_count or 0)
    if not is_valid:
        raise InvalidArgumentError(error_msg)

    order = Order(
        order_table_id=order_table_id,
        order_status=OrderStatus.COOKING,
        ordered_time=datetime.now(),
        order_line_items=[
            OrderLineItem(menu_id=item["menu_id"], quantity=item["quantity"])
            for item in order_line_items
        ]
    )
    session.add(order)
    await session.flush()
    order_id = order.id
    await session.commit()

    logger.info(f"Создан заказ #{order_id} за столом #{order_table_id} ({len(menu_ids)} поз.)")
    return await get_order_by_id(session, order_id)

async def get_order_by_id(session: AsyncSession, order_id: int) -> Optional[Order]:
    result = await session.execute(
        select(Order)
        .where(Order.id == order_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()

async def get_all_orders(
    session: AsyncSession,
    order_table_id: Optional[int] = None,
    status: Optional[OrderStatus] = None
) -> List[Order]:
    """
    Получает все заказы с опциональными фильтрами

    Returns:
        list[Order]: Список заказов, новые первыми
    """
    query = select(Order)
    if order_table_id is not None:
        query = query.where(Order.order_table_id == order_table_id)
    if status:
        query = query.where(Order.order_status == status)
    query = query.order_by(Order.ordered_time.desc(), Order.id.desc())

    result = await session.execute(query)
    return list(result.scalars().all())

@log_operation
async def change_order_status(
    session: AsyncSession,
    order_id: int,
    order_status: Union[OrderStatus, str]
) -> Order:
    """
    Меняет статус заказа

    Из COMPLETION выйти нельзя. Остальные переходы разрешены, если не включен
    STRICT_ORDER_STATUS_TRANSITIONS: тогда допускается только следующий шаг
    COOKING -> MEAL -> COMPLETION. Стол при завершении заказа не освобождается.

    Raises:
        NotFoundError: Заказ не существует
        IllegalStateError: Заказ завершен или переход запрещен строгим порядком
        InvalidArgumentError: Неизвестный статус
    """
    order = await get_order_by_id(session, order_id)
    if not order:
        raise NotFoundError(f"Заказ с ID {order_id} не найден")

    is_valid, error_msg = validate_order_not_completed(order.order_status)
    if not is_valid:
        raise IllegalStateError(error_msg)

    new_status = parse_order_status(order_status)
    if new_status is None:
        raise InvalidArgumentError(f"Неизвестный статус заказа: {order_status!r}")

    if settings.STRICT_ORDER_STATUS_TRANSITIONS:
        is_valid, error_msg = validate_status_transition(order.order_status, new_status)
        if not is_valid:
            raise IllegalStateError(error_msg)

    old_status = order.order_status
    order.order_status = new_status
    await session.commit()

    logger.info(f"Заказ #{order_id}: {old_status.name} -> {new_status.name}")
    return await get_order_by_id(session, order_id)
