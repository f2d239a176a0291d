"""
Сервис столов
Управляет занятостью стола и количеством гостей
"""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, exists
from loguru import logger
from models.order import Order, ACTIVE_ORDER_STATUSES
from models.order_table import OrderTable
from utils.decorators import log_operation
from utils.exceptions import InvalidArgumentError, NotFoundError
from utils.validators import (
    validate_number_of_guests,
    validate_table_not_empty,
    validate_no_active_orders
)
from typing import List, Optional

@log_operation
async def create_table(session: AsyncSession, number_of_guests: int = 0, empty: bool = True) -> OrderTable:
    is_valid, error_msg = validate_number_of_guests(number_of_guests)
    if not is_valid:
        raise InvalidArgumentError(error_msg)

    table = OrderTable(number_of_guests=number_of_guests, empty=bool(empty))
    session.add(table)
    await session.commit()
    await session.refresh(table)
    logger.info(f"Создан стол #{table.id} (гостей: {table.number_of_guests}, пустой: {table.empty})")
    return table

async def get_all_tables(session: AsyncSession) -> List[OrderTable]:
    result = await session.execute(select(OrderTable).order_by(OrderTable.id))
    return list(result.scalars().all())

async def get_table_by_id(session: AsyncSession, order_table_id: int) -> Optional[OrderTable]:
    result = await session.execute(select(OrderTable).where(OrderTable.id == order_table_id))
    return result.scalar_one_or_none()

async def has_active_orders(session: AsyncSession, order_table_id: int) -> bool:
    """Есть ли у стола заказы в статусе COOKING или MEAL"""
    return bool(await session.scalar(
        select(exists().where(
            Order.order_table_id == order_table_id,
            Order.order_status.in_(ACTIVE_ORDER_STATUSES)
        ))
    ))

@log_operation
async def change_empty(session: AsyncSession, order_table_id: int, empty: bool) -> OrderTable:
    """
    Меняет признак пустого стола

    Пока у стола есть незавершенные заказы, признак не меняется. Освобожденный
    стол теряет гостей: количество сбрасывается в 0.

    Raises:
        NotFoundError: Стол не существует
        InvalidArgumentError: У стола есть заказы в статусе COOKING или MEAL
    """
    table = await get_table_by_id(session, order_table_id)
    if not table:
        raise NotFoundError(f"Стол с ID {order_table_id} не найден")

    is_valid, error_msg = validate_no_active_orders(await has_active_orders(session, order_table_id))
    if not is_valid:
        raise InvalidArgumentError(error_msg)

    table.empty = bool(empty)
    if table.empty:
        table.number_of_guests = 0
    await session.commit()
    await session.refresh(table)
    logger.info(f"Стол #{table.id}: пустой = {table.empty}")
    return table

@log_operation
async def change_number_of_guests(session: AsyncSession, order_table_id: int, number_of_guests: int) -> OrderTable:
    """
    Меняет количество гостей за занятым столом

    Raises:
        InvalidArgumentError: Отрицательное количество гостей или стол пустой
        NotFoundError: Стол не существует
    """
    is_valid, error_msg = validate_number_of_guests(number_of_guests)
    if not is_valid:
        raise InvalidArgumentError(error_msg)

    table = await get_table_by_id(session, order_table_id)
    if not table:
        raise NotFoundError(f"Стол с ID {order_table_id} не найден")

    is_valid, error_msg = validate_table_not_empty(table.empty)
    if not is_valid:
        raise InvalidArgumentError(error_msg)

    table.number_of_guests = number_of_guests
    await session.commit()
    await session.refresh(table)
    logger.info(f"Стол #{table.id}: гостей = {table.number_of_guests}")
    return table
