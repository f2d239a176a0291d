"""
Сервис меню
Меню создается вместе со своими позициями и после создания не изменяется
"""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, exists
from decimal import Decimal
from loguru import logger
from models.menu import Menu, MenuProduct
from models.menu_group import MenuGroup
from models.order import OrderLineItem
from services.product_service import get_products_by_ids
from utils.decorators import log_operation
from utils.exceptions import InvalidArgumentError, NotFoundError
from utils.validators import (
    validate_name,
    validate_price,
    validate_line_items,
    validate_menu_price,
    calculate_products_total,
    find_missing_ids,
    to_decimal
)
from typing import List, Dict, Optional, Any, Union

@log_operation
async def create_menu(
    session: AsyncSession,
    name: str,
    price: Union[Decimal, int, str],
    menu_group_id: Optional[int],
    menu_products: Optional[List[Dict[str, Any]]]
) -> Menu:
    """
    Создает меню с позициями продуктов

    Все проверки выполняются до записи: при ошибке в базе ничего не меняется.
    Цены продуктов читаются из базы в момент создания меню и не сохраняются
    в позициях, поэтому позднее изменение цены продукта меню не перепроверяет.

    Args:
        session: Сессия базы данных
        name: Название меню
        price: Цена меню
        menu_group_id: ID группы меню
        menu_products: Позиции [{"product_id": int, "quantity": int}]

    Returns:
        Menu: Созданное меню с загруженными позициями

    Raises:
        InvalidArgumentError: Некорректное название или цена, группа не найдена,
            пустой список позиций, цена больше суммы цен продуктов
        NotFoundError: Продукт из позиции не существует
    """
    is_valid, error_msg = validate_name(name)
    if not is_valid:
        raise InvalidArgumentError(error_msg)

    is_valid, error_msg = validate_price(price)
    if not is_valid:
        raise InvalidArgumentError(error_msg)

    if menu_group_id is None:
        raise InvalidArgumentError("Группа меню не может быть None")
    menu_group_exists = await session.scalar(
        select(exists().where(MenuGroup.id == menu_group_id))
    )
    if not menu_group_exists:
        raise InvalidArgumentError(f"Группа меню с ID {menu_group_id} не найдена")

    is_valid, error_msg = validate_line_items(menu_products, "product_id")
    if not is_valid:
        raise InvalidArgumentError(error_msg)

    requested_ids = [item["product_id"] for item in menu_products]
    products = {product.id: product for product in await get_products_by_ids(session, requested_ids)}
    missing_ids = find_missing_ids(requested_ids, products.keys())
    if missing_ids:
        raise NotFoundError(f"Продукты с ID {missing_ids} не найдены")

    products_total = calculate_products_total(
        (products[item["product_id"]].price, item["quantity"]) for item in menu_products
    )
    is_valid, error_msg = validate_menu_price(price, products_total)
    if not is_valid:
        raise InvalidArgumentError(error_msg)

    menu = Menu(
        name=name.strip(),
        price=to_decimal(price),
        menu_group_id=menu_group_id,
        menu_products=[
            MenuProduct(product_id=item["product_id"], quantity=item["quantity"])
            for item in menu_products
        ]
    )
    session.add(menu)
    await session.flush()
    menu_id = menu.id
    await session.commit()

    logger.info(f"Создано меню #{menu_id} '{menu.name}' ({menu.price}, сумма продуктов {products_total})")
    return await get_menu_by_id(session, menu_id)

async def get_menu_by_id(session: AsyncSession, menu_id: int) -> Optional[Menu]:
    result = await session.execute(
        select(Menu)
        .where(Menu.id == menu_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()

async def get_all_menus(session: AsyncSession, menu_group_id: Optional[int] = None) -> List[Menu]:
    query = select(Menu)
    if menu_group_id is not None:
        query = query.where(Menu.menu_group_id == menu_group_id)
    query = query.order_by(Menu.id)

    result = await session.execute(query)
    return list(result.scalars().all())

@log_operation
async def delete_menu(session: AsyncSession, menu_id: int) -> None:
    """
    Удаляет меню вместе с его позициями

    Raises:
        NotFoundError: Меню не существует
        InvalidArgumentError: Меню уже использовано в заказах
    """
    menu = await get_menu_by_id(session, menu_id)
    if not menu:
        raise NotFoundError(f"Меню с ID {menu_id} не найдено")

    is_ordered = await session.scalar(
        select(exists().where(OrderLineItem.menu_id == menu_id))
    )
    if is_ordered:
        raise InvalidArgumentError(f"Меню с ID {menu_id} используется в заказах")

    for menu_product in list(menu.menu_products):
        await session.delete(menu_product)
    await session.delete(menu)
    await session.commit()
    logger.info(f"Удалено меню #{menu_id}")
