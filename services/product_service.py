"""
Сервис продуктов
Продукт создается один раз и больше не изменяется
"""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from decimal import Decimal
from loguru import logger
from models.product import Product
from utils.decorators import log_operation
from utils.exceptions import InvalidArgumentError
from utils.validators import validate_name, validate_price, to_decimal
from typing import Iterable, List, Optional, Union

@log_operation
async def create_product(session: AsyncSession, name: str, price: Union[Decimal, int, str]) -> Product:
    """
    Создает продукт
    
    Raises:
        InvalidArgumentError: Пустое название, цена не указана или отрицательная
    """
    is_valid, error_msg = validate_name(name)
    if not is_valid:
        raise InvalidArgumentError(error_msg)
    
    is_valid, error_msg = validate_price(price)
    if not is_valid:
        raise InvalidArgumentError(error_msg)
    
    product = Product(name=name.strip(), price=to_decimal(price))
    session.add(product)
    await session.commit()
    await session.refresh(product)
    logger.info(f"Создан продукт #{product.id} '{product.name}' ({product.price})")
    return product

async def get_all_products(session: AsyncSession) -> List[Product]:
    result = await session.execute(select(Product).order_by(Product.id))
    return list(result.scalars().all())

async def get_product_by_id(session: AsyncSession, product_id: int) -> Optional[Product]:
    result = await session.execute(select(Product).where(Product.id == product_id))
    return result.scalar_one_or_none()

async def get_products_by_ids(session: AsyncSession, product_ids: Iterable[int]) -> List[Product]:
    ids = set(product_ids)
    if not ids:
        return []
    result = await session.execute(select(Product).where(Product.id.in_(list(ids))))
    return list(result.scalars().all())
