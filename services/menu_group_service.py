from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from loguru import logger
from models.menu_group import MenuGroup
from utils.decorators import log_operation
from utils.exceptions import InvalidArgumentError
from utils.validators import validate_name
from typing import List, Optional

@log_operation
async def create_menu_group(session: AsyncSession, name: str) -> MenuGroup:
    is_valid, error_msg = validate_name(name)
    if not is_valid:
        raise InvalidArgumentError(error_msg)
    
    menu_group = MenuGroup(name=name.strip())
    session.add(menu_group)
    await session.commit()
    await session.refresh(menu_group)
    logger.info(f"Создана группа меню #{menu_group.id} '{menu_group.name}'")
    return menu_group

async def get_all_menu_groups(session: AsyncSession) -> List[MenuGroup]:
    result = await session.execute(select(MenuGroup).order_by(MenuGroup.id))
    return list(result.scalars().all())

async def get_menu_group_by_id(session: AsyncSession, menu_group_id: int) -> Optional[MenuGroup]:
    result = await session.execute(select(MenuGroup).where(MenuGroup.id == menu_group_id))
    return result.scalar_one_or_none()
