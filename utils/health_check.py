"""
Проверки работоспособности кассы
Вызываются при запуске из main.py
"""
from datetime import datetime
from database import database
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from loguru import logger
from config.settings import settings

async def check_database_connection() -> tuple[bool, str]:
    """
    Выполняет SELECT 1 в новой сессии

    Returns:
        tuple[bool, str]: (доступна ли база, сообщение)
    """
    if database.async_session is None:
        return False, "База данных не инициализирована"

    try:
        async with database.async_session() as session:
            await session.scalar(text("SELECT 1"))
        return True, "База данных доступна"
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"Ошибка подключения к БД: {e}")
        return False, f"Ошибка подключения к БД: {e}"

def get_system_info() -> dict:
    """Сводка конфигурации без строки подключения"""
    return {
        "database_type": "PostgreSQL" if settings.DATABASE_URL.startswith("postgres") else "SQLite",
        "log_level": settings.LOG_LEVEL,
        "strict_order_status_transitions": settings.STRICT_ORDER_STATUS_TRANSITIONS
    }

async def check_system_health() -> dict:
    db_ok, db_message = await check_database_connection()

    return {
        "status": "healthy" if db_ok else "unhealthy",
        "checked_at": datetime.now().isoformat(),
        "database": {"ok": db_ok, "message": db_message},
        "config": get_system_info()
    }
