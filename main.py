import asyncio
from loguru import logger
from config.log_config import setup_logging
from config.settings import settings
from database.database import init_db, close_db
from utils.health_check import check_system_health

async def main():
    setup_logging()
    
    logger.info("Инициализация базы данных...")
    await init_db()
    logger.info("✅ База данных инициализирована")
    
    try:
        health = await check_system_health()
        if health["status"] != "healthy":
            logger.error(f"Система неработоспособна: {health['database']['message']}")
            return
        
        logger.info(f"⚙️ Конфигурация: {health['config']}")
        if settings.STRICT_ORDER_STATUS_TRANSITIONS:
            logger.info("Включен строгий порядок статусов заказа")
        logger.info("🚀 Касса готова к работе")
    finally:
        await close_db()

if __name__ == '__main__':
    asyncio.run(main())
