from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool, AsyncAdaptedQueuePool
from config.settings import settings
from database.base import Base
from loguru import logger
import models  # noqa: F401  регистрирует все таблицы в Base.metadata

engine = None
async_session = None

def build_database_url(database_url: str) -> str:
    """Приводит DATABASE_URL к асинхронному драйверу (aiosqlite / asyncpg)"""
    if database_url.startswith("sqlite:///"):
        return database_url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    if database_url.startswith("postgres://"):
        return database_url.replace("postgres://", "postgresql+asyncpg://", 1)
    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return database_url

def create_engine_for_url(database_url: str):
    """
    Создает асинхронный движок под тип базы данных
    Поддерживает SQLite (для разработки и тестов) и PostgreSQL (для продакшена)
    """
    if database_url.startswith("sqlite+aiosqlite"):
        logger.info("Используется SQLite база данных (локальная разработка)")
        return create_async_engine(
            database_url,
            echo=settings.DB_ECHO,
            poolclass=NullPool,  # SQLite не поддерживает пулы
            connect_args={"check_same_thread": False}
        )
    elif database_url.startswith("postgresql+asyncpg"):
        logger.info("Используется PostgreSQL база данных (продакшен)")
        return create_async_engine(
            database_url,
            echo=settings.DB_ECHO,
            poolclass=AsyncAdaptedQueuePool,
            pool_size=5,
            max_overflow=10,
            pool_pre_ping=True,  # Проверка соединения перед использованием
            pool_recycle=3600,
        )
    else:
        logger.warning(f"Неизвестный тип базы данных: {database_url}. Используются стандартные настройки.")
        return create_async_engine(database_url, echo=settings.DB_ECHO)

async def init_db():
    """Инициализация подключения к базе данных"""
    global engine, async_session

    engine = create_engine_for_url(build_database_url(settings.DATABASE_URL))
    async_session =async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("База данных инициализирована успешно")
    except Exception as e:
        logger.error(f"Ошибка при инициализации базы данных: {e}")
        raise

async def close_db():
    global engine, async_session
    
    if engine is not None:
        await engine.dispose()
        logger.info("Соединения с базой данных закрыты")
    engine = None
    async_session = None

async def get_session():
    if async_session is None:
        logger.error("База данных не инициализирована! Вызовите init_db() перед использованием.")
        raise RuntimeError("База данных не инициализирована. Вызовите init_db() перед использованием.")
    
    async with async_session() as session:
        try:
            yield session
        except Exception as e:
            await session.rollback()
            logger.error(f"Ошибка в сессии базы данных: {e}")
            raise
