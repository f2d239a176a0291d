import sys
from pathlib import Path
from loguru import logger
from config.settings import settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}"

def setup_logging() -> None:
    """Консоль на уровне LOG_LEVEL и ежедневный файл логов уровня DEBUG"""
    log_dir = Path(settings.LOG_DIR)
    log_dir.mkdir(exist_ok=True)

    logger.remove()
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level=settings.LOG_LEVEL)
    logger.add(
        log_dir / "kitchenpos_{time:YYYY-MM-DD}.log",
        rotation="00:00",
        retention="30 days",
        format=FILE_FORMAT,
        level="DEBUG"
    )
