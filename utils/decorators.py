from functools import wraps
from typing import Callable, Awaitable, Any
from loguru import logger
from utils.exceptions import KitchenPosError

def log_operation(func: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[Any]]:
    """
    Логирует отклоненные и упавшие вызовы сервисной операции.
    Исключение всегда пробрасывается дальше без изменений.
    """
    @wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except KitchenPosError as e:
            logger.warning(f"{func.__name__} отклонен: {type(e).__name__}: {e}")
            raise
        except Exception as e:
            logger.exception(f"Ошибка в {func.__name__}: {e}")
            raise
    
    return wrapper
