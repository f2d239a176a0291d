import os
from dotenv import load_dotenv

load_dotenv()

def _get_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")

class Settings:
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./kitchenpos.db")
    DB_ECHO: bool = _get_bool("DB_ECHO")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_DIR: str = os.getenv("LOG_DIR", "logs")
    STRICT_ORDER_STATUS_TRANSITIONS: bool = _get_bool("STRICT_ORDER_STATUS_TRANSITIONS")

settings = Settings()
