from decimal import Decimal
from sqlalchemy import Numeric, String
from sqlalchemy.types import TypeDecorator

MONEY_SCALE = Decimal("0.01")

class DecimalString(TypeDecorator):
    """Decimal хранится строкой: в SQLite нет точного десятичного типа"""
    impl = String
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return str(Decimal(value).quantize(MONEY_SCALE))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(value)

# Денежные суммы: NUMERIC(19, 2) в PostgreSQL, строка в SQLite
Money = Numeric(19, 2).with_variant(DecimalString(), "sqlite")
