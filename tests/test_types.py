import pytest
from decimal import Decimal
from sqlalchemy.dialects import sqlite, postgresql
from database.types import DecimalString, Money

class TestDecimalString:
    def test_bind_keeps_all_digits(self):
        column_type = DecimalString()
        assert column_type.process_bind_param(Decimal("9007199254740993"), None) == "9007199254740993.00"
        assert column_type.process_bind_param(Decimal("0.1"), None) == "0.10"

    def test_result_is_decimal(self):
        column_type = DecimalString()
        assert column_type.process_result_value("9007199254740993.00", None) == Decimal("9007199254740993.00")

    def test_none_passes_through(self):
        column_type = DecimalString()
        assert column_type.process_bind_param(None, None) is None
        assert column_type.process_result_value(None, None) is None

class TestMoney:
    @pytest.mark.parametrize("dialect,expected", [
        (sqlite.dialect(), "VARCHAR"),
        (postgresql.dialect(), "NUMERIC(19, 2)"),
    ])
    def test_column_type_per_dialect(self, dialect, expected):
        assert Money.compile(dialect=dialect) == expected
