from decimal import Decimal

from sqlalchemy import BigInteger, Numeric
from sqlalchemy.types import TypeDecorator

CENT = Decimal("0.01")


class Money(TypeDecorator):
    """NUMERIC(18,2) amounts as ``Decimal``.

    pysqlite has no decimal type and would round-trip through float, so on
    SQLite the value is kept as an integer number of cents instead.
    """

    impl = Numeric
    cache_ok = True

    def __init__(self):
        super().__init__(precision=18, scale=2, asdecimal=True)

    def load_dialect_impl(self, dialect):
        if dialect.name == "sqlite":
            return dialect.type_descriptor(BigInteger())
        return super().load_dialect_impl(dialect)

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        d = Decimal(value).quantize(CENT)
        if dialect.name == "sqlite":
            return int(d.scaleb(2))
        return d

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if dialect.name == "sqlite":
            return Decimal(int(value)).scaleb(-2)
        return Decimal(value).quantize(CENT)
