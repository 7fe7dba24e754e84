from sqlalchemy import String
from sqlalchemy.orm import declarative_base
from sqlalchemy.types import TypeDecorator

Base = declarative_base()


class Amount(TypeDecorator):
    """Signed integer of arbitrary width stored as decimal text.

    SQLite INTEGER stops at 64 bits and NUMERIC goes through floats, so
    monetary values round-trip through their string form instead.
    """

    impl = String(48)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return str(int(value))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return int(value)
