from datetime import date

from sqlalchemy import Date
from sqlalchemy.types import TypeDecorator

from packages.subscriptions.models.domain.year_month import YearMonth


class YearMonthType(TypeDecorator):
    """Stores a YearMonth as a DATE pinned to the first day of the month."""

    impl = Date
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if isinstance(value, date):
            value = YearMonth.from_date(value)
        return value.to_date()

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return YearMonth.from_date(value)
