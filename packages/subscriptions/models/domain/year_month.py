"""
Calendar month value type.

Billing and deduplication work on whole months, so dates are represented as
(year, month) pairs. There is no day component to lose or compare.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterator

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

MONTH_FORMAT = "%m-%Y"


@dataclass(frozen=True, order=True)
class YearMonth:
    year: int
    month: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month must be in 1..12, got {self.month}")
        if not 1 <= self.year <= 9999:
            raise ValueError(f"Year must be in 1..9999, got {self.year}")

    @classmethod
    def from_date(cls, value: date) -> "YearMonth":
        """Truncate a date or datetime to its calendar month."""
        return cls(value.year, value.month)

    @classmethod
    def parse(cls, value: str) -> "YearMonth":
        """Parse an ``MM-YYYY`` string."""
        try:
            parsed = datetime.strptime(value.strip(), MONTH_FORMAT)
        except ValueError as e:
            raise ValueError(f"Expected a month as MM-YYYY, got {value!r}") from e
        return cls(parsed.year, parsed.month)

    def format(self) -> str:
        return f"{self.month:02d}-{self.year:04d}"

    def to_date(self) -> date:
        """First day of the month."""
        return date(self.year, self.month, 1)

    def next(self) -> "YearMonth":
        if self.month == 12:
            return YearMonth(self.year + 1, 1)
        return YearMonth(self.year, self.month + 1)

    def months_through(self, end: "YearMonth") -> Iterator["YearMonth"]:
        """Iterate from this month through ``end``, both inclusive."""
        if end < self:
            return
        current = self
        while True:
            yield current
            # Stop before stepping past end; 12-9999 has no successor
            if current == end:
                return
            current = current.next()

    def __str__(self) -> str:
        return self.format()

    @classmethod
    def coerce(cls, value: Any) -> "YearMonth":
        if isinstance(value, YearMonth):
            return value
        # datetime is a date subclass
        if isinstance(value, date):
            return cls.from_date(value)
        if isinstance(value, str):
            return cls.parse(value)
        raise ValueError(f"Cannot interpret {value!r} as a calendar month")

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        # Accepts YearMonth, date/datetime and MM-YYYY; dumps MM-YYYY in JSON mode
        # and the YearMonth itself in python mode
        return core_schema.no_info_plain_validator_function(
            cls.coerce,
            serialization=core_schema.plain_serializer_function_ser_schema(
                cls._serialize, info_arg=True
            ),
        )

    @staticmethod
    def _serialize(value: "YearMonth", info: core_schema.SerializationInfo) -> Any:
        if info.mode_is_json():
            return value.format()
        return value

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return {
            "type": "string",
            "pattern": r"^(0[1-9]|1[0-2])-\d{4}$",
            "example": "07-2025",
        }
