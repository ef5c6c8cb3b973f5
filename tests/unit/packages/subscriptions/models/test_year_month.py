from datetime import date, datetime

import pytest
from pydantic import BaseModel, ValidationError

from packages.subscriptions.models.domain.subscription import SubscriptionCreateModel
from packages.subscriptions.models.domain.year_month import YearMonth


class Holder(BaseModel):
    month: YearMonth


class TestYearMonth:
    def test_parse_and_format(self):
        ym = YearMonth.parse("07-2025")
        assert ym == YearMonth(2025, 7)
        assert ym.format() == "07-2025"
        assert str(ym) == "07-2025"

    def test_parse_pads_single_digit_month(self):
        assert YearMonth.parse("7-2025") == YearMonth(2025, 7)

    @pytest.mark.parametrize("value", ["13-2025", "00-2025", "2025-07", "July", ""])
    def test_parse_rejects_malformed(self, value):
        with pytest.raises(ValueError):
            YearMonth.parse(value)

    def test_constructor_rejects_bad_month(self):
        with pytest.raises(ValueError):
            YearMonth(2025, 13)

    def test_ordering_is_chronological(self):
        assert YearMonth(2024, 12) < YearMonth(2025, 1)
        assert YearMonth(2025, 2) > YearMonth(2025, 1)
        assert max(YearMonth(2025, 3), YearMonth(2024, 11)) == YearMonth(2025, 3)

    def test_next_rolls_over_year(self):
        assert YearMonth(2025, 11).next() == YearMonth(2025, 12)
        assert YearMonth(2025, 12).next() == YearMonth(2026, 1)

    def test_months_through_is_inclusive(self):
        months = list(YearMonth(2024, 11).months_through(YearMonth(2025, 2)))
        assert months == [
            YearMonth(2024, 11),
            YearMonth(2024, 12),
            YearMonth(2025, 1),
            YearMonth(2025, 2),
        ]

    def test_months_through_empty_when_end_before_start(self):
        assert list(YearMonth(2025, 3).months_through(YearMonth(2025, 2))) == []

    def test_months_through_stops_at_last_representable_month(self):
        months = list(YearMonth(9999, 11).months_through(YearMonth(9999, 12)))
        assert months == [YearMonth(9999, 11), YearMonth(9999, 12)]

    def test_months_through_single_month(self):
        assert list(YearMonth(2025, 7).months_through(YearMonth(2025, 7))) == [
            YearMonth(2025, 7)
        ]

    def test_date_conversions(self):
        assert YearMonth.from_date(date(2025, 7, 19)) == YearMonth(2025, 7)
        assert YearMonth.from_date(datetime(2025, 7, 31, 23, 59)) == YearMonth(2025, 7)
        assert YearMonth(2025, 7).to_date() == date(2025, 7, 1)

    def test_hashable(self):
        assert len({YearMonth(2025, 1), YearMonth(2025, 1), YearMonth(2025, 2)}) == 2


class TestYearMonthPydantic:
    def test_validates_from_string(self):
        assert Holder(month="03-2025").month == YearMonth(2025, 3)

    def test_validates_from_date(self):
        assert Holder(month=date(2025, 3, 15)).month == YearMonth(2025, 3)

    def test_invalid_string_raises_validation_error(self):
        with pytest.raises(ValidationError):
            Holder(month="2025-03-01")

    def test_json_dump_uses_month_format(self):
        holder = Holder(month=YearMonth(2025, 3))
        assert holder.model_dump(mode="json") == {"month": "03-2025"}
        assert holder.model_dump_json() == '{"month":"03-2025"}'

    def test_python_dump_keeps_value_type(self):
        assert Holder(month="03-2025").model_dump()["month"] == YearMonth(2025, 3)

    def test_nested_model_dump_keeps_value_type(self):
        create_model = SubscriptionCreateModel(
            service_name="X", price=100, user_id="u1", start_date=YearMonth(2025, 1)
        )
        dumped = create_model.model_dump()
        assert dumped["start_date"] == YearMonth(2025, 1)
        assert dumped["end_date"] is None
        assert create_model.model_dump(mode="json")["start_date"] == "01-2025"

    def test_json_schema_is_string(self):
        schema = Holder.model_json_schema()
        assert schema["properties"]["month"]["type"] == "string"
