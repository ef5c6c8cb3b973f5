import pytest

from packages.subscriptions.models.domain.subscription import (
    Subscription,
    SubscriptionFilter,
)
from packages.subscriptions.models.domain.year_month import YearMonth
from packages.subscriptions.models.schemas.subscription import SubscriptionQuery

USER = "60601fee-2bf1-4721-ae6f-7636e79a0cba"


def make_subscription(**overrides) -> Subscription:
    fields = {
        "id": 1,
        "service_name": "Yandex Plus",
        "price": 400,
        "user_id": USER,
        "start_date": YearMonth(2025, 7),
        "end_date": YearMonth(2025, 9),
    }
    fields.update(overrides)
    return Subscription(**fields)


class TestBilledMonths:
    def test_closed_range(self):
        sub = make_subscription()
        assert list(sub.billed_months()) == [
            YearMonth(2025, 7),
            YearMonth(2025, 8),
            YearMonth(2025, 9),
        ]

    def test_single_month(self):
        sub = make_subscription(end_date=YearMonth(2025, 7))
        assert list(sub.billed_months()) == [YearMonth(2025, 7)]

    def test_open_ended_without_bound_yields_nothing(self):
        sub = make_subscription(end_date=None)
        assert sub.is_open_ended
        assert list(sub.billed_months()) == []

    def test_open_ended_with_bound(self):
        sub = make_subscription(end_date=None)
        assert list(sub.billed_months(until=YearMonth(2025, 8))) == [
            YearMonth(2025, 7),
            YearMonth(2025, 8),
        ]


class TestSubscriptionFilter:
    def test_empty_filter_matches_everything(self):
        assert SubscriptionFilter().matches(make_subscription())

    @pytest.mark.parametrize(
        "filters,expected",
        [
            (SubscriptionFilter(user_id=USER), True),
            (SubscriptionFilter(user_id="someone-else"), False),
            (SubscriptionFilter(service_name="Yandex Plus"), True),
            (SubscriptionFilter(service_name="yandex plus"), False),
            (SubscriptionFilter(max_start_date=YearMonth(2025, 7)), True),
            (SubscriptionFilter(max_start_date=YearMonth(2025, 6)), False),
            (SubscriptionFilter(min_end_date=YearMonth(2025, 9)), True),
            (SubscriptionFilter(min_end_date=YearMonth(2025, 8)), False),
        ],
    )
    def test_bounds_are_inclusive(self, filters, expected):
        assert filters.matches(make_subscription()) is expected

    def test_open_ended_passes_end_bound(self):
        sub = make_subscription(end_date=None)
        assert SubscriptionFilter(min_end_date=YearMonth(2000, 1)).matches(sub)


class TestSubscriptionQuery:
    def test_blank_strings_mean_no_filter(self):
        query = SubscriptionQuery(service_name="  ", user_id="")
        filters = query.to_filter()
        assert filters.service_name is None
        assert filters.user_id is None

    def test_dates_parse_from_month_strings(self):
        filters = SubscriptionQuery(
            max_start_date="12-2025", min_end_date="01-2026"
        ).to_filter()
        assert filters.max_start_date == YearMonth(2025, 12)
        assert filters.min_end_date == YearMonth(2026, 1)
