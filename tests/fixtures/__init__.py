# Test data and fixtures
from typing import Optional

from packages.subscriptions.models.domain.subscription import SubscriptionCreateModel
from packages.subscriptions.models.domain.year_month import YearMonth

USER_ID = "60601fee-2bf1-4721-ae6f-7636e79a0cba"
OTHER_USER_ID = "7c2a1f3e-9d4b-4e8a-b1c6-0f5e2d3a4b5c"

# Sample subscription request body
SAMPLE_SUBSCRIPTION_DATA = {
    "service_name": "Yandex Plus",
    "price": 400,
    "user_id": USER_ID,
    "start_date": "07-2025",
}


def make_create_model(
    service_name: str = "Yandex Plus",
    price: int = 400,
    user_id: str = USER_ID,
    start: str = "07-2025",
    end: Optional[str] = None,
) -> SubscriptionCreateModel:
    """Build a create model from MM-YYYY strings."""
    return SubscriptionCreateModel(
        service_name=service_name,
        price=price,
        user_id=user_id,
        start_date=YearMonth.parse(start),
        end_date=YearMonth.parse(end) if end else None,
    )
