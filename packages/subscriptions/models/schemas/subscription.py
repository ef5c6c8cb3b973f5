from typing import Optional
from pydantic import BaseModel, ConfigDict, field_validator

from packages.subscriptions.models.domain.subscription import SubscriptionFilter
from packages.subscriptions.models.domain.year_month import YearMonth


class SubscriptionCreate(BaseModel):
    service_name: str
    price: int
    user_id: str
    start_date: YearMonth
    end_date: Optional[YearMonth] = None


class SubscriptionUpdate(BaseModel):
    price: int
    start_date: YearMonth
    end_date: Optional[YearMonth] = None


class SubscriptionQuery(BaseModel):
    """Filter body for list and sum endpoints. Dates are MM-YYYY."""

    service_name: Optional[str] = None
    user_id: Optional[str] = None
    max_start_date: Optional[YearMonth] = None
    min_end_date: Optional[YearMonth] = None

    @field_validator("service_name", "user_id", mode="before")
    @classmethod
    def blank_means_any(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def to_filter(self) -> SubscriptionFilter:
        return SubscriptionFilter(**self.model_dump())


class SubscriptionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    service_name: str
    price: int
    user_id: str
    start_date: YearMonth
    end_date: Optional[YearMonth] = None


class SpendResponse(BaseModel):
    total_price: int
