from typing import List, Annotated
from fastapi import APIRouter, Depends, Query, Path, Response, status

from common.core.otel_exporter import trace_span, get_logger
from common.providers.caching.factory import get_cache_provider
from packages.subscriptions.models.domain.subscription import (
    SubscriptionCreateModel,
    SubscriptionUpdateModel,
)
from packages.subscriptions.models.schemas.subscription import (
    SubscriptionCreate,
    SubscriptionUpdate,
    SubscriptionQuery,
    SubscriptionResponse,
    SpendResponse,
)
from packages.subscriptions.repositories.subscription_repository import (
    SubscriptionRepository,
)
from packages.subscriptions.services.subscription_store import SubscriptionStore
from packages.subscriptions.services.spend_aggregator import SpendAggregator

router = APIRouter()
logger = get_logger(__name__)


def get_subscription_store() -> SubscriptionStore:
    return SubscriptionStore(SubscriptionRepository(), get_cache_provider())


def get_spend_aggregator(
    store: SubscriptionStore = Depends(get_subscription_store),
) -> SpendAggregator:
    return SpendAggregator(store)


@router.post("/", response_model=SubscriptionResponse)
@trace_span
async def create_subscription(
    subscription_data: SubscriptionCreate,
    store: SubscriptionStore = Depends(get_subscription_store),
):
    """Create a subscription record."""
    create_model = SubscriptionCreateModel(**subscription_data.model_dump())
    subscription = await store.create(create_model)
    return SubscriptionResponse.model_validate(subscription)


@router.post("/list", response_model=List[SubscriptionResponse])
@trace_span
async def list_subscriptions(
    query: SubscriptionQuery,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    store: SubscriptionStore = Depends(get_subscription_store),
):
    """List subscriptions filtered by user, service and date bounds."""
    subscriptions = await store.list(query.to_filter(), skip=skip, limit=limit)
    return [SubscriptionResponse.model_validate(sub) for sub in subscriptions]


@router.post("/sum-price", response_model=SpendResponse)
@trace_span
async def sum_subscription_prices(
    query: SubscriptionQuery,
    store: SubscriptionStore = Depends(get_subscription_store),
):
    """Plain sum of monthly prices over matching subscriptions."""
    total = await store.sum_prices(query.to_filter())
    return SpendResponse(total_price=total)


@router.post("/sum-price/deduplicated", response_model=SpendResponse)
@trace_span
async def sum_subscription_spend(
    query: SubscriptionQuery,
    aggregator: SpendAggregator = Depends(get_spend_aggregator),
):
    """Total spend, billing each user/service/month at most once."""
    total = await aggregator.sum_deduplicated(query.to_filter())
    return SpendResponse(total_price=total)


@router.get("/{subscriptionId}", response_model=SubscriptionResponse)
@trace_span
async def get_subscription(
    subscription_id: int = Path(alias="subscriptionId"),
    store: SubscriptionStore = Depends(get_subscription_store),
):
    """Get a subscription by ID."""
    subscription = await store.get_by_id(subscription_id)
    return SubscriptionResponse.model_validate(subscription)


@router.put("/{subscriptionId}", response_model=SubscriptionResponse)
@trace_span
async def update_subscription(
    subscription_id: Annotated[int, Path(alias="subscriptionId")],
    subscription_data: SubscriptionUpdate,
    store: SubscriptionStore = Depends(get_subscription_store),
):
    """Replace price and date range of a subscription."""
    update_model = SubscriptionUpdateModel(**subscription_data.model_dump())
    subscription = await store.update(subscription_id, update_model)
    return SubscriptionResponse.model_validate(subscription)


@router.delete("/{subscriptionId}", status_code=status.HTTP_204_NO_CONTENT)
@trace_span
async def delete_subscription(
    subscription_id: int = Path(alias="subscriptionId"),
    store: SubscriptionStore = Depends(get_subscription_store),
):
    """Delete a subscription."""
    await store.delete(subscription_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
