from abc import ABC, abstractmethod
from typing import List, Optional

from packages.subscriptions.models.domain.subscription import (
    Subscription,
    SubscriptionCreateModel,
    SubscriptionUpdateModel,
    SubscriptionFilter,
)


class SubscriptionRepositoryInterface(ABC):
    """Durable record store for subscriptions."""

    @abstractmethod
    async def get(self, id: int) -> Optional[Subscription]:
        """
        Get a subscription by ID.

        Returns:
            The subscription if it exists, None otherwise
        """
        pass

    @abstractmethod
    async def list(
        self, filters: SubscriptionFilter, skip: int = 0, limit: Optional[int] = None
    ) -> List[Subscription]:
        """
        List subscriptions matching ``filters``, ordered by ID.

        Args:
            filters: Filter to apply (see SubscriptionFilter.matches)
            skip: Number of matches to skip
            limit: Maximum number of matches to return, None for all
        """
        pass

    @abstractmethod
    async def sum_prices(self, filters: SubscriptionFilter) -> int:
        """
        Sum ``price`` over all matching subscriptions.

        Returns:
            The total, 0 when nothing matches
        """
        pass

    @abstractmethod
    async def create(self, create_model: SubscriptionCreateModel) -> Subscription:
        """Persist a new subscription and return it with its assigned ID."""
        pass

    @abstractmethod
    async def update(
        self, id: int, update_model: SubscriptionUpdateModel
    ) -> Optional[Subscription]:
        """
        Replace the mutable fields of a subscription.

        Returns:
            The updated subscription, None if the ID does not exist
        """
        pass

    @abstractmethod
    async def delete(self, id: int) -> bool:
        """
        Delete a subscription.

        Returns:
            True if deleted, False if the ID did not exist
        """
        pass
