"""
Database entity for subscriptions.
"""

from sqlalchemy import Column, String, Integer, DateTime, Index
from sqlalchemy.sql import func

from common.db.base import Base, BigIntegerType
from packages.subscriptions.models.database.types import YearMonthType


class SubscriptionEntity(Base):
    """
    A user's subscription to a paid service.

    Billed monthly at ``price`` for every month from ``start_date`` through
    ``end_date``. A NULL ``end_date`` means the subscription is still active.
    """

    __tablename__ = "subscriptions"

    id = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    service_name = Column(String, nullable=False, index=True)
    price = Column(Integer, nullable=False)
    user_id = Column(String, nullable=False, index=True)

    start_date = Column(YearMonthType, nullable=False)
    end_date = Column(YearMonthType, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        Index("idx_subscription_user_service", "user_id", "service_name"),
        # Keep IDs monotonic on SQLite too; deleted IDs are never handed out again
        {"sqlite_autoincrement": True},
    )
