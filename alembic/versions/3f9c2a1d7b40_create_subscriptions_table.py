"""create_subscriptions_table

Revision ID: 3f9c2a1d7b40
Revises:
Create Date: 2025-07-14 10:12:03.418221

Tables:
- subscriptions: one row per user subscription to a paid service, billed
  monthly from start_date through end_date (NULL while still active)
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9c2a1d7b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create subscriptions table with filter indexes."""
    op.create_table(
        'subscriptions',
        sa.Column('id', sa.BigInteger(), nullable=False, autoincrement=True),
        sa.Column('service_name', sa.String(), nullable=False),
        sa.Column('price', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(), nullable=False),

        # Always the first day of the month
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=True),

        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),

        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('price >= 0', name='ck_subscriptions_price_non_negative'),
        sa.CheckConstraint(
            'end_date IS NULL OR end_date >= start_date',
            name='ck_subscriptions_date_range',
        ),
    )
    op.create_index('ix_subscriptions_id', 'subscriptions', ['id'])
    op.create_index('ix_subscriptions_service_name', 'subscriptions', ['service_name'])
    op.create_index('ix_subscriptions_user_id', 'subscriptions', ['user_id'])
    op.create_index(
        'idx_subscription_user_service', 'subscriptions', ['user_id', 'service_name']
    )


def downgrade() -> None:
    """Drop subscriptions table."""
    op.drop_index('idx_subscription_user_service', table_name='subscriptions')
    op.drop_index('ix_subscriptions_user_id', table_name='subscriptions')
    op.drop_index('ix_subscriptions_service_name', table_name='subscriptions')
    op.drop_index('ix_subscriptions_id', table_name='subscriptions')
    op.drop_table('subscriptions')
