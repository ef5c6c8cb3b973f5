"""Subscription API routes."""

from packages.subscriptions.routes import subscriptions

__all__ = ["subscriptions"]
