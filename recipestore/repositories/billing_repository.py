"""
Billing Repository - Data access layer for subscriptions and payment history
"""

from typing import Any, Mapping, Optional
from sqlalchemy.orm import Session

from recipestore.repositories.base import BaseRepository
from recipestore.domain.models.database import as_utc
from recipestore.domain.models import Subscription, PaymentHistory
from recipestore.exceptions import ServiceValidationError


class SubscriptionRepository(BaseRepository[Subscription]):
    """Repository for subscription data access"""

    def __init__(self, db: Session):
        super().__init__(db, Subscription)

    def get_by_stripe_subscription_id(self, stripe_subscription_id: str) -> Optional[Subscription]:
        return (
            self.db.query(Subscription)
            .filter(Subscription.stripe_subscription_id == stripe_subscription_id)
            .first()
        )

    def update(self, subscription: Subscription, values: Mapping[str, Any]) -> Subscription:
        start = values.get("current_period_start") or subscription.current_period_start
        end = values.get("current_period_end") or subscription.current_period_end
        if as_utc(end) < as_utc(start):
            raise ServiceValidationError(
                "current_period_end precedes current_period_start",
                details={"field": "current_period_end"},
                code="invalid_period",
            )
        return super().update(subscription, values)


class PaymentHistoryRepository(BaseRepository[PaymentHistory]):
    """Repository for payment history data access"""

    def __init__(self, db: Session):
        super().__init__(db, PaymentHistory)

    def get_by_invoice(self, user_id: str, stripe_invoice_id: str) -> Optional[PaymentHistory]:
        return (
            self.db.query(PaymentHistory)
            .filter(
                PaymentHistory.user_id == user_id,
                PaymentHistory.stripe_invoice_id == stripe_invoice_id,
            )
            .first()
        )
