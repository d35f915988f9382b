"""Billing service: records what the payment integration reports"""

import logging
from typing import Any

from recipestore.domain.enums import PREMIUM_STATUSES
from recipestore.domain.schemas import (
    PaymentHistoryCreate,
    PaymentHistoryRead,
    SubscriptionCreate,
    SubscriptionRead,
)
from recipestore.exceptions import ConflictError
from recipestore.repositories import (
    PaymentHistoryRepository,
    SubscriptionRepository,
    UserRepository,
)
from recipestore.store import DataStore, parse_payload

logger = logging.getLogger("recipestore.services.billing")


class BillingService:
    """Keeps subscription/payment rows and the user's billing summary in step."""

    @staticmethod
    def record_subscription(store: DataStore, data: Any) -> SubscriptionRead:
        """
        Insert a subscription, or refresh it when its external id is already known,
        and mirror status, plan, period end and premium flag onto the user.

        Raises:
            ServiceValidationError: invalid subscription data
            ConflictError: the external id belongs to another user
            InvalidReferenceError: the user does not exist
        """
        data = parse_payload(SubscriptionCreate, data)
        values = data.model_dump()

        with store.session_scope() as db:
            subscriptions = SubscriptionRepository(db)
            subscription = subscriptions.get_by_stripe_subscription_id(
                data.stripe_subscription_id
            )
            if subscription is None:
                subscription = subscriptions.create(values)
            elif subscription.user_id != data.user_id:
                raise ConflictError(
                    "Subscription belongs to another user",
                    details={"field": "stripe_subscription_id"},
                    code="duplicate_stripe_subscription_id",
                )
            else:
                changes = {
                    k: v
                    for k, v in values.items()
                    if k not in ("user_id", "stripe_subscription_id")
                }
                subscription = subscriptions.update(subscription, changes)

            users = UserRepository(db)
            user = users.get_by_id(data.user_id)
            users.update(
                user,
                {
                    "stripe_subscription_id": data.stripe_subscription_id,
                    "subscription_status": data.status,
                    "subscription_plan": data.plan_name,
                    "subscription_end_date": data.current_period_end,
                    "is_premium": data.status in PREMIUM_STATUSES,
                },
            )
            result = SubscriptionRead.model_validate(subscription)

        logger.info(
            f"subscription_recorded user_id={data.user_id} status={data.status}"
        )
        return result

    @staticmethod
    def record_payment(store: DataStore, data: Any) -> PaymentHistoryRead:
        """
        Insert a payment; an invoice already recorded for the user is a conflict.
        """
        data = parse_payload(PaymentHistoryCreate, data)
        with store.session_scope() as db:
            payments = PaymentHistoryRepository(db)
            if payments.get_by_invoice(data.user_id, data.stripe_invoice_id) is not None:
                raise ConflictError(
                    f"Invoice {data.stripe_invoice_id} already recorded",
                    details={"field": "stripe_invoice_id"},
                    code="duplicate_stripe_invoice_id",
                )
            payment = payments.create(data.model_dump(exclude_none=True))
            result = PaymentHistoryRead.model_validate(payment)

        logger.info(
            f"payment_recorded user_id={data.user_id} amount={data.amount} {data.currency}"
        )
        return result
