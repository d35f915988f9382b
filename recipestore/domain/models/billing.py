"""
Billing models written by the payment integration: subscriptions and payments.
"""

from sqlalchemy import Column, String, Text, Integer, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression

from recipestore.domain.models.database import Base, CreatedAtMixin, TimestampMixin


class Subscription(TimestampMixin, Base):
    __tablename__ = "subscriptions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    stripe_subscription_id = Column(String, nullable=False, index=True)
    stripe_price_id = Column(String, nullable=False)
    status = Column(String, nullable=False)  # active, canceled, past_due, ...
    plan_name = Column(String, nullable=False)  # monthly, annual
    current_period_start = Column(DateTime(timezone=True), nullable=False)
    current_period_end = Column(DateTime(timezone=True), nullable=False)
    cancel_at_period_end = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )

    user = relationship("User", back_populates="subscriptions")


class PaymentHistory(CreatedAtMixin, Base):
    __tablename__ = "payment_history"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    stripe_invoice_id = Column(String, nullable=False)
    amount = Column(Integer, nullable=False)  # minor currency units (cents)
    currency = Column(String, nullable=False)
    status = Column(String, nullable=False)  # paid, unpaid, refunded, ...
    invoice_url = Column(String)
    description = Column(Text)
    payment_date = Column(DateTime(timezone=True), nullable=False)

    user = relationship("User", back_populates="payments")
