"""Subscriber aggregate: one address on the newsletter list.

Addresses are stored trimmed and lower-cased so the same mailbox can only be
on the list once.
"""

import re
from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, String

from newsletter.domain import newsletter
from newsletter.subscriber.events import Subscribed, SubscriptionReactivated, SubscriptionToggled

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_email(email) -> str:
    """Trim and lower-case an address, rejecting anything not shaped like one."""
    normalized = (email or "").strip().lower()
    if not normalized:
        raise ValidationError({"email": ["Email is required"]})
    if len(normalized) > 254 or not _EMAIL_PATTERN.match(normalized):
        raise ValidationError({"email": ["Please enter a valid email address"]})
    return normalized


@newsletter.aggregate
class Subscriber:
    email = String(required=True, max_length=254, unique=True)
    is_active = Boolean(default=True)
    subscribed_at = DateTime()
    created_at = DateTime()

    @classmethod
    def subscribe(cls, email):
        now = datetime.now(UTC)
        subscriber = cls(email=normalize_email(email), is_active=True, subscribed_at=now, created_at=now)
        subscriber.raise_(Subscribed(subscriber_id=str(subscriber.id), email=subscriber.email, subscribed_at=now))
        return subscriber

    def reactivate(self):
        if self.is_active:
            raise ValidationError({"email": ["Email already subscribed"]})

        now = datetime.now(UTC)
        self.is_active = True
        self.subscribed_at = now
        self.raise_(SubscriptionReactivated(subscriber_id=str(self.id), email=self.email, reactivated_at=now))

    def toggle(self):
        self.is_active = not self.is_active
        self.raise_(SubscriptionToggled(subscriber_id=str(self.id), is_active=self.is_active))
