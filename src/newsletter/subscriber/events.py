"""Domain events for the Subscriber aggregate."""

from protean.fields import Boolean, DateTime, Identifier, String

from newsletter.domain import newsletter


@newsletter.event(part_of="Subscriber")
class Subscribed:
    __version__ = 1

    subscriber_id = Identifier(required=True)
    email = String(required=True, max_length=254)
    subscribed_at = DateTime(required=True)


@newsletter.event(part_of="Subscriber")
class SubscriptionReactivated:
    __version__ = 1

    subscriber_id = Identifier(required=True)
    email = String(required=True, max_length=254)
    reactivated_at = DateTime(required=True)


@newsletter.event(part_of="Subscriber")
class SubscriptionToggled:
    """A seller switched a subscriber on or off."""

    __version__ = 1

    subscriber_id = Identifier(required=True)
    is_active = Boolean(required=True)
