"""Subscriber management: commands, handler and list query."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from newsletter.domain import logger, newsletter
from newsletter.subscriber.subscriber import Subscriber, normalize_email


@newsletter.command(part_of="Subscriber")
class Subscribe:
    email = String(required=True, max_length=254)


@newsletter.command(part_of="Subscriber")
class RemoveSubscriber:
    subscriber_id = Identifier(required=True)


@newsletter.command(part_of="Subscriber")
class ToggleSubscriberStatus:
    subscriber_id = Identifier(required=True)


def list_subscribers() -> list[Subscriber]:
    """Every subscriber, newest first."""
    repo = current_domain.repository_for(Subscriber)
    return repo._dao.query.order_by("-created_at").all().items


@newsletter.command_handler(part_of=Subscriber)
class ManageSubscriberHandler:
    @handle(Subscribe)
    def subscribe(self, command):
        """Add an address, or bring back one that was switched off.

        Returns ``True`` when a new subscriber was created and ``False`` for a
        reactivation.
        """
        repo = current_domain.repository_for(Subscriber)
        email = normalize_email(command.email)

        existing = repo._dao.query.filter(email=email).all().items
        if existing:
            subscriber = existing[0]
            subscriber.reactivate()
            repo.add(subscriber)
            logger.info("subscription_reactivated", subscriber_id=str(subscriber.id))
            return False

        subscriber = Subscriber.subscribe(email)
        repo.add(subscriber)
        logger.info("subscribed", subscriber_id=str(subscriber.id))
        return True

    @handle(RemoveSubscriber)
    def remove_subscriber(self, command):
        repo = current_domain.repository_for(Subscriber)
        subscriber = repo.get(command.subscriber_id)
        repo._dao.delete(subscriber)
        logger.info("subscriber_removed", subscriber_id=str(command.subscriber_id))

    @handle(ToggleSubscriberStatus)
    def toggle_subscriber_status(self, command):
        repo = current_domain.repository_for(Subscriber)
        subscriber = repo.get(command.subscriber_id)
        subscriber.toggle()
        repo.add(subscriber)
        return subscriber.is_active
