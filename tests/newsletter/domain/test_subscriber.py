"""Tests for the Subscriber aggregate and email normalisation."""

import pytest
from newsletter.subscriber.events import Subscribed, SubscriptionReactivated, SubscriptionToggled
from newsletter.subscriber.subscriber import Subscriber, normalize_email
from protean.exceptions import ValidationError


class TestNormalizeEmail:
    def test_trims_and_lower_cases(self):
        assert normalize_email("  Ayesha@Example.COM ") == "ayesha@example.com"

    @pytest.mark.parametrize("email", ["", "   ", None])
    def test_blank_rejected(self, email):
        with pytest.raises(ValidationError) as exc:
            normalize_email(email)
        assert exc.value.messages == {"email": ["Email is required"]}

    @pytest.mark.parametrize("email", ["no-at-sign", "two@@example.com", "a b@example.com", "user@nodot"])
    def test_malformed_rejected(self, email):
        with pytest.raises(ValidationError):
            normalize_email(email)


class TestSubscriber:
    def test_subscribe_is_active(self):
        subscriber = Subscriber.subscribe("Ayesha@Example.com")
        assert subscriber.email == "ayesha@example.com"
        assert subscriber.is_active is True
        assert subscriber.subscribed_at is not None
        assert isinstance(subscriber._events[0], Subscribed)

    def test_reactivate_inactive_subscriber(self):
        subscriber = Subscriber.subscribe("ayesha@example.com")
        subscriber.toggle()
        subscriber.reactivate()
        assert subscriber.is_active is True
        assert isinstance(subscriber._events[-1], SubscriptionReactivated)

    def test_reactivate_active_subscriber_rejected(self):
        subscriber = Subscriber.subscribe("ayesha@example.com")
        with pytest.raises(ValidationError) as exc:
            subscriber.reactivate()
        assert exc.value.messages == {"email": ["Email already subscribed"]}

    def test_toggle_flips_state(self):
        subscriber = Subscriber.subscribe("ayesha@example.com")
        subscriber.toggle()
        assert subscriber.is_active is False
        event = subscriber._events[-1]
        assert isinstance(event, SubscriptionToggled)
        assert event.is_active is False
