"""FastAPI routes for the Newsletter domain."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from newsletter.api.schemas import SubscribeRequest, SubscriberListResponse, SubscriberResponse, ToggleResponse
from newsletter.subscriber.management import RemoveSubscriber, Subscribe, ToggleSubscriberStatus, list_subscribers
from shared.identity import seller
from shared.responses import Envelope

router = APIRouter(prefix="/subscribers", tags=["newsletter"])


@router.post("", status_code=201, response_model=Envelope)
async def subscribe(body: SubscribeRequest) -> Envelope:
    created = current_domain.process(Subscribe(email=body.email), asynchronous=False)
    if created:
        return Envelope(message="Successfully subscribed to newsletter!")
    return Envelope(message="Welcome back! Subscription reactivated")


@router.get("", response_model=SubscriberListResponse, dependencies=[Depends(seller)])
async def subscribers() -> SubscriberListResponse:
    return SubscriberListResponse(
        subscribers=[
            SubscriberResponse(
                subscriber_id=str(s.id),
                email=s.email,
                is_active=bool(s.is_active),
                subscribed_at=s.subscribed_at,
                created_at=s.created_at,
            )
            for s in list_subscribers()
        ]
    )


@router.delete("/{subscriber_id}", response_model=Envelope, dependencies=[Depends(seller)])
async def remove_subscriber(subscriber_id: str) -> Envelope:
    current_domain.process(RemoveSubscriber(subscriber_id=subscriber_id), asynchronous=False)
    return Envelope(message="Subscriber removed successfully")


@router.put("/{subscriber_id}/toggle", response_model=ToggleResponse, dependencies=[Depends(seller)])
async def toggle_subscriber(subscriber_id: str) -> ToggleResponse:
    is_active = current_domain.process(ToggleSubscriberStatus(subscriber_id=subscriber_id), asynchronous=False)
    state = "activated" if is_active else "deactivated"
    return ToggleResponse(message=f"Subscriber {state} successfully", is_active=is_active)
