"""Pydantic request/response schemas for the Newsletter API."""

from datetime import datetime

from pydantic import BaseModel

from shared.responses import Envelope


class SubscribeRequest(BaseModel):
    email: str


class SubscriberResponse(BaseModel):
    subscriber_id: str
    email: str
    is_active: bool
    subscribed_at: datetime | None = None
    created_at: datetime | None = None


class SubscriberListResponse(Envelope):
    subscribers: list[SubscriberResponse]


class ToggleResponse(Envelope):
    is_active: bool
