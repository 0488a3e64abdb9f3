"""Response envelope shared by every route."""

from pydantic import BaseModel


class Envelope(BaseModel):
    success: bool = True
    message: str = "OK"
