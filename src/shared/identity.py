"""Caller identity taken from request headers.

Routes receive the caller explicitly through these dependencies: the buyer
as ``X-Buyer-Id`` and the seller by ``X-Seller-Key`` matching the
``SELLER_API_KEY`` setting.
"""

import hmac
import os

from fastapi import Header

from shared.errors import NotAuthorized


def buyer_id(x_buyer_id: str | None = Header(default=None)) -> str:
    if not x_buyer_id or not x_buyer_id.strip():
        raise NotAuthorized("Buyer identity is required")
    return x_buyer_id.strip()


def seller(x_seller_key: str | None = Header(default=None)) -> bool:
    expected = os.getenv("SELLER_API_KEY")
    if not expected:
        raise NotAuthorized("Seller access is not configured")
    if not x_seller_key or not hmac.compare_digest(x_seller_key.encode(), expected.encode()):
        raise NotAuthorized("Seller credentials are invalid")
    return True
