"""Ordering bounded context: product catalogue, shopping carts and orders.

Handles order placement for cash-on-delivery and online payment, payment
reconciliation from gateway webhooks, and the settled-order views used by
buyers and sellers.
"""

import structlog
from protean.domain import Domain

from ordering.utils.logging import configure_logging

configure_logging()

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
