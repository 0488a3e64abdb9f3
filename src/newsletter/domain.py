"""Newsletter bounded context: the storefront's mailing list."""

import structlog
from protean.domain import Domain

newsletter = Domain(name="newsletter")

logger = structlog.get_logger(__name__)
