"""FreshCart FastAPI application.

Storefront web server that processes commands synchronously via HTTP.
Each request is wrapped in the correct domain context based on URL prefix.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# Domains are initialized at module level so uvicorn workers share them.
# PROTEAN_ENV selects the config overlay from each domain.toml.
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from newsletter.domain import newsletter  # noqa: E402
from ordering.domain import ordering  # noqa: E402
from ordering.utils.logging import bind_request_context, clear_request_context

from shared.errors import register_error_handlers

ordering.init()
newsletter.init()

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
_ROUTE_DOMAIN_MAP = {
    "/orders": ordering,
    "/cart": ordering,
    "/products": ordering,
    "/subscribers": newsletter,
}


def _resolve_domain(path: str):
    """Return the domain for the given request path, or None."""
    for prefix, domain in _ROUTE_DOMAIN_MAP.items():
        if path.startswith(prefix):
            return domain
    return None


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="FreshCart API",
    description="Grocery storefront: catalogue, carts, orders, payments and newsletter",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the correct Protean domain context for each request."""
    domain = _resolve_domain(request.url.path)
    if domain is None:
        # No domain match: health check, docs, etc.
        return await call_next(request)

    bind_request_context(path=request.url.path, method=request.method, domain=domain.name)
    try:
        with domain.domain_context():
            return await call_next(request)
    finally:
        clear_request_context()


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from newsletter.api import router as newsletter_router  # noqa: E402
from ordering.api import cart_router, order_router, product_router  # noqa: E402

app.include_router(order_router)
app.include_router(cart_router)
app.include_router(product_router)
app.include_router(newsletter_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {
                "ordering": {"name": ordering.name},
                "newsletter": {"name": newsletter.name},
            },
        }
    )
