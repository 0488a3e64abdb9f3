"""Exception handlers that keep every failure inside the response envelope.

Each handler answers with ``{"success": false, "message": ...}``. Messages
are written for people; internal exception text only reaches the logs.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from payments.gateway import GatewayError, SignatureVerificationError

logger = structlog.get_logger(__name__)


class NotAuthorized(Exception):
    """The caller is missing or failed to prove the identity a route needs."""

    def __init__(self, message="Not authorized"):
        self.message = message
        super().__init__(message)


def failure(status_code: int, message: str, **payload) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message, **payload})


def _first_message(messages) -> str:
    """Flatten protean's ``{field: [messages]}`` into one readable sentence."""
    if isinstance(messages, dict):
        for field, errors in messages.items():
            if isinstance(errors, list | tuple) and errors:
                return str(errors[0])
            if errors:
                return str(errors)
            return f"Invalid value for {field}"
    return str(messages) or "Invalid request"


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def validation_error(request: Request, exc: ValidationError):
        logger.info("request_rejected", path=request.url.path, errors=exc.messages)
        return failure(400, _first_message(exc.messages), errors=exc.messages)

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(request: Request, exc: RequestValidationError):
        logger.info("request_malformed", path=request.url.path, errors=exc.errors())
        return failure(400, "Request body is invalid")

    @app.exception_handler(ObjectNotFoundError)
    async def not_found(request: Request, exc: ObjectNotFoundError):
        logger.info("object_not_found", path=request.url.path)
        return failure(404, "Not found")

    @app.exception_handler(NotAuthorized)
    async def not_authorized(request: Request, exc: NotAuthorized):
        logger.warning("request_not_authorized", path=request.url.path)
        return failure(401, exc.message)

    @app.exception_handler(SignatureVerificationError)
    async def bad_signature(request: Request, exc: SignatureVerificationError):
        logger.warning("webhook_signature_rejected", path=request.url.path, error=str(exc))
        return failure(400, "Webhook signature verification failed")

    @app.exception_handler(GatewayError)
    async def gateway_error(request: Request, exc: GatewayError):
        order_id = getattr(exc, "order_id", None)
        logger.error("payment_gateway_failed", path=request.url.path, order_id=order_id, error=str(exc))
        payload = {"order_id": order_id} if order_id else {}
        return failure(502, exc.public_message, **payload)

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception):
        logger.exception("unhandled_error", path=request.url.path)
        return failure(500, "Something went wrong")
