"""
Service errors raised by the registry and the ledger.

Each kind carries the HTTP status it is answered with; the handler
installed in main.py turns them into ``{"detail": message}`` responses.
"""
from fastapi import Request
from fastapi.responses import JSONResponse


class ServiceError(Exception):
    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class DuplicateKey(ServiceError):
    """A customer with this email is already registered."""

    status_code = 400


class NotFound(ServiceError):
    status_code = 404


class CustomerNotFound(NotFound):
    """A certificate operation referenced an unregistered email."""


class InvalidId(NotFound):
    """The certificate identifier is not a well-formed UUID."""


class StoreError(ServiceError):
    status_code = 500


class UpdateFailed(StoreError):
    """The store rejected a certificate update; answered like a missing certificate."""

    status_code = 404


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})
