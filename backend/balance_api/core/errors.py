"""RFC 7807 ``application/problem+json`` responses for every failure path."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from balance_api.core.extensions import jwt
from balance_api.core.logger import ensure_request_id
from balance_api.services._shared.errors import (
    ConflictError,
    DuplicateEmailError,
    ForbiddenError,
    InvalidCredentialsError,
    NotFoundError,
    OperationFailedError,
    ServiceError,
    TargetMismatchError,
    UnauthenticatedError,
    ValidationError,
)

log = logging.getLogger(__name__)

#: Service error -> (status, code), most specific classes first
SERVICE_ERROR_STATUS: tuple[tuple[type[ServiceError], HTTPStatus, str], ...] = (
    (ValidationError, HTTPStatus.BAD_REQUEST, "validation_error"),
    (TargetMismatchError, HTTPStatus.BAD_REQUEST, "target_mismatch"),
    (DuplicateEmailError, HTTPStatus.CONFLICT, "duplicate_email"),
    (ConflictError, HTTPStatus.CONFLICT, "conflict"),
    (NotFoundError, HTTPStatus.NOT_FOUND, "not_found"),
    (InvalidCredentialsError, HTTPStatus.UNAUTHORIZED, "invalid_credentials"),
    (UnauthenticatedError, HTTPStatus.UNAUTHORIZED, "unauthenticated"),
    (ForbiddenError, HTTPStatus.FORBIDDEN, "forbidden"),
    (OperationFailedError, HTTPStatus.INTERNAL_SERVER_ERROR, "operation_failed"),
)


def _code_for_status(status: int) -> str:
    """Snake-case code derived from the reason phrase (``429`` -> ``too_many_requests``)."""
    try:
        return HTTPStatus(status).phrase.lower().replace(" ", "_").replace("-", "_")
    except ValueError:
        return "error"


def problem(
    status: int,
    code: str,
    detail: str,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Build a Problem Details body.

    :param status: HTTP status code.
    :param code: Stable machine-readable code.
    :param detail: Client-safe explanation.
    :param details: Optional structured extras (field names, schema errors).
    :returns: Problem dictionary including the request id.
    """
    body: dict[str, Any] = {
        "type": "about:blank",
        "title": HTTPStatus(status).phrase,
        "status": int(status),
        "detail": detail,
        "instance": request.path if request else None,
        "code": code,
        "request_id": ensure_request_id(),
    }
    if details:
        body["details"] = details
    return body


def _respond(body: dict[str, Any], *, exc_info: bool = False) -> tuple[Response, int]:
    status = body["status"]
    log.log(
        logging.ERROR if status >= 500 else logging.WARNING,
        "problem %s %s: %s",
        status,
        body["code"],
        body["detail"],
        exc_info=exc_info,
    )
    resp = jsonify(body)
    resp.mimetype = "application/problem+json"
    return resp, status


class APIError(Exception):
    """
    An error already resolved to its HTTP shape.

    Parameters
    ----------
    message : str
        Client-facing detail.
    status_code : int
        HTTP status.
    code : str
        Stable snake_case identifier.
    details : dict[str, Any] | None, optional
        Structured extras for the problem body.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.code = code
        self.details = details or {}

    def to_problem(self) -> dict[str, Any]:
        return problem(self.status_code, self.code, self.message, self.details or None)


def translate_service_error(exc: ServiceError) -> APIError:
    """
    Resolve a service error to its status and code.

    Unlisted ``ServiceError`` subclasses fall back to ``400 bad_request``.
    """
    for error_type, status, code in SERVICE_ERROR_STATUS:
        if isinstance(exc, error_type):
            break
    else:
        status, code = HTTPStatus.BAD_REQUEST, "bad_request"

    details = None
    if isinstance(exc, ValidationError) and exc.field:
        details = {"field": exc.field}
    message = "Email is already registered" if isinstance(exc, DuplicateEmailError) else str(exc)
    return APIError(message or status.phrase, status, code, details)


def _register_jwt_loaders() -> None:
    """flask-jwt-extended rejections become 401 problems instead of ``{"msg": ...}``."""

    def _unauthenticated(reason: str) -> tuple[Response, int]:
        return _respond(problem(HTTPStatus.UNAUTHORIZED, "unauthenticated", reason))

    jwt.unauthorized_loader(_unauthenticated)
    jwt.invalid_token_loader(_unauthenticated)

    @jwt.expired_token_loader
    def _expired(_header: dict[str, Any], _payload: dict[str, Any]):
        return _unauthenticated("Token has expired")


def init_app(app: Flask) -> None:
    """
    Register the problem handlers on ``app``.

    ========================  ======  =============================
    Exception                 Status  Code
    ========================  ======  =============================
    ``ServiceError``          varies  see ``SERVICE_ERROR_STATUS``
    marshmallow validation    422     ``validation_error``
    ``IntegrityError``        409     ``conflict``
    ``OperationalError``      503     ``service_unavailable``
    ``HTTPException``         as is   derived from the status
    anything else             500     ``internal_server_error``
    ========================  ======  =============================

    Database and unexpected errors are logged with their traceback and never
    expose the underlying message.
    """
    _register_jwt_loaders()

    @app.errorhandler(ServiceError)
    def _service_error(err: ServiceError):
        api_error = translate_service_error(err)
        return _respond(api_error.to_problem())

    @app.errorhandler(MarshmallowValidationError)
    def _schema_error(err: MarshmallowValidationError):
        body = problem(
            HTTPStatus.UNPROCESSABLE_ENTITY,
            "validation_error",
            "Validation failed",
            {"errors": err.messages},
        )
        return _respond(body)

    @app.errorhandler(IntegrityError)
    def _integrity_error(err: IntegrityError):
        return _respond(problem(HTTPStatus.CONFLICT, "conflict", "Resource conflict"), exc_info=True)

    @app.errorhandler(OperationalError)
    def _operational_error(err: OperationalError):
        body = problem(
            HTTPStatus.SERVICE_UNAVAILABLE, "service_unavailable", "Service temporarily unavailable"
        )
        return _respond(body, exc_info=True)

    @app.errorhandler(HTTPException)
    def _http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        detail = (err.description or "").strip() or HTTPStatus(status).phrase
        if status == HTTPStatus.NOT_FOUND:
            detail = f"Route '{request.path}' not found"
        return _respond(problem(status, _code_for_status(status), detail))

    @app.errorhandler(Exception)
    def _unexpected(err: Exception):
        body = problem(HTTPStatus.INTERNAL_SERVER_ERROR, "internal_server_error", "Unexpected error")
        return _respond(body, exc_info=True)
