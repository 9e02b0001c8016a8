"""DRF exception handler producing one standardized error body.

Every handled error is rendered as::

    {
        "type": "client_error" | "validation_error",
        "errors": [{"code": str, "detail": str, "attr": str | None}],
    }

``AppError`` subclasses raised by services are translated here, so views
do not need per-exception ``try/except`` blocks.  Anything else that DRF
does not know about is left unhandled and follows Django's 500 path.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from rest_framework import exceptions
from rest_framework.response import Response
from rest_framework.views import exception_handler

from modules.core.exceptions import AppError

logger = structlog.get_logger(__name__)


def standardized_exception_handler(
    exc: Exception, context: Dict[str, Any]
) -> Optional[Response]:
    if isinstance(exc, AppError):
        logger.info(
            "api.domain_error",
            code=exc.code,
            status_code=exc.status_code,
            detail=exc.message,
        )
        body = {
            "type": "client_error",
            "errors": [{"code": exc.code, "detail": exc.message, "attr": None}],
        }
        return Response(body, status=exc.status_code)

    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, exceptions.ValidationError):
        error_type = "validation_error"
        errors = _flatten_validation_errors(exc.detail)
    else:
        error_type = "client_error"
        detail = exc.detail if isinstance(exc, exceptions.APIException) else str(exc)
        errors = [
            {
                "code": getattr(detail, "code", None) or "error",
                "detail": str(detail),
                "attr": None,
            }
        ]

    response.data = {"type": error_type, "errors": errors}
    return response


def _flatten_validation_errors(
    detail: Any, attr: Optional[str] = None
) -> List[Dict[str, Optional[str]]]:
    """Flatten nested DRF validation details into ``{code, detail, attr}`` rows.

    Nested attributes are joined with dots, e.g. ``products.0.quantity``.
    """
    if isinstance(detail, dict):
        errors: List[Dict[str, Optional[str]]] = []
        for key, value in detail.items():
            child = key if attr is None else f"{attr}.{key}"
            if key == "non_field_errors":
                child = attr
            errors.extend(_flatten_validation_errors(value, child))
        return errors

    if isinstance(detail, list):
        errors = []
        for index, value in enumerate(detail):
            if isinstance(value, (dict, list)):
                child = str(index) if attr is None else f"{attr}.{index}"
                errors.extend(_flatten_validation_errors(value, child))
            else:
                errors.extend(_flatten_validation_errors(value, attr))
        return errors

    return [
        {
            "code": getattr(detail, "code", None) or "invalid",
            "detail": str(detail),
            "attr": attr,
        }
    ]
