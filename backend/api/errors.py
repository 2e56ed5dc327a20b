"""
Mapping of domain errors to HTTP errors.

Route handlers catch CostshareError and raise the result of
to_http_exception, so every endpoint answers with the status its error
base declares and the body the error describes.
"""

import logging

from fastapi import HTTPException

from shared.exceptions import CostshareError

logger = logging.getLogger(__name__)

ERROR_CODE_HEADER = "X-Error-Code"


def to_http_exception(error: CostshareError, fallback: str) -> HTTPException:
    """
    Convert a domain error into an HTTPException.

    Args:
        error: The error raised by a module
        fallback: Detail for server errors, e.g. "Failed to get periods"

    Returns:
        HTTPException carrying the error's status, its public detail and
        its code in the X-Error-Code header
    """
    body = error.to_dict(fallback)
    if not error.is_client_error:
        logger.error(f"{fallback}: {error.log_context()}", exc_info=error)
    return HTTPException(
        status_code=error.status_code,
        detail=body["detail"],
        headers={ERROR_CODE_HEADER: body["error"]},
    )
