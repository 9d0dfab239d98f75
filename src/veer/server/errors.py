"""Error handling for requests that escape the router.

Maps HTTPError exceptions and unexpected failures to Response objects.
"""

import logging
import traceback

from veer.errors import HTTPError
from veer.http.request import Request
from veer.http.response import Response

logger = logging.getLogger("veer.server")


def handle_http_error(exc: HTTPError, request: Request, debug: bool = False) -> Response:
    """Map an HTTPError to a Response carrying its status and headers."""
    logger.debug("%d %s %s: %s", exc.status, request.method, request.raw_path, exc.detail)

    detail = exc.detail or f"Error {exc.status}"
    if debug and exc.detail:
        detail = f"{exc.status}: {exc.detail}"

    response = Response(body=detail, status=exc.status)
    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response


def handle_internal_error(exc: Exception, request: Request, debug: bool = False) -> Response:
    """Handle unexpected exceptions as 500 errors."""
    logger.exception("500 %s %s", request.method, request.raw_path)

    if debug:
        body = "".join(traceback.format_exception(exc))
        return Response(body=body, status=500)
    return Response(body="Internal Server Error", status=500)
