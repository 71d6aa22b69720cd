"""Request ID middleware for log correlation."""

import uuid
from collections.abc import Callable

from django.http import HttpRequest, HttpResponse

from relay.constants import REQUEST_ID_HEADER
from relay.logging.context import clear_request_id, set_request_id

MAX_REQUEST_ID_LENGTH = 128


class RequestIDMiddleware:
    """Tag each request with an id and echo it back in ``X-Request-ID``.

    An id supplied by the caller (scheduler, gateway proxy) is reused when it
    looks sane, otherwise a UUID is generated. The id is bound to the thread
    for the lifetime of the request so every log line carries it.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        """Initialize the middleware."""
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Bind the request id, run the request, then unbind it."""
        request_id = self._incoming_request_id(request) or str(uuid.uuid4())
        set_request_id(request_id)
        request.request_id = request_id  # type: ignore[attr-defined]

        try:
            response = self.get_response(request)
            response[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            clear_request_id()

    @staticmethod
    def _incoming_request_id(request: HttpRequest) -> str | None:
        value = (request.headers.get(REQUEST_ID_HEADER) or "").strip()
        if not value or len(value) > MAX_REQUEST_ID_LENGTH or not value.isprintable():
            return None
        return value
