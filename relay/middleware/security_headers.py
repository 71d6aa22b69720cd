"""Security headers middleware."""

from collections.abc import Callable

from django.http import HttpRequest, HttpResponse

from relay.constants import SECURITY_HEADERS


class SecurityHeadersMiddleware:
    """Add the standard security headers to every response.

    Headers a view has already set are left alone.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        """Initialize the middleware."""
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Add any missing security header to the response."""
        response = self.get_response(request)
        for header, value in SECURITY_HEADERS.items():
            if header not in response:
                response[header] = value
        return response
