"""Security context middleware exposing the authenticated caller."""

from collections.abc import Callable

from django.http import HttpRequest, HttpResponse

from relay.auth.context import clear_current_principal


class SecurityContextMiddleware:
    """Clear the caller bound by authenticated views once the request ends.

    DRF authenticates inside the view, after middleware has run, so the
    principal is bound by ``AuthenticatedView.initial`` and only cleaned up here.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        """Initialize the middleware."""
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Run the request and drop the thread-local principal afterwards."""
        try:
            return self.get_response(request)
        finally:
            clear_current_principal()
