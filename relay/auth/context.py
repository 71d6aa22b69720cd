"""Thread-local security context for the authenticated caller."""

import threading

from relay.auth.oauth2 import OAuth2Principal

_security_context = threading.local()


def set_current_principal(principal: OAuth2Principal) -> None:
    """Remember the caller for the rest of the request."""
    _security_context.principal = principal


def get_current_principal() -> OAuth2Principal | None:
    """Return the caller of the current request, if authenticated."""
    return getattr(_security_context, "principal", None)


def clear_current_principal() -> None:
    """Forget the caller once the request has been handled."""
    if hasattr(_security_context, "principal"):
        delattr(_security_context, "principal")
