"""Custom structlog processors for request context and service metadata."""

import os
import threading

from colorama import Fore, Style, just_fix_windows_console
from structlog.typing import EventDict, WrappedLogger

from relay.constants import TOKEN_LOG_PREFIX_LENGTH
from relay.logging.context import get_request_id

DEFAULT_SERVICE_NAME = "push-relay-service"

# Event keys that may carry a full device token.
TOKEN_FIELDS = ("token", "device_token")

_LEVEL_COLORS = {
    "DEBUG": Fore.CYAN,
    "INFO": Fore.GREEN,
    "WARNING": Fore.YELLOW,
    "ERROR": Fore.RED,
    "CRITICAL": Fore.RED + Style.BRIGHT,
}

# Shown in the console prefix or too noisy for it.
_CONSOLE_HIDDEN_FIELDS = frozenset(
    {
        "level",
        "timestamp",
        "request_id",
        "logger",
        "event",
        "process_id",
        "thread_id",
        "service_name",
        "environment",
    }
)

just_fix_windows_console()


def add_request_context(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Attach the request id set by RequestIDMiddleware, when present."""
    request_id = get_request_id()
    if request_id:
        event_dict.setdefault("request_id", request_id)
    return event_dict


def add_service_context(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Attach ``service_name`` and ``environment`` to every event."""
    event_dict["service_name"] = os.getenv("SERVICE_NAME", DEFAULT_SERVICE_NAME)
    event_dict["environment"] = os.getenv("ENVIRONMENT", "development")
    return event_dict


def add_process_info(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Attach process and thread ids; useful with several rq workers."""
    event_dict["process_id"] = os.getpid()
    event_dict["thread_id"] = threading.get_ident()
    return event_dict


def truncate_device_tokens(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Shorten device tokens so full tokens never reach log storage.

    Args:
        _logger: The wrapped logger instance (unused).
        _method_name: The name of the method called on the logger (unused).
        event_dict: The event dictionary to be logged.

    Returns:
        The event dictionary with token fields cut to their prefix.
    """
    for field in TOKEN_FIELDS:
        value = event_dict.get(field)
        if isinstance(value, str) and len(value) > TOKEN_LOG_PREFIX_LENGTH:
            event_dict[field] = f"{value[:TOKEN_LOG_PREFIX_LENGTH]}..."
    return event_dict


def console_renderer(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> str:
    """Render an event as one colored console line.

    Format: ``[LEVEL] timestamp | request_id | logger | event key=value ...``
    """
    level = str(event_dict.get("level", "info")).upper()
    level_color = _LEVEL_COLORS.get(level, Fore.WHITE)

    line = (
        f"{level_color}[{level:<8}]{Style.RESET_ALL} "
        f"{Fore.WHITE}{event_dict.get('timestamp', '')}{Style.RESET_ALL} | "
        f"{Fore.MAGENTA}{event_dict.get('request_id', '-')}{Style.RESET_ALL} | "
        f"{Fore.BLUE}{event_dict.get('logger', 'root')}{Style.RESET_ALL} | "
        f"{event_dict.get('event', '')}"
    )

    extras = " ".join(
        f"{key}={value}"
        for key, value in event_dict.items()
        if key not in _CONSOLE_HIDDEN_FIELDS
    )
    if extras:
        line += f" {Fore.YELLOW}{extras}{Style.RESET_ALL}"
    return line
