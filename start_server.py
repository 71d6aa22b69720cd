"""Production entry point: serve the push relay with Gunicorn."""

import os
import sys

from gunicorn.app.wsgiapp import run


def main():
    """Start Gunicorn bound to PORT (default 8000).

    Worker and thread counts come from GUNICORN_WORKERS and GUNICORN_THREADS.
    The timeout covers a full dispatch batch, which makes one gateway call per
    device token.
    """
    sys.argv = [
        "gunicorn",
        "push_service.wsgi:application",
        "--bind",
        f"0.0.0.0:{os.getenv('PORT', '8000')}",
        "--workers",
        os.getenv("GUNICORN_WORKERS", "2"),
        "--threads",
        os.getenv("GUNICORN_THREADS", "2"),
        "--timeout",
        os.getenv("GUNICORN_TIMEOUT", "120"),
        "--access-logfile",
        "-",
        "--error-logfile",
        "-",
    ]
    run()


if __name__ == "__main__":
    main()
