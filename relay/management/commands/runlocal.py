"""Development server for the relay that starts without a database.

The queue and device token tables belong to the hosted platform, so there
are no migrations to check; the readiness probe reports the database state.
"""

from django.core.management.commands.runserver import Command as RunServer


class Command(RunServer):
    """``runserver`` without the startup migration check."""

    help = "Start the development server without checking migrations"

    def check_migrations(self, *_args, **_kwargs):
        """Report that the external schema is not checked."""
        self.stdout.write(
            self.style.WARNING(
                "Not checking migrations: push_notification_queue and "
                "agent_device_tokens are managed by the hosted platform"
            )
        )
