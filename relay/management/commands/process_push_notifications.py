"""Run one push dispatch batch, for cron or manual use."""

import json

from django.core.management.base import BaseCommand, CommandError
from django.db import DatabaseError

from relay.exceptions import DispatchInProgressError, PushGatewayError
from relay.services.dispatch_service import PushDispatchService


class Command(BaseCommand):
    """Drain up to one batch of pending push notifications."""

    help = "Send pending push notifications and print the summary as JSON"

    def add_arguments(self, parser):
        """Register command line options."""
        parser.add_argument(
            "--batch-size",
            type=int,
            default=None,
            help="Maximum notifications to claim (default: PUSH_DISPATCH_BATCH_SIZE)",
        )

    def handle(self, *_args, **options):
        """Run the batch; fatal errors exit non-zero."""
        batch_size = options["batch_size"]
        if batch_size is not None and batch_size < 1:
            raise CommandError("--batch-size must be a positive integer")

        service = PushDispatchService(batch_size=batch_size)
        try:
            summary = service.process_pending()
        except DispatchInProgressError as e:
            self.stderr.write(self.style.WARNING(str(e)))
            raise CommandError(str(e), returncode=2) from e
        except PushGatewayError as e:
            raise CommandError(f"Push gateway error: {e}") from e
        except DatabaseError as e:
            raise CommandError(f"Could not claim pending notifications: {e}") from e

        self.stdout.write(json.dumps(summary.to_response()))
