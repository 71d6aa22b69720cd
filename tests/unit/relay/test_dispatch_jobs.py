"""Tests for the RQ dispatch job."""

from unittest.mock import patch

from django.test import TestCase

from relay.exceptions import DispatchInProgressError, GatewayConfigurationError
from relay.jobs.dispatch_jobs import process_push_queue_job
from relay.schemas.push import DispatchDetails, DispatchSummary


@patch("relay.jobs.dispatch_jobs.PushDispatchService")
class TestProcessPushQueueJob(TestCase):
    """Test suite for process_push_queue_job."""

    def test_returns_summary(self, mock_service_class):
        """A completed batch returns the summary dict."""
        mock_service_class.return_value.process_pending.return_value = (
            DispatchSummary(
                message="Processed 2 notifications",
                details=DispatchDetails(total=2, success=2, failed=0),
            )
        )

        result = process_push_queue_job(batch_size=5)

        mock_service_class.assert_called_once_with(batch_size=5)
        self.assertEqual(
            result,
            {
                "success": True,
                "message": "Processed 2 notifications",
                "details": {"total": 2, "success": 2, "failed": 0},
            },
        )

    def test_run_in_progress(self, mock_service_class):
        """A held lease is reported, not raised."""
        mock_service_class.return_value.process_pending.side_effect = (
            DispatchInProgressError()
        )

        result = process_push_queue_job()

        self.assertEqual(
            result, {"success": False, "error": "Push dispatch already in progress"}
        )

    def test_gateway_error(self, mock_service_class):
        """Gateway credential problems are reported, not raised."""
        mock_service_class.return_value.process_pending.side_effect = (
            GatewayConfigurationError("FCM_SERVER_KEY not found")
        )

        result = process_push_queue_job()

        self.assertFalse(result["success"])
        self.assertIn("FCM_SERVER_KEY", result["error"])

    def test_unexpected_error_propagates(self, mock_service_class):
        """Anything else fails the job so RQ records it."""
        mock_service_class.return_value.process_pending.side_effect = RuntimeError(
            "db down"
        )

        with self.assertRaises(RuntimeError):
            process_push_queue_job()
