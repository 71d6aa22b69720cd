"""Unit tests for exception handlers."""

import unittest
from unittest.mock import Mock, patch

from django.core.exceptions import PermissionDenied
from django.http import Http404

from rest_framework import status
from rest_framework.exceptions import NotAuthenticated, NotFound, ValidationError
from rest_framework.views import APIView

from relay.exceptions import (
    DeviceTokenNotFoundError,
    DispatchInProgressError,
    GatewayAuthenticationError,
    GatewayConfigurationError,
)
from relay.exceptions.handlers import custom_exception_handler


class TestCustomExceptionHandler(unittest.TestCase):
    """Test cases for custom exception handler."""

    def setUp(self):
        """Set up test fixtures."""
        self.mock_request = Mock()
        self.mock_request.path = "/api/v1/push/devices"
        self.mock_request.method = "POST"
        self.mock_request.META = {"REMOTE_ADDR": "127.0.0.1"}

        self.mock_view = Mock(spec=APIView)
        self.mock_view.request = self.mock_request

        self.context = {"view": self.mock_view, "request": self.mock_request}

    @patch("relay.exceptions.handlers.get_request_id")
    def test_handles_drf_not_found_exception(self, mock_get_request_id):
        """DRF NotFound keeps its status and gets the request id."""
        mock_get_request_id.return_value = "test-request-id"

        response = custom_exception_handler(NotFound("missing"), self.context)

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response["X-Request-ID"], "test-request-id")

    @patch("relay.exceptions.handlers.get_request_id")
    def test_handles_drf_validation_error(self, mock_get_request_id):
        """DRF ValidationError is a 400."""
        mock_get_request_id.return_value = "test-request-id"

        response = custom_exception_handler(
            ValidationError("Invalid data"), self.context
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    @patch("relay.exceptions.handlers.get_request_id")
    def test_handles_not_authenticated(self, mock_get_request_id):
        """Missing credentials are a 401."""
        mock_get_request_id.return_value = None

        response = custom_exception_handler(NotAuthenticated(), self.context)

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    @patch("relay.exceptions.handlers.get_request_id")
    def test_device_token_not_found(self, mock_get_request_id):
        """Unknown device tokens are a 404 with the standard body."""
        mock_get_request_id.return_value = "test-request-id"

        response = custom_exception_handler(
            DeviceTokenNotFoundError("abcdefghijklmnopqrstuvwxyz"), self.context
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["status"], 404)
        self.assertEqual(response.data["request_id"], "test-request-id")
        self.assertIn("abcdefghijklmnopqrst...", response.data["message"])
        self.assertNotIn("uvwxyz", response.data["message"])
        self.assertIn("timestamp", response.data)

    @patch("relay.exceptions.handlers.get_request_id")
    def test_dispatch_in_progress(self, mock_get_request_id):
        """A held dispatch lease is a 409."""
        mock_get_request_id.return_value = "test-request-id"

        response = custom_exception_handler(DispatchInProgressError(), self.context)

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["message"], "Push dispatch already in progress")

    @patch("relay.exceptions.handlers.get_request_id")
    def test_gateway_configuration_error_hides_details(self, mock_get_request_id):
        """Configuration problems are a 503 with a generic message."""
        mock_get_request_id.return_value = "test-request-id"

        response = custom_exception_handler(
            GatewayConfigurationError("private key for push@example.com is bad"),
            self.context,
        )

        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertNotIn("push@example.com", response.data["message"])

    @patch("relay.exceptions.handlers.get_request_id")
    def test_gateway_authentication_error(self, mock_get_request_id):
        """Token exchange failures are a 502."""
        mock_get_request_id.return_value = "test-request-id"

        response = custom_exception_handler(
            GatewayAuthenticationError("invalid_grant", status_code=400),
            self.context,
        )

        self.assertEqual(response.status_code, status.HTTP_502_BAD_GATEWAY)

    @patch("relay.exceptions.handlers.get_request_id")
    def test_handles_django_http404(self, mock_get_request_id):
        """Django Http404 is a 404."""
        mock_get_request_id.return_value = "test-request-id"

        response = custom_exception_handler(Http404("Page not found"), self.context)

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertIsInstance(response.data, dict)

    @patch("relay.exceptions.handlers.get_request_id")
    def test_handles_django_permission_denied(self, mock_get_request_id):
        """Django PermissionDenied is a 403."""
        mock_get_request_id.return_value = "test-request-id"

        response = custom_exception_handler(
            PermissionDenied("Access denied"), self.context
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    @patch("relay.exceptions.handlers.get_request_id")
    def test_handles_unexpected_exception(self, mock_get_request_id):
        """Unexpected exceptions return 500 without their message."""
        mock_get_request_id.return_value = "test-request-id"

        response = custom_exception_handler(
            RuntimeError("connection string with password"), self.context
        )

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data["status"], 500)
        self.assertIn("internal server error", response.data["message"].lower())
        self.assertNotIn("password", response.data["message"])

    @patch("relay.exceptions.handlers.get_request_id")
    @patch("relay.exceptions.handlers.logger")
    def test_logs_exception_details(self, mock_logger, mock_get_request_id):
        """Exception details are logged."""
        mock_get_request_id.return_value = "test-request-id"

        custom_exception_handler(RuntimeError("Test error"), self.context)

        self.assertTrue(mock_logger.log.called)

    @patch("relay.exceptions.handlers.get_request_id")
    def test_without_view(self, mock_get_request_id):
        """The handler copes with a context lacking the view."""
        mock_get_request_id.return_value = None

        response = custom_exception_handler(RuntimeError("boom"), {})

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertNotIn("X-Request-ID", response)


if __name__ == "__main__":
    unittest.main()
