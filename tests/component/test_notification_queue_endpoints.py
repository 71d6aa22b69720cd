"""Component tests for queuing notifications and queue statistics."""

import uuid
from unittest.mock import patch

from django.test import override_settings

from relay.models import PushNotificationRequest
from tests.base import BaseComponentTest
from tests.factories import auth_header, create_device_token, create_notification

QUEUE_URL = "/api/v1/push/notifications"
STATS_URL = "/api/v1/push/stats"


class TestPushNotificationQueueEndpoint(BaseComponentTest):
    """Component tests for POST /notifications."""

    def setUp(self):
        """Set up a notification body."""
        super().setUp()
        self.agent_id = uuid.uuid4()
        self.body = {
            "agentId": str(self.agent_id),
            "title": "New message",
            "body": "A visitor is waiting",
            "data": {"conversationId": "c1"},
        }

    def _post(self, body, *scopes):
        return self.client.post(
            QUEUE_URL,
            data=body,
            content_type="application/json",
            **auth_header(*(scopes or ("push:send",))),
        )

    def test_queue_notification(self):
        """A pending row is created and returned with 201."""
        response = self._post(self.body)

        self.assertEqual(response.status_code, 201)
        data = response.json()
        self.assertEqual(data["status"], "pending")
        self.assertFalse(data["dispatch_scheduled"])
        row = PushNotificationRequest.objects.get(pk=data["id"])
        self.assertEqual(row.agent_id, self.agent_id)
        self.assertEqual(row.data, {"conversationId": "c1"})
        self.assertEqual(row.max_retries, 3)

    @override_settings(PUSH_AUTO_DISPATCH=True)
    @patch("relay.services.queue_service.django_rq.get_queue")
    def test_queue_with_auto_dispatch(self, mock_get_queue):
        """With auto dispatch on, the response says a job was scheduled."""
        response = self._post(self.body)

        self.assertEqual(response.status_code, 201)
        self.assertTrue(response.json()["dispatch_scheduled"])
        mock_get_queue.return_value.enqueue.assert_called_once()

    def test_invalid_retry_allowance(self):
        """max_retries outside 1..10 is a 400."""
        response = self._post({**self.body, "maxRetries": 50})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(PushNotificationRequest.objects.count(), 0)

    def test_empty_title(self):
        """An empty title is a 400."""
        response = self._post({**self.body, "title": "  "})

        self.assertEqual(response.status_code, 400)

    def test_requires_send_scope(self):
        """The device scope alone is not enough."""
        response = self._post(self.body, "push:device")

        self.assertEqual(response.status_code, 403)


class TestQueueStatsEndpoint(BaseComponentTest):
    """Component tests for GET /stats."""

    def test_stats(self):
        """Operators see the queue breakdown."""
        agent_id = uuid.uuid4()
        create_device_token(agent_id, "token-a")
        create_notification(agent_id)
        create_notification(
            agent_id, status="failed", error_message="All device tokens failed"
        )

        response = self.client.get(STATS_URL, **auth_header("push:admin"))

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["total"], 2)
        self.assertEqual(
            data["status_breakdown"], {"pending": 1, "sent": 0, "failed": 1}
        )
        self.assertEqual(data["failed_by_error"], {"All device tokens failed": 1})
        self.assertEqual(data["active_device_tokens"], 1)

    def test_requires_admin_scope(self):
        """Senders cannot read statistics."""
        response = self.client.get(STATS_URL, **auth_header("push:send"))

        self.assertEqual(response.status_code, 403)

    @override_settings(OAUTH2_SERVICE_ENABLED=False)
    def test_open_when_oauth_disabled(self):
        """Local development runs without tokens."""
        response = self.client.get(STATS_URL)

        self.assertEqual(response.status_code, 200)
