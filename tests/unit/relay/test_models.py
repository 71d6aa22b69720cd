"""Tests for the queue and device token models."""

import uuid

import pytest

from relay.models import AgentDeviceToken, PushNotificationRequest
from tests.factories import create_device_token, create_notification


@pytest.mark.django_db
class TestPushNotificationRequest:
    """Test suite for PushNotificationRequest."""

    @pytest.fixture
    def notification(self):
        """Create a pending notification."""
        return create_notification()

    def test_defaults(self):
        """New rows are pending with the default retry allowance."""
        notification = PushNotificationRequest.objects.create(
            agent_id=uuid.uuid4(), title="Hi", body="There"
        )
        assert notification.status == "pending"
        assert notification.retry_count == 0
        assert notification.max_retries == 3
        assert notification.processed_at is None

    def test_db_table(self):
        """The model maps onto the platform's queue table."""
        assert PushNotificationRequest._meta.db_table == "push_notification_queue"

    def test_mark_sent(self, notification):
        """mark_sent stamps processed_at and leaves retries alone."""
        notification.mark_sent()
        notification.refresh_from_db()

        assert notification.status == "sent"
        assert notification.processed_at is not None
        assert notification.retry_count == 0

    def test_mark_failed_keeps_retry_count(self, notification):
        """Terminal failures do not consume the retry allowance."""
        notification.mark_failed("No device tokens found")
        notification.refresh_from_db()

        assert notification.status == "failed"
        assert notification.error_message == "No device tokens found"
        assert notification.processed_at is not None
        assert notification.retry_count == 0

    def test_first_unexpected_error_requeues(self, notification):
        """First error with the default allowance puts the row back to pending."""
        requeued = notification.record_attempt_failure("connection reset")
        notification.refresh_from_db()

        assert requeued is True
        assert notification.status == "pending"
        assert notification.retry_count == 1
        assert notification.error_message == "connection reset"
        assert notification.processed_at is not None

    def test_error_exhausting_allowance_fails(self):
        """Reaching max_retries makes the failure terminal."""
        notification = create_notification(retry_count=2)

        requeued = notification.record_attempt_failure("boom")
        notification.refresh_from_db()

        assert requeued is False
        assert notification.status == "failed"
        assert notification.retry_count == 3

    def test_missing_retry_fields_use_defaults(self):
        """NULL retry_count counts as 0 and NULL max_retries as 3."""
        notification = create_notification(retry_count=None, max_retries=None)

        assert notification.effective_max_retries == 3
        assert notification.record_attempt_failure("boom") is True
        notification.refresh_from_db()
        assert notification.retry_count == 1
        assert notification.status == "pending"

    def test_zero_max_retries_uses_default(self):
        """A zero allowance is treated like an absent one."""
        notification = create_notification(max_retries=0)
        assert notification.effective_max_retries == 3

    def test_custom_allowance_of_one_fails_immediately(self):
        """With max_retries=1 the first error is terminal."""
        notification = create_notification(max_retries=1)

        assert notification.record_attempt_failure("boom") is False
        notification.refresh_from_db()
        assert notification.status == "failed"
        assert notification.retry_count == 1

    def test_repr(self, notification):
        """repr shows id, status and retries."""
        text = repr(notification)
        assert "PushNotificationRequest" in text
        assert "status=pending" in text


@pytest.mark.django_db
class TestAgentDeviceToken:
    """Test suite for AgentDeviceToken."""

    def test_db_table(self):
        """The model maps onto the platform's token table."""
        assert AgentDeviceToken._meta.db_table == "agent_device_tokens"

    def test_deactivate(self):
        """deactivate flips is_active without deleting the row."""
        token = create_device_token(uuid.uuid4())

        token.deactivate()
        token.refresh_from_db()

        assert token.is_active is False
        assert AgentDeviceToken.objects.filter(pk=token.pk).exists()

    def test_reactivate_rebinds_agent(self):
        """reactivate moves the token to the new agent and refreshes it."""
        token = create_device_token(uuid.uuid4(), is_active=False)
        new_agent = uuid.uuid4()

        token.reactivate(agent_id=new_agent, platform="ios", device_name="iPad")
        token.refresh_from_db()

        assert token.is_active is True
        assert token.agent_id == new_agent
        assert token.platform == "ios"
        assert token.device_name == "iPad"
        assert token.last_used_at is not None

    def test_reactivate_keeps_name_when_blank(self):
        """An empty device name does not overwrite the stored one."""
        token = create_device_token(uuid.uuid4(), device_name="Pixel 8")

        token.reactivate(agent_id=token.agent_id, platform="android")
        token.refresh_from_db()

        assert token.device_name == "Pixel 8"
