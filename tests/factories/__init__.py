"""Helpers creating queue rows, device tokens and credentials for tests."""

import uuid
from datetime import timedelta
from functools import lru_cache

from django.conf import settings
from django.utils import timezone

import jwt
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from faker import Faker

from relay.models import AgentDeviceToken, PushNotificationRequest

fake = Faker()


def create_notification(agent_id=None, age_seconds=0, **overrides):
    """Create a pending queue row, ``age_seconds`` older than now."""
    values = {
        "agent_id": agent_id or uuid.uuid4(),
        "title": fake.sentence(nb_words=4),
        "body": fake.text(max_nb_chars=120),
        "data": {"conversation_id": fake.uuid4()},
        "status": "pending",
        "retry_count": 0,
        "max_retries": 3,
        "created_at": timezone.now() - timedelta(seconds=age_seconds),
    }
    values.update(overrides)
    return PushNotificationRequest.objects.create(**values)


def create_device_token(agent_id, device_token=None, **overrides):
    """Register an active device token for ``agent_id``."""
    values = {
        "agent_id": agent_id,
        "device_token": device_token or f"fcm-token-{uuid.uuid4().hex}",
        "platform": "android",
        "is_active": True,
    }
    values.update(overrides)
    return AgentDeviceToken.objects.create(**values)


@lru_cache(maxsize=1)
def rsa_key_pair():
    """Return a (private PEM, public PEM) pair, generated once per run."""
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()
    public_pem = (
        key.public_key()
        .public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        .decode()
    )
    return private_pem, public_pem


def make_access_token(scopes=("push:send",), subject="scheduler", **claims):
    """Sign an inbound access token with the test JWT secret."""
    now = timezone.now()
    payload = {
        "sub": subject,
        "client_id": "support-console",
        "type": "access_token",
        "iat": now,
        "exp": now + timedelta(minutes=5),
    }
    if scopes is not None:
        payload["scopes"] = list(scopes)
    payload.update(claims)
    return jwt.encode(payload, settings.JWT_SECRET, algorithm="HS256")


def auth_header(*scopes):
    """Return Django test client kwargs carrying a bearer token."""
    return {"HTTP_AUTHORIZATION": f"Bearer {make_access_token(scopes=scopes)}"}
