"""Pytest configuration and shared fixtures."""

import os

import django
from django.core.cache import cache
from django.test import Client

import pytest

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "push_service.settings_test")
django.setup()


@pytest.fixture
def api_client():
    """Provide Django test client."""
    return Client()


@pytest.fixture(autouse=True)
def clear_cache():
    """Start each test without a leftover dispatch lease."""
    cache.clear()
    yield
    cache.clear()
