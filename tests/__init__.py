"""Test suite for the push relay service."""
