"""Authentication and authorization for relay endpoints."""
