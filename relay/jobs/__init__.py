"""Background jobs for the relay app."""
