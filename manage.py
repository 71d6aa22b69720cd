#!/usr/bin/env python
"""Django's command-line utility for the push relay service."""

import os
import sys

from django.core.management import execute_from_command_line


def main():
    """Run administrative tasks such as ``process_push_notifications``."""
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "push_service.settings")
    execute_from_command_line(sys.argv)


if __name__ == "__main__":
    main()
