#!/usr/bin/env python
"""Start the push relay on the Django development server."""

import os
import sys

from django.core.management import execute_from_command_line


def main():
    """Run ``runlocal`` against the default settings module."""
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "push_service.settings")
    execute_from_command_line([sys.argv[0], "runlocal", *sys.argv[1:]])


if __name__ == "__main__":
    main()
