"""Unit tests for the WSGI/ASGI modules and the server start scripts."""

import sys
import unittest
from io import StringIO
from unittest.mock import patch

import run_local
import start_server
from push_service import asgi, wsgi
from relay.management.commands.runlocal import Command as RunLocalCommand


class TestApplicationModules(unittest.TestCase):
    """Tests for the WSGI and ASGI configuration modules."""

    def test_wsgi_application_is_created(self):
        """The WSGI application object exists."""
        self.assertIsNotNone(wsgi.application)

    def test_asgi_application_is_created(self):
        """The ASGI application object exists."""
        self.assertIsNotNone(asgi.application)


class TestStartServer(unittest.TestCase):
    """Tests for start_server script."""

    @patch("start_server.run")
    def test_main_runs_gunicorn_with_wsgi_app(self, mock_run):
        """main() points Gunicorn at the project's WSGI application."""
        with patch.object(sys, "argv", ["start_server.py"]):
            start_server.main()
            argv = list(sys.argv)

        mock_run.assert_called_once()
        self.assertEqual(argv[0], "gunicorn")
        self.assertIn("push_service.wsgi:application", argv)

    @patch.dict("os.environ", {"PORT": "9100", "GUNICORN_WORKERS": "4"})
    @patch("start_server.run")
    def test_main_reads_environment(self, _mock_run):
        """Port and worker count come from the environment."""
        with patch.object(sys, "argv", ["start_server.py"]):
            start_server.main()
            argv = list(sys.argv)

        self.assertIn("0.0.0.0:9100", argv)
        self.assertEqual(argv[argv.index("--workers") + 1], "4")


class TestRunLocal(unittest.TestCase):
    """Tests for run_local script."""

    @patch("run_local.execute_from_command_line")
    def test_main_runs_runlocal_command(self, mock_execute):
        """main() delegates to the runlocal management command."""
        with patch.object(sys, "argv", ["run_local.py", "8080"]):
            run_local.main()

        mock_execute.assert_called_once_with(["run_local.py", "runlocal", "8080"])

    def test_runlocal_skips_migration_check(self):
        """The platform owned tables are not checked for migrations."""
        out = StringIO()
        command = RunLocalCommand(stdout=out)

        command.check_migrations()

        self.assertIn("Not checking migrations", out.getvalue())


if __name__ == "__main__":
    unittest.main()
