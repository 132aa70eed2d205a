"""Tests for the recyclip command line."""

import io
import json
import sys
import tempfile
import types
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest.mock import MagicMock, patch

from recyclip import cli
from recyclip.errors import DISPLAY_UNAVAILABLE_MESSAGE, DisplayUnavailableError
from recyclip.persistence import load_history, save_history


class CliTestCase(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.dir = Path(self._tmp.name)
        self.ini = self.dir / "settings.ini"
        self.history_path = self.dir / "history.json"
        self.static_path = self.dir / "static.txt"
        self.ini.write_text(
            "[general]\n"
            f"history_path = {self.history_path}\n"
            f"static_history_path = {self.static_path}\n",
            encoding="utf-8",
        )
        patcher = patch("recyclip.cli.setup_logging")
        patcher.start()
        self.addCleanup(patcher.stop)

    def run_cli(self, *argv, display=True):
        out, err = io.StringIO(), io.StringIO()
        with patch("recyclip.cli.display_available", return_value=display), \
                redirect_stdout(out), redirect_stderr(err):
            code = cli.main(["--config", str(self.ini), *argv])
        return code, out.getvalue(), err.getvalue()

    def fake_gdk_module(self, selections):
        module = types.ModuleType("recyclip.gdk_clipboard")
        module.GdkSelections = MagicMock(return_value=selections)
        return patch.dict(sys.modules, {"recyclip.gdk_clipboard": module})


class TestParser(CliTestCase):

    def test_no_command_prints_help(self):
        code, out, _ = self.run_cli()
        self.assertEqual(code, 2)
        self.assertIn("usage: recyclip", out)

    def test_help_command(self):
        code, out, _ = self.run_cli("help")
        self.assertEqual(code, 0)
        self.assertIn("daemon", out)
        self.assertIn("clear", out)

    def test_unknown_command(self):
        with self.assertRaises(SystemExit) as ctx, redirect_stderr(io.StringIO()):
            cli.main(["bogus"])
        self.assertEqual(ctx.exception.code, 2)


class TestPrintAndClear(CliTestCase):

    def test_print_lists_history_then_static(self):
        save_history(self.history_path, ("two\nlines", "older"))
        self.static_path.write_text("pinned\n", encoding="utf-8")
        code, out, _ = self.run_cli("print")
        self.assertEqual(code, 0)
        self.assertEqual(out.splitlines(), ["two\u00a0lines", "older", "pinned"])

    def test_print_works_without_display(self):
        save_history(self.history_path, ("x",))
        code, out, _ = self.run_cli("print", display=False)
        self.assertEqual(code, 0)
        self.assertEqual(out, "x\n")

    def test_clear(self):
        save_history(self.history_path, ("x", "y"))
        code, _, _ = self.run_cli("clear")
        self.assertEqual(code, 0)
        self.assertEqual(load_history(self.history_path), ())

    def test_clear_failure(self):
        with patch("recyclip.cli.clear_history", return_value=False):
            code, _, err = self.run_cli("clear")
        self.assertEqual(code, 1)
        self.assertIn("could not clear", err)

    def test_configuration_error(self):
        self.ini.write_text("[general]\nmax_history_length = 0\n", encoding="utf-8")
        code, _, err = self.run_cli("print")
        self.assertEqual(code, 1)
        self.assertIn("max_history_length", err)

    def test_settings_file_that_is_not_utf8(self):
        self.ini.write_bytes(b"[general]\nmax_history_length = \xff\xfe\n")
        code, _, err = self.run_cli("print")
        self.assertEqual(code, 1)
        self.assertIn("configuration error:", err)


class TestConfigCommands(CliTestCase):

    def test_show_paths_json(self):
        code, out, _ = self.run_cli("config", "show-paths", "--json")
        self.assertEqual(code, 0)
        paths = json.loads(out)
        self.assertEqual(paths["settings"], str(self.ini))
        self.assertEqual(paths["history"], str(self.history_path))
        self.assertEqual(paths["static_history"], str(self.static_path))

    def test_show(self):
        code, out, _ = self.run_cli("config", "show")
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(out)["general"]["max_history_length"], "25")


class TestDisplayCommands(CliTestCase):

    def test_daemon_without_display(self):
        code, _, err = self.run_cli("daemon", display=False)
        self.assertEqual(code, 1)
        self.assertIn(DISPLAY_UNAVAILABLE_MESSAGE, err)

    def test_copy_without_display(self):
        code, _, err = self.run_cli("copy", "x", display=False)
        self.assertEqual(code, 1)
        self.assertIn(DISPLAY_UNAVAILABLE_MESSAGE, err)

    def test_daemon_stops_when_display_goes_away(self):
        save_history(self.history_path, ("kept",))
        selections = MagicMock()
        selections.read.side_effect = DisplayUnavailableError()
        with self.fake_gdk_module(selections):
            code, _, err = self.run_cli("daemon")
        self.assertEqual(code, 1)
        self.assertIn(DISPLAY_UNAVAILABLE_MESSAGE, err)
        self.assertEqual(load_history(self.history_path), ("kept",))

    def test_copy_in_foreground_decodes_and_serves(self):
        selections = MagicMock()
        with self.fake_gdk_module(selections):
            code, _, _ = self.run_cli("copy", "--foreground", "a\u00a0b")
        self.assertEqual(code, 0)
        selections.write.assert_called_once_with("a\nb")
        selections.hold_ownership.assert_called_once_with()

    def test_print_with_selection_forks_and_returns(self):
        with patch("recyclip.cli.os.fork", return_value=4242) as fork:
            code, out, _ = self.run_cli("print", "chosen")
        self.assertEqual(code, 0)
        self.assertEqual(out, "")
        fork.assert_called_once_with()


if __name__ == "__main__":
    unittest.main()
