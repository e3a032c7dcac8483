import io
import logging
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest.mock import patch

from podcast_sync.__main__ import main


class CliTestCase(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

        logging_patch = patch(
            "podcast_sync.__main__.setup_logging",
            return_value=logging.getLogger("podcast_sync"),
        )
        logging_patch.start()
        self.addCleanup(logging_patch.stop)

    def tearDown(self):
        self._tmp.cleanup()

    def run_main(self, argv):
        stdout, stderr = io.StringIO(), io.StringIO()
        with redirect_stdout(stdout), redirect_stderr(stderr):
            try:
                code = main(argv)
            except SystemExit as e:
                code = e.code
        return code, stdout.getvalue(), stderr.getvalue()


class TestUsage(CliTestCase):
    def test_help_exits_zero(self):
        code, out, _ = self.run_main(["--help"])
        assert code == 0
        assert "--update" in out

    def test_short_help(self):
        code, _, _ = self.run_main(["-h"])
        assert code == 0

    def test_missing_action_exits_one(self):
        code, _, err = self.run_main([])
        assert code == 1
        assert "usage" in err

    def test_unknown_argument_exits_one(self):
        code, _, err = self.run_main(["--frobnicate"])
        assert code == 1
        assert "usage" in err


class TestUpdate(CliTestCase):
    def test_missing_configuration_exits_one(self):
        code, _, err = self.run_main(["--update", "--config", str(self.root / "none.ini")])
        assert code == 1
        assert "not readable" in err

    def test_no_configuration_found(self):
        env = {
            "HOME": str(self.root),
            "XDG_CONFIG_HOME": str(self.root / "xdg"),
            "XDG_CONFIG_DIRS": str(self.root / "xdg_dirs"),
        }
        old_cwd = os.getcwd()
        os.chdir(self.root)
        try:
            with patch.dict(os.environ, env):
                code, _, err = self.run_main(["-u"])
        finally:
            os.chdir(old_cwd)
        assert code == 1
        assert "Configuration file not found" in err

    @patch("podcast_sync.pipeline.orchestrator.fetch_listing", return_value=[])
    def test_update_runs_every_feed(self, mock_listing):
        config = self.root / "podcast.ini"
        config.write_text(
            f"[global]\nmedia = {self.root / 'media'}\nfeeds = one two\n\n"
            "[one]\nurl = http://h/one.xml\n\n[two]\nurl = http://h/two.xml\nname = Two\n"
        )

        code, out, _ = self.run_main(["--update", "--config", str(config)])

        assert code == 0
        assert "Updating feed one..." in out
        assert "Updating feed Two..." in out
        assert mock_listing.call_count == 2
        assert (self.root / "media" / "two").is_dir()


if __name__ == "__main__":
    unittest.main()
