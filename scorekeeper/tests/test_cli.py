"""
CLI Test Suite

Parser wiring and command dispatch. Store access is mocked out.
"""
from unittest.mock import patch

import pytest

from scorekeeper.cli import main, create_parser
from scorekeeper.cli.db_commands import DbCommand, TeamsCommand
from scorekeeper.cli.scoring_commands import ScoresCommand


# =============================================================================
# CLI Parser Tests
# =============================================================================

class TestCLIParser:
    """Test CLI argument parsing."""

    def test_db_init_parsing(self):
        args = create_parser().parse_args(["db", "init"])
        assert args.command == "db"
        assert args.db_action == "init"

    def test_teams_init_parsing(self):
        args = create_parser().parse_args(["teams", "init"])
        assert args.teams_action == "init"

    def test_scores_reset_parsing(self):
        args = create_parser().parse_args(["scores", "reset", "--yes"])
        assert args.scores_action == "reset"
        assert args.yes is True

    def test_global_flags(self):
        args = create_parser().parse_args(["--dry-run", "--log-level", "DEBUG", "scores", "verify"])
        assert args.dry_run is True
        assert args.log_level == "DEBUG"

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args(["--version"])
        assert exc_info.value.code == 0
        assert "scorekeeper" in capsys.readouterr().out


# =============================================================================
# Command Handler Tests
# =============================================================================

class TestCommands:
    """Test command dispatch without touching the database."""

    def test_no_command_prints_help(self):
        assert main([]) == 1

    def test_db_init_dry_run(self, capsys):
        assert main(["--dry-run", "db", "init"]) == 0
        assert "[DRY RUN]" in capsys.readouterr().out

    def test_reset_requires_confirmation(self, capsys):
        assert main(["scores", "reset"]) == 1
        assert "--yes" in capsys.readouterr().out

    def test_reset_dry_run(self):
        assert main(["--dry-run", "scores", "reset", "--yes"]) == 0

    def test_unknown_action(self):
        args = create_parser().parse_args(["scores"])
        assert ScoresCommand().execute(args) == 1
        args = create_parser().parse_args(["db"])
        assert DbCommand().execute(args) == 1
        args = create_parser().parse_args(["teams"])
        assert TeamsCommand().execute(args) == 1

    def test_verify_reports_mismatches(self, capsys):
        report = {
            "consistent": False,
            "teams_checked": 4,
            "participants_checked": 0,
            "mismatches": [{"type": "team", "id": 1, "name": "Onça", "stored": 0, "expected": 6}],
        }
        with patch.object(ScoresCommand, "_run", return_value=report):
            assert main(["scores", "verify"]) == 2
        out = capsys.readouterr().out
        assert "stored=0 expected=6" in out

    def test_verify_consistent(self):
        report = {"consistent": True, "teams_checked": 4, "participants_checked": 2, "mismatches": []}
        with patch.object(ScoresCommand, "_run", return_value=report):
            assert main(["scores", "verify"]) == 0

    def test_stats_prints_json(self, capsys):
        with patch.object(ScoresCommand, "_run", return_value={"total_entries": 0, "judges": []}):
            assert main(["scores", "stats"]) == 0
        assert '"total_entries": 0' in capsys.readouterr().out

    def test_failure_is_reported(self, capsys):
        with patch.object(ScoresCommand, "_run", side_effect=RuntimeError("no such table")):
            assert main(["scores", "rebuild"]) == 1
        assert "no such table" in capsys.readouterr().out
