"""
Tests for the monohooks command line.
"""

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from conftest import git, write_package
from monohooks.cli import build_parser, collect_changed_files, main
from monohooks.configs import HookEvent, get_config_path
from monohooks.exceptions import NoCommitsError, NoStagedFilesError


@pytest.fixture
def monorepo(temp_git_repo: Path) -> Path:
    """Repository with a web package whose pre-commit task leaves a marker."""
    write_package(temp_git_repo, "web", {"pre-commit": ["echo ran > marker.txt"]})
    git(temp_git_repo, "add", ".")
    return temp_git_repo


class TestCollectChangedFiles:
    """Tests for collect_changed_files."""

    def test_pre_commit_uses_staged_files(self):
        repo = MagicMock()
        repo.get_staged_files.return_value = ["web/a.js"]

        assert collect_changed_files(HookEvent.PRE_COMMIT, repo, []) == ["web/a.js"]

    def test_nothing_staged_is_empty_list(self):
        repo = MagicMock()
        repo.get_staged_files.side_effect = NoStagedFilesError("/repo")

        assert collect_changed_files(HookEvent.PRE_COMMIT, repo, []) == []

    def test_pre_push_uses_remote_argument(self):
        repo = MagicMock()
        repo.get_branch.return_value = "main"
        repo.get_committed_files.return_value = ["api/server.js"]

        files = collect_changed_files(HookEvent.PRE_PUSH, repo, ["upstream", "git@host:repo.git"])

        assert files == ["api/server.js"]
        repo.get_committed_files.assert_called_once_with("upstream", "main")

    def test_pre_push_defaults_to_origin(self):
        repo = MagicMock()
        repo.get_branch.return_value = "main"
        repo.get_committed_files.side_effect = NoCommitsError("/repo", "main")

        assert collect_changed_files(HookEvent.PRE_PUSH, repo, []) == []
        repo.get_committed_files.assert_called_once_with("origin", "main")

    def test_post_checkout_compares_heads(self):
        repo = MagicMock()
        assert collect_changed_files(HookEvent.POST_CHECKOUT, repo, ["abc", "def", "1"]) is True
        assert collect_changed_files(HookEvent.POST_CHECKOUT, repo, ["abc", "abc", "1"]) is False

    def test_other_events_always_changed(self):
        repo = MagicMock()
        assert collect_changed_files(HookEvent.POST_MERGE, repo, ["0"]) is True
        assert collect_changed_files(HookEvent.POST_COMMIT, repo, []) is True
        repo.get_staged_files.assert_not_called()


class TestRunCommand:
    """Tests for `monohooks run`."""

    def test_pre_commit_success(self, monorepo: Path):
        assert main(["--cwd", str(monorepo), "run", "pre-commit"]) == 0
        assert (monorepo / "web" / "marker.txt").read_text().strip() == "ran"

    def test_pre_commit_failure_exits_non_zero(self, monorepo: Path):
        write_package(monorepo, "api", {"pre-commit": ["exit 2"]})
        git(monorepo, "add", ".")

        assert main(["--cwd", str(monorepo), "run", "pre-commit"]) == 1
        # api sorts before web, so web never runs
        assert not (monorepo / "web" / "marker.txt").exists()

    def test_non_ascii_staged_file_matches_file_type(self, temp_git_repo: Path):
        git(temp_git_repo, "config", "core.quotePath", "true")
        write_package(temp_git_repo, "", {"restrictions": {"fileTypes": ["js"]}, "pre-commit": ["exit 3"]})
        (temp_git_repo / "café.js").write_text("1")
        git(temp_git_repo, "add", "café.js")

        assert main(["--cwd", str(temp_git_repo), "run", "pre-commit"]) == 1

    def test_nothing_staged(self, monorepo: Path):
        git(monorepo, "commit", "-m", "add web")

        assert main(["--cwd", str(monorepo), "run", "pre-commit"]) == 0
        assert not (monorepo / "web" / "marker.txt").exists()

    def test_post_checkout_same_head_runs_nothing(self, temp_git_repo: Path):
        write_package(temp_git_repo, "web", {"post-checkout": ["echo ran > marker.txt"]})

        assert main(["--cwd", str(temp_git_repo), "run", "post-checkout", "abc", "abc", "1"]) == 0
        assert not (temp_git_repo / "web" / "marker.txt").exists()

    def test_post_checkout_new_head_runs_tasks(self, temp_git_repo: Path):
        write_package(temp_git_repo, "web", {"post-checkout": ["echo ran > marker.txt"]})

        assert main(["--cwd", str(temp_git_repo), "run", "post-checkout", "abc", "def", "1"]) == 0
        assert (temp_git_repo / "web" / "marker.txt").exists()

    def test_commit_msg_event(self, temp_git_repo: Path):
        write_package(temp_git_repo, "web", {"commit-msg": "^JIRA-\\d+"})
        message_file = temp_git_repo / ".git" / "COMMIT_EDITMSG"

        message_file.write_text("JIRA-3 add login\n# comment\n")
        assert main(["--cwd", str(temp_git_repo), "run", "commit-msg", str(message_file)]) == 0

        message_file.write_text("add login\n")
        assert main(["--cwd", str(temp_git_repo), "run", "commit-msg", str(message_file)]) == 1

    def test_commit_msg_relative_file(self, temp_git_repo: Path):
        write_package(temp_git_repo, "web", {"commit-msg": "^JIRA-\\d+"})
        (temp_git_repo / ".git" / "COMMIT_EDITMSG").write_text("JIRA-3 add login\n")

        assert main(["--cwd", str(temp_git_repo), "run", "commit-msg", ".git/COMMIT_EDITMSG"]) == 0

    def test_commit_msg_missing_file(self, temp_git_repo: Path):
        assert main(["--cwd", str(temp_git_repo), "run", "commit-msg", "missing.txt"]) == 1

    def test_outside_repository(self, temp_dir: Path):
        assert main(["--cwd", str(temp_dir), "run", "pre-commit"]) == 1

    def test_unknown_event_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["run", "pre-rebase"])


class TestListCommand:
    """Tests for `monohooks list`."""

    def test_lists_packages(self, temp_git_repo: Path, capsys):
        write_package(temp_git_repo, "", None)
        write_package(temp_git_repo, "web", {"pre-commit": ["npm test"]})
        write_package(temp_git_repo, "legacy", {"enabled": False})

        assert main(["--cwd", str(temp_git_repo), "list"]) == 0

        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == f".\t{temp_git_repo.name}\tno config"
        assert lines[1] == "legacy\tlegacy\tdisabled; tasks: none"
        assert lines[2] == "web\tweb\tenabled; tasks: pre-commit"

    def test_no_packages(self, temp_git_repo: Path, capsys):
        assert main(["--cwd", str(temp_git_repo), "list"]) == 0
        assert "No package.json found" in capsys.readouterr().out


class TestInitCommand:
    """Tests for `monohooks init`."""

    def test_adds_config_section(self, temp_dir: Path, capsys):
        write_package(temp_dir, "web", None)

        assert main(["init", str(temp_dir / "web")]) == 0

        manifest = json.loads((temp_dir / "web" / "package.json").read_text())
        assert manifest["monohooks"]["enabled"] is True
        assert "Added 'monohooks' configuration" in capsys.readouterr().out
        assert get_config_path().is_file()

    def test_existing_section_kept(self, temp_dir: Path, capsys):
        write_package(temp_dir, "web", {"pre-commit": ["npm test"]})

        assert main(["init", str(temp_dir / "web")]) == 0
        assert "already has" in capsys.readouterr().out

    def test_missing_manifest(self, temp_dir: Path):
        assert main(["init", str(temp_dir)]) == 1

    def test_unparsable_manifest(self, temp_dir: Path):
        (temp_dir / "package.json").write_text("{broken")
        assert main(["--cwd", str(temp_dir), "init"]) == 1
