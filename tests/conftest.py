"""
Pytest fixtures for monohooks tests.
"""

import json
import logging
import subprocess
import sys
import tempfile
from pathlib import Path
from typing import Callable, Generator, Optional

import pytest

# Add project root to path for monohooks imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


@pytest.fixture(autouse=True)
def isolated_env(tmp_path_factory, monkeypatch):
    """Keep tests away from the developer's ~/.monohooks and env settings."""
    monkeypatch.setenv("MONOHOOKS_DATA_PATH", str(tmp_path_factory.mktemp("monohooks_data")))
    for name in ("MONOHOOKS_DEBUG", "MONOHOOKS_LOG_FILE", "MONOHOOKS_MANIFEST", "MONOHOOKS_CONFIG_KEY"):
        monkeypatch.delenv(name, raising=False)
    yield
    # Drop handlers setup_logging attached to streams captured for this test
    logger = logging.getLogger("monohooks")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


def git(repo: Path, *args: str) -> subprocess.CompletedProcess:
    return subprocess.run(["git", *args], cwd=repo, capture_output=True, text=True)


@pytest.fixture
def temp_git_repo(temp_dir: Path) -> Path:
    """Create a temporary git repository with one commit."""
    git(temp_dir, "init")
    git(temp_dir, "config", "user.email", "test@test.com")
    git(temp_dir, "config", "user.name", "Test User")
    git(temp_dir, "config", "commit.gpgsign", "false")

    # Create an initial commit
    test_file = temp_dir / "README.md"
    test_file.write_text("# Test Repo")
    git(temp_dir, "add", ".")
    git(temp_dir, "commit", "-m", "Initial commit")

    return temp_dir


def write_package(
    root: Path,
    relative: str,
    config: Optional[dict],
    key: str = "monohooks",
) -> Path:
    """Create a package.json (with a hook config section unless config is None)."""
    directory = root / relative if relative else root
    directory.mkdir(parents=True, exist_ok=True)
    manifest = {"name": directory.name, "version": "1.0.0"}
    if config is not None:
        manifest[key] = config
    (directory / "package.json").write_text(json.dumps(manifest, indent=2))
    return directory


@pytest.fixture
def make_package(temp_dir: Path) -> Callable[..., Path]:
    """Factory writing packages under temp_dir."""

    def _make(relative: str, config: Optional[dict] = None, key: str = "monohooks") -> Path:
        return write_package(temp_dir, relative, config, key)

    return _make


class FakeGit:
    """Stand-in git collaborator for dispatcher tests."""

    def __init__(self, root_dir: str, user: str = "Test User", commit_message: Optional[str] = "fix bug"):
        self.root_dir = root_dir
        self.user = user
        self.commit_message = commit_message
        self.commit_message_calls = 0

    def get_root_dir(self) -> str:
        return self.root_dir

    def get_username(self) -> str:
        return self.user

    def get_commit_message(self) -> Optional[str]:
        self.commit_message_calls += 1
        return self.commit_message


class RecordingRunner:
    """Task runner recording every call; exit codes looked up per command."""

    def __init__(self, exit_codes: Optional[dict[str, int]] = None):
        self.exit_codes = exit_codes or {}
        self.calls: list[tuple[str, str]] = []

    def __call__(self, command: str, cwd: str) -> int:
        self.calls.append((command, cwd))
        return self.exit_codes.get(command, 0)

    @property
    def commands(self) -> list[str]:
        return [command for command, _ in self.calls]


@pytest.fixture
def fake_git(temp_dir: Path) -> FakeGit:
    return FakeGit(str(temp_dir))


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()
