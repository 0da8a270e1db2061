"""Pytest fixtures for worktree-kit tests"""
import json
import tempfile
from pathlib import Path

import git
import pytest

from fakes import FakeFilesystem, FakeGit, FakeShell
from worktree_kit.constants import CONFIG_FILENAME
from worktree_kit.models import HookContext, Worktree

ROOT = "/fake/project"
CONFIG_PATH = f"{ROOT}/{CONFIG_FILENAME}"


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def config_json():
    """Serialized config with a copy list and no hooks."""
    return json.dumps({"rootDir": "../worktrees", "copy": [".env"]})


@pytest.fixture
def main_worktree():
    return Worktree(path=ROOT, branch="main", head="a" * 40, is_main=True)


@pytest.fixture
def fake_git(main_worktree):
    """Fake git positioned in the main worktree of /fake/project."""
    return FakeGit(root=ROOT, worktrees=[main_worktree], branches=["main"])


@pytest.fixture
def fake_fs(config_json):
    """Fake filesystem holding a config and a .env file."""
    return FakeFilesystem(files={CONFIG_PATH: config_json, f"{ROOT}/.env": "SECRET=123"}, cwd=ROOT)


@pytest.fixture
def fake_shell():
    return FakeShell()


@pytest.fixture
def hook_context():
    return HookContext(
        worktree_path="/fake/worktrees/feat-x",
        branch="feat-x",
        repo_root=ROOT,
    )


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository for testing."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    test_file = repo_path / "README.md"
    test_file.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    # Rename master to main if needed
    try:
        repo.git.branch('-M', 'main')
    except Exception:
        pass

    yield repo

    repo.close()


@pytest.fixture
def git_repo_with_branches(git_repo):
    """Repository with a merged branch and an unmerged branch."""
    repo = git_repo
    repo_path = Path(repo.working_dir)

    repo.git.branch('merged-branch')

    repo.git.checkout('-b', 'unmerged-branch')
    feature_file = repo_path / "feature.txt"
    feature_file.write_text("Feature content\n")
    repo.index.add(["feature.txt"])
    repo.index.commit("Add feature")

    repo.git.checkout('main')

    yield repo
