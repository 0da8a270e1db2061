"""Tests for copy manifest resolution and copying"""
from pathlib import Path

import git as git_module
import pytest

from fakes import FakeFilesystem
from worktree_kit.core import copy_files, is_git_metadata, is_glob_pattern, resolve_files_to_copy
from worktree_kit.models import FileToCopy, FilesystemError, FilesystemErrorCode, NotificationLevel
from worktree_kit.result import Ok
from worktree_kit.services import FilesystemService, GitService


@pytest.fixture
def repo_tree(temp_dir):
    """A source tree and an empty destination worktree on disk."""
    repo = temp_dir / "repo"
    worktree = temp_dir / "worktrees" / "feat"
    (repo / "config" / "nested").mkdir(parents=True)
    (repo / "config" / "db.json").write_text("{}")
    (repo / "config" / "api.json").write_text("{}")
    (repo / "config" / "readme.txt").write_text("docs")
    (repo / "config" / "nested" / "deep.json").write_text("{}")
    (repo / ".env").write_text("SECRET=1")
    (repo / ".gitignore").write_text("node_modules\n")
    (repo / "secrets").mkdir()
    (repo / "secrets" / "key.pem").write_text("key")
    worktree.mkdir(parents=True)
    return repo, worktree


class TestIsGlobPattern:

    @pytest.mark.parametrize("entry", ["*.json", "config/?.env", "[ab].txt", "{a,b}.env", "**/x"])
    def test_glob_entries(self, entry):
        assert is_glob_pattern(entry) is True

    @pytest.mark.parametrize("entry", [".env", "config/db.json", "secrets"])
    def test_literal_entries(self, entry):
        assert is_glob_pattern(entry) is False


class TestResolveFilesToCopy:
    """Resolution against a real directory tree."""

    def test_glob_matches_only_json_files(self, repo_tree):
        repo, worktree = repo_tree
        files, notifications = resolve_files_to_copy(["config/*.json"], str(repo), str(worktree), FilesystemService())

        assert [f.src for f in files] == [str(repo / "config" / "api.json"), str(repo / "config" / "db.json")]
        assert [f.dest for f in files] == [
            str(worktree / "config" / "api.json"),
            str(worktree / "config" / "db.json"),
        ]
        assert not any(f.is_directory for f in files)
        assert notifications == []

    def test_single_star_is_not_recursive(self, repo_tree):
        repo, worktree = repo_tree
        files, _ = resolve_files_to_copy(["config/*.json"], str(repo), str(worktree), FilesystemService())
        assert str(repo / "config" / "nested" / "deep.json") not in [f.src for f in files]

    def test_double_star_walks_subdirectories(self, repo_tree):
        repo, worktree = repo_tree
        files, _ = resolve_files_to_copy(["config/**/*.json"], str(repo), str(worktree), FilesystemService())

        assert [f.src for f in files] == [
            str(repo / "config" / "api.json"),
            str(repo / "config" / "db.json"),
            str(repo / "config" / "nested" / "deep.json"),
        ]
        assert files[2].dest == str(worktree / "config" / "nested" / "deep.json")

    def test_literal_and_overlapping_glob_deduplicate(self, repo_tree):
        repo, worktree = repo_tree
        files, _ = resolve_files_to_copy([".env", ".*"], str(repo), str(worktree), FilesystemService())

        assert [f.src for f in files] == [str(repo / ".env"), str(repo / ".gitignore")]

    def test_first_occurrence_wins(self, repo_tree):
        repo, worktree = repo_tree
        files, _ = resolve_files_to_copy(
            ["config/*.json", "config/db.json"], str(repo), str(worktree), FilesystemService()
        )
        assert [f.src for f in files] == [str(repo / "config" / "api.json"), str(repo / "config" / "db.json")]

    def test_unmatched_pattern_warns(self, repo_tree):
        repo, worktree = repo_tree
        files, notifications = resolve_files_to_copy(["*.nothing"], str(repo), str(worktree), FilesystemService())

        assert files == []
        assert len(notifications) == 1
        assert notifications[0].level is NotificationLevel.WARN
        assert "*.nothing" in notifications[0].message

    def test_literal_directory_detected(self, repo_tree):
        repo, worktree = repo_tree
        files, _ = resolve_files_to_copy(["secrets"], str(repo), str(worktree), FilesystemService())

        assert files == [FileToCopy(src=str(repo / "secrets"), dest=str(worktree / "secrets"), is_directory=True)]

    def test_brace_pattern(self, repo_tree):
        repo, worktree = repo_tree
        files, _ = resolve_files_to_copy(["config/{db,api}.json"], str(repo), str(worktree), FilesystemService())
        assert len(files) == 2

    def test_literal_entry_kept_even_when_missing(self, repo_tree):
        repo, worktree = repo_tree
        files, notifications = resolve_files_to_copy([".env.local"], str(repo), str(worktree), FilesystemService())

        assert files == [
            FileToCopy(src=str(repo / ".env.local"), dest=str(worktree / ".env.local"), is_directory=False)
        ]
        assert notifications == []


class TestResolveWithFakeFilesystem:
    """Resolution logic against the in-memory filesystem."""

    def test_glob_uses_repo_root_as_base(self):
        fs = FakeFilesystem(files={"/repo/a.env": "", "/other/b.env": ""})
        files, _ = resolve_files_to_copy(["*.env"], "/repo", "/wt", fs)

        assert fs.glob_calls == [("*.env", "/repo")]
        assert files == [FileToCopy(src="/repo/a.env", dest="/wt/a.env", is_directory=False)]

    def test_glob_match_can_be_directory(self):
        fs = FakeFilesystem(directories={"/repo/certs"}, files={"/repo/certs/a.pem": ""})
        files, _ = resolve_files_to_copy(["cert*"], "/repo", "/wt", fs)

        assert files == [FileToCopy(src="/repo/certs", dest="/wt/certs", is_directory=True)]

    def test_each_unmatched_pattern_warns_once(self):
        fs = FakeFilesystem()
        files, notifications = resolve_files_to_copy(["*.a", ".env", "*.b"], "/repo", "/wt", fs)

        assert [f.src for f in files] == ["/repo/.env"]
        assert [n.message for n in notifications] == [
            'No files matched pattern "*.a"',
            'No files matched pattern "*.b"',
        ]


class TestCopyFiles:
    """Test performing the copy."""

    def test_copies_files_and_directories(self, repo_tree):
        repo, worktree = repo_tree
        fs = FilesystemService()
        files, _ = resolve_files_to_copy([".env", "secrets", "config/*.json"], str(repo), str(worktree), fs)

        notifications = copy_files(files, fs)

        assert notifications == []
        assert (worktree / ".env").read_text() == "SECRET=1"
        assert (worktree / "secrets" / "key.pem").read_text() == "key"
        assert (worktree / "config" / "db.json").exists()

    def test_failure_warns_and_continues(self):
        error = FilesystemError(FilesystemErrorCode.PERMISSION_DENIED, "Permission denied", "/repo/.env")
        fs = FakeFilesystem(files={"/repo/.env": "x", "/repo/.npmrc": "y"}, copy_errors={"/repo/.env": error})
        files = [
            FileToCopy("/repo/.env", "/wt/.env", False),
            FileToCopy("/repo/.npmrc", "/wt/.npmrc", False),
        ]

        notifications = copy_files(files, fs)

        assert len(notifications) == 1
        assert notifications[0].level is NotificationLevel.WARN
        assert "/repo/.env" in notifications[0].message
        assert fs.copied == [("/repo/.npmrc", "/wt/.npmrc")]


class TestGitMetadataNeverCopied:
    """The .git entry of a worktree must never be copied into another one."""

    def test_dot_star_skips_git_dir(self, git_repo, temp_dir):
        repo_path = Path(git_repo.working_dir)
        (repo_path / ".env").write_text("SECRET=1")

        files, notifications = resolve_files_to_copy([".*"], str(repo_path), str(temp_dir / "wt"), FilesystemService())

        assert [f.src for f in files] == [str(repo_path / ".env")]
        assert notifications == []

    def test_copy_from_linked_worktree_keeps_new_worktree_branch(self, git_repo, temp_dir):
        repo_path = Path(git_repo.working_dir)
        linked = temp_dir / "worktrees" / "linked"
        new = temp_dir / "worktrees" / "newbr"
        assert isinstance(GitService(str(repo_path)).create_worktree("linked", str(linked)), Ok)
        (linked / ".env").write_text("SECRET=1")

        git = GitService(str(linked))
        assert isinstance(git.create_worktree("newbr", str(new)), Ok)
        fs = FilesystemService()
        files, _ = resolve_files_to_copy([".*"], str(linked), str(new), fs)

        assert copy_files(files, fs) == []
        assert (new / ".env").read_text() == "SECRET=1"
        new_repo = git_module.Repo(str(new))
        assert new_repo.active_branch.name == "newbr"
        new_repo.close()

    def test_glob_matches_inside_git_dir_are_dropped(self):
        fs = FakeFilesystem(
            files={"/repo/.git/config": "", "/repo/.git/HEAD": "", "/repo/app/settings.json": ""}
        )

        files, notifications = resolve_files_to_copy(["**/*"], "/repo", "/wt", fs)

        assert [f.src for f in files] == ["/repo/app/settings.json"]
        assert notifications == []

    def test_only_git_matches_counts_as_no_match(self):
        fs = FakeFilesystem(directories={"/repo/.git"})

        files, notifications = resolve_files_to_copy([".g*"], "/repo", "/wt", fs)

        assert files == []
        assert [n.message for n in notifications] == ['No files matched pattern ".g*"']

    def test_literal_git_entry_is_skipped(self):
        fs = FakeFilesystem(directories={"/repo/.git"})

        files, notifications = resolve_files_to_copy([".git", "./.git/hooks"], "/repo", "/wt", fs)

        assert files == []
        assert len(notifications) == 2
        assert all(n.level is NotificationLevel.WARN for n in notifications)

    @pytest.mark.parametrize("relative, expected", [
        (".git", True),
        (".git/hooks/pre-commit", True),
        ("sub/.git", True),
        (".gitignore", False),
        (".github/workflows/ci.yml", False),
    ])
    def test_is_git_metadata(self, relative, expected):
        assert is_git_metadata(relative) is expected
