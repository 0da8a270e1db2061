"""Git adapter backed by GitPython."""

import os
import re
from typing import Any, Dict, List, Optional

import git

from worktree_kit.logging_config import get_logger
from worktree_kit.models import GitError, GitErrorCode, Worktree
from worktree_kit.ports import GitPort
from worktree_kit.result import Err, Ok, Result

logger = get_logger(__name__)

_STDERR_WRAPPER = re.compile(r"^stderr:\s*'(.*)'$", re.DOTALL)


def clean_stderr(error: git.exc.GitCommandError) -> str:
    """Extract the plain diagnostic text from a GitCommandError."""
    stderr = (error.stderr if hasattr(error, "stderr") else str(error)) or ""
    stderr = stderr.strip()
    match = _STDERR_WRAPPER.match(stderr)
    if match:
        stderr = match.group(1).strip()
    return stderr or str(error)


def classify_git_error(stderr: str) -> GitErrorCode:
    """Map git's diagnostic text onto an error code."""
    text = stderr.lower()
    if "not a git repository" in text:
        return GitErrorCode.NOT_A_REPO
    if "already checked out" in text or "is already used by worktree" in text:
        return GitErrorCode.BRANCH_EXISTS
    if re.search(r"a branch named .* already exists", text):
        return GitErrorCode.BRANCH_EXISTS
    if "already exists" in text:
        return GitErrorCode.WORKTREE_EXISTS
    if "not fully merged" in text:
        return GitErrorCode.BRANCH_NOT_MERGED
    if "not found" in text:
        return GitErrorCode.BRANCH_NOT_FOUND
    return GitErrorCode.UNKNOWN


def parse_worktree_porcelain(output: str) -> List[Worktree]:
    """Parse `git worktree list --porcelain` output.

    Format:
        worktree /path/to/worktree
        HEAD commit_sha
        branch refs/heads/branch-name
        (blank line between worktrees)

    The first entry is always the main worktree. Bare entries are skipped.
    """
    worktrees: List[Worktree] = []
    entries: List[Dict[str, Any]] = []
    current: Dict[str, Any] = {}

    for line in output.split("\n"):
        line = line.strip()
        if not line:
            if current:
                entries.append(current)
                current = {}
            continue

        if line.startswith("worktree "):
            if current:
                entries.append(current)
            current = {"path": line.split(" ", 1)[1]}
        elif line.startswith("HEAD "):
            current["HEAD"] = line.split(" ", 1)[1]
        elif line.startswith("branch "):
            branch_ref = line.split(" ", 1)[1]
            if branch_ref.startswith("refs/heads/"):
                current["branch"] = branch_ref[len("refs/heads/"):]
            else:
                current["branch"] = ""
        elif line.startswith("detached"):
            current["branch"] = ""
        elif line == "bare":
            current["bare"] = True

    if current:
        entries.append(current)

    for index, entry in enumerate(entries):
        if entry.get("bare") or not entry.get("path"):
            continue
        worktrees.append(
            Worktree(
                path=entry["path"],
                branch=entry.get("branch", ""),
                head=entry.get("HEAD", ""),
                is_main=index == 0,
            )
        )
    return worktrees


class GitService(GitPort):
    """Git capability implemented on top of GitPython."""

    def __init__(self, repo_path: Optional[str] = None):
        """Initialize the service.

        Args:
            repo_path: Any directory inside the repository (defaults to the cwd)
        """
        self.repo_path = repo_path or os.getcwd()

    def _get_repo(self) -> git.Repo:
        """Open the repository containing repo_path.

        GitPython repos are lightweight - they don't clone, just open the existing repo.
        """
        return git.Repo(self.repo_path, search_parent_directories=True)

    def _open(self) -> Result[git.Repo, GitError]:
        try:
            return Ok(self._get_repo())
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError):
            logger.debug(f"{self.repo_path} is not inside a git repository")
            return Err(GitError(GitErrorCode.NOT_A_REPO, "Not inside a git repository"))

    def _run(self, operation: str, *args: str, repo: Optional[git.Repo] = None) -> Result[str, GitError]:
        """Run `git <args>` and classify any failure."""
        if repo is None:
            opened = self._open()
            if isinstance(opened, Err):
                return opened
            repo = opened.value

        logger.debug(f"git {' '.join(args)}")
        try:
            output = repo.git.execute(["git", *args])
        except git.exc.GitCommandError as e:
            stderr = clean_stderr(e)
            code = classify_git_error(stderr)
            logger.debug(f"-> {code.value}: {stderr}")
            return Err(GitError(code, f"git {operation} failed: {stderr}"))
        return Ok(output.strip() if isinstance(output, str) else "")

    def is_repository(self) -> Result[bool, GitError]:
        try:
            self._get_repo()
            return Ok(True)
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError):
            return Ok(False)
        except Exception as e:
            return Err(GitError(GitErrorCode.UNKNOWN, f"Failed to check git repository: {e}"))

    def get_repository_root(self) -> Result[str, GitError]:
        opened = self._open()
        if isinstance(opened, Err):
            return opened
        repo = opened.value
        if repo.bare or repo.working_tree_dir is None:
            return Err(GitError(GitErrorCode.NOT_A_REPO, "Repository has no working tree"))
        return Ok(os.path.abspath(str(repo.working_tree_dir)))

    def get_main_worktree_root(self) -> Result[str, GitError]:
        opened = self._open()
        if isinstance(opened, Err):
            return opened
        common_dir = os.path.abspath(opened.value.common_dir)
        if os.path.basename(common_dir) == ".git":
            return Ok(os.path.dirname(common_dir))
        return Ok(common_dir)

    def list_worktrees(self) -> Result[List[Worktree], GitError]:
        result = self._run("worktree list", "worktree", "list", "--porcelain")
        if isinstance(result, Err):
            return result
        worktrees = parse_worktree_porcelain(result.value)
        logger.debug(f"Found {len(worktrees)} worktrees")
        for wt in worktrees:
            logger.debug(f"  {wt}")
        return Ok(worktrees)

    def list_branches(self) -> Result[List[str], GitError]:
        result = self._run("for-each-ref", "for-each-ref", "--format=%(refname:short)", "refs/heads")
        if isinstance(result, Err):
            return result
        return Ok([line.strip() for line in result.value.splitlines() if line.strip()])

    def list_remote_branches(self) -> Result[List[str], GitError]:
        """List remote branch names without their remote prefix."""
        result = self._run("for-each-ref", "for-each-ref", "--format=%(refname:short)", "refs/remotes")
        if isinstance(result, Err):
            return result

        branches: List[str] = []
        for line in result.value.splitlines():
            ref = line.strip()
            if "/" not in ref or ref.endswith("/HEAD"):
                continue
            name = ref.split("/", 1)[1]
            if name not in branches:
                branches.append(name)
        return Ok(branches)

    def branch_exists(self, branch: str) -> Result[bool, GitError]:
        opened = self._open()
        if isinstance(opened, Err):
            return opened
        result = self._run("show-ref", "show-ref", "--verify", "--quiet", f"refs/heads/{branch}", repo=opened.value)
        return Ok(isinstance(result, Ok))

    def _added_worktree(self, branch: str, path: str) -> Worktree:
        try:
            head = git.Repo(path).head.commit.hexsha
        except Exception as e:
            logger.debug(f"Could not read HEAD of new worktree {path}: {e}")
            head = ""
        return Worktree(path=path, branch=branch, head=head, is_main=False)

    def create_worktree(
        self, branch: str, path: str, base_branch: Optional[str] = None
    ) -> Result[Worktree, GitError]:
        path = os.path.abspath(path)
        exists = self.branch_exists(branch)
        if isinstance(exists, Err):
            return exists

        if exists.value and base_branch is None:
            # Check out the existing local branch
            args = ["worktree", "add", path, branch]
        else:
            args = ["worktree", "add", "-b", branch, path]
            if base_branch:
                args.append(base_branch)

        result = self._add_worktree(path, args)
        if isinstance(result, Err):
            return result

        logger.info(f"Created worktree for {branch} at {path}")
        return Ok(self._added_worktree(branch, path))

    def create_worktree_from_remote(self, branch: str, path: str, remote: str) -> Result[Worktree, GitError]:
        path = os.path.abspath(path)
        result = self._add_worktree(path, ["worktree", "add", "--track", "-b", branch, path, f"{remote}/{branch}"])
        if isinstance(result, Err):
            return result

        logger.info(f"Created worktree for {remote}/{branch} at {path}")
        return Ok(self._added_worktree(branch, path))

    def _add_worktree(self, path: str, args: List[str]) -> Result[str, GitError]:
        """Run `git worktree add`, removing any parent directories made for it if git fails."""
        created = []
        parent = os.path.dirname(path)
        while parent and not os.path.exists(parent):
            created.append(parent)
            parent = os.path.dirname(parent)
        os.makedirs(os.path.dirname(path), exist_ok=True)

        result = self._run("worktree add", *args)
        if isinstance(result, Err):
            # Deepest first
            for directory in created:
                try:
                    os.rmdir(directory)
                except OSError as e:
                    logger.debug(f"Could not remove {directory}: {e}")
                    break
        return result

    def remove_worktree(self, path: str, force: bool = False) -> Result[None, GitError]:
        args = ["worktree", "remove", path]
        if force:
            args.append("--force")
        result = self._run("worktree remove", *args)
        if isinstance(result, Err):
            return result
        logger.info(f"Removed worktree at {path}")
        return Ok(None)

    def delete_branch(self, branch: str) -> Result[None, GitError]:
        result = self._run("branch delete", "branch", "-d", branch)
        if isinstance(result, Err):
            return result
        logger.info(f"Deleted branch {branch}")
        return Ok(None)

    def delete_branch_force(self, branch: str) -> Result[None, GitError]:
        result = self._run("branch delete", "branch", "-D", branch)
        if isinstance(result, Err):
            return result
        logger.info(f"Force deleted branch {branch}")
        return Ok(None)
