"""
Git diff execution.

Runs the `git` command line to produce the unified diff the analysis
consumes.
"""

import logging
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


class GitDiffError(Exception):
    """Error while running git."""
    pass


class GitDiffExecutor:
    """
    Produce unified diffs between git references.

    Diffs always use three lines of context so that hunk line numbers
    match what the analysis expects.
    """

    def __init__(self, git_dir: Path = Path("."), timeout: int = 60) -> None:
        """
        Initialize the executor.

        Args:
            git_dir: Path inside the git work tree.
            timeout: Timeout in seconds for each git invocation.
        """
        self.git_dir = git_dir
        self.timeout = timeout

    def _run(self, *args: str) -> subprocess.CompletedProcess:
        cmd = ["git", "-C", str(self.git_dir), *args]
        logger.debug("Running %s", " ".join(cmd))
        try:
            return subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as e:
            raise GitDiffError("git executable not found") from e
        except subprocess.TimeoutExpired as e:
            raise GitDiffError(f"git timed out after {self.timeout} seconds") from e

    def is_repository(self) -> bool:
        """Check if git_dir is inside a git work tree."""
        result = self._run("rev-parse", "--is-inside-work-tree")
        return result.returncode == 0 and result.stdout.strip() == "true"

    def resolve_ref(self, ref: str) -> str:
        """
        Resolve a reference to a commit hash.

        Raises:
            GitDiffError: If the reference does not exist.
        """
        result = self._run("rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}")
        if result.returncode != 0:
            raise GitDiffError(f"Invalid git reference: {ref}")
        return result.stdout.strip()

    def execute(
        self,
        from_ref: str = "HEAD~1",
        to_ref: str = "HEAD",
        staged: bool = False,
    ) -> str:
        """
        Get the diff between two references, or of the staged changes.

        Args:
            from_ref: Reference to compare from.
            to_ref: Reference to compare to.
            staged: Compare the index with HEAD instead of the references.

        Returns:
            The unified diff text (possibly empty).

        Raises:
            GitDiffError: If git is unavailable, git_dir is not a repository,
                a reference is invalid, or git diff fails.
        """
        if not self.is_repository():
            raise GitDiffError(f"Git diff execution failed: Not a git repository: {self.git_dir}")

        if staged:
            args = ["diff", "--cached", "--unified=3"]
        else:
            self.resolve_ref(from_ref)
            self.resolve_ref(to_ref)
            args = ["diff", "--unified=3", f"{from_ref}...{to_ref}"]

        result = self._run(*args)
        if result.returncode != 0:
            raise GitDiffError(f"Git diff execution failed: {result.stderr.strip()}")

        return result.stdout

    def current_branch(self) -> str:
        """Name of the checked out branch, or "HEAD" when detached or unknown."""
        try:
            result = self._run("rev-parse", "--abbrev-ref", "HEAD")
        except GitDiffError:
            return "HEAD"
        branch = result.stdout.strip()
        return branch if result.returncode == 0 and branch else "HEAD"

