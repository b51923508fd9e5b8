"""Git operations service.

Core service for git command operations. Encapsulates all subprocess calls
to git: reading diffs of the working tree or index, applying patches, and
reading status.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path

logger = logging.getLogger(__name__)

# Non-UTF-8 bytes in diffs round-trip unchanged through str via surrogates
GIT_TEXT_OPTIONS = {"encoding": "utf-8", "errors": "surrogateescape"}


class GitRepositoryError(Exception):
    """Raised when directory is not a git repository."""

    pass


class GitDiffError(Exception):
    """Raised when git diff command fails."""

    pass


class GitApplyError(Exception):
    """Raised when git apply rejects a patch."""

    pass


class GitStatusError(Exception):
    """Raised when git status fails."""

    pass


class GitOperationsService:
    """Core service for git command operations.

    Encapsulates all subprocess calls to git commands.
    """

    def __init__(self, repo_path: str = ".", git_binary: str = "git"):
        """Initialize with repository path.

        Args:
            repo_path: Path to git repository (default: current directory)
            git_binary: Git executable to invoke (default: git on PATH)
        """
        self.repo_path = Path(repo_path)
        self.git_binary = git_binary

    def get_diff(
        self,
        staged: bool = False,
        files: Sequence[str] = (),
        context_lines: int | None = None,
    ) -> str:
        """Get unified diff of the working tree or index.

        Args:
            staged: Diff index against HEAD instead of working tree against index
            files: Optional paths to restrict the diff to
            context_lines: Optional -U value; git's default is used when None

        Returns:
            Raw unified diff text

        Raises:
            GitDiffError: If diff command fails
            GitRepositoryError: If not in a git repository
        """
        self._ensure_repository()

        cmd = [self.git_binary, "diff", "--no-color"]
        if staged:
            cmd.append("--cached")
        if context_lines is not None:
            cmd.append(f"-U{context_lines}")
        if files:
            cmd.append("--")
            cmd.extend(files)

        logger.debug("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                cwd=self.repo_path,
                capture_output=True,
                **GIT_TEXT_OPTIONS,
                check=True,
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            raise GitDiffError(f"Failed to compute diff: {e.stderr.strip()}")

    def apply_patch(
        self,
        patch: str,
        cached: bool = False,
        reverse: bool = False,
        unidiff_zero: bool = False,
    ) -> None:
        """Apply a patch read from stdin.

        Args:
            patch: Unified diff text
            cached: Apply to the index instead of the working tree
            reverse: Apply the patch in reverse
            unidiff_zero: Accept hunks without context lines (diffs taken with -U0)

        Raises:
            GitApplyError: If git apply rejects the patch
            GitRepositoryError: If not in a git repository
        """
        self._ensure_repository()

        cmd = [self.git_binary, "apply"]
        if cached:
            cmd.append("--cached")
        if reverse:
            cmd.append("--reverse")
        if unidiff_zero:
            cmd.append("--unidiff-zero")
        cmd.append("-")

        logger.debug("Running %s with %d byte patch", " ".join(cmd), len(patch))
        try:
            subprocess.run(
                cmd,
                cwd=self.repo_path,
                input=patch,
                capture_output=True,
                **GIT_TEXT_OPTIONS,
                check=True,
            )
        except subprocess.CalledProcessError as e:
            raise GitApplyError(f"Failed to apply patch: {e.stderr.strip()}")

    def get_status_porcelain(self) -> str:
        """Get `git status --porcelain` output.

        Raises:
            GitStatusError: If the status command fails
            GitRepositoryError: If not in a git repository
        """
        self._ensure_repository()
        return self._run_status_command(["status", "--porcelain"])

    def get_untracked_files(self) -> list[str]:
        """Return paths reported as untracked (`??`) by git status."""
        return [
            line[3:]
            for line in self.get_status_porcelain().split("\n")
            if line.startswith("??")
        ]

    def is_git_repository(self) -> bool:
        """Check if repo_path is inside a git repository.

        Returns:
            True if valid git repo, False otherwise
        """
        try:
            subprocess.run(
                [self.git_binary, "rev-parse", "--git-dir"],
                cwd=self.repo_path,
                capture_output=True,
                check=True,
            )
            return True
        except subprocess.CalledProcessError:
            return False

    # --------------------------------------------------------
    # Private helpers
    # --------------------------------------------------------

    def _ensure_repository(self) -> None:
        if not self.is_git_repository():
            raise GitRepositoryError(
                f"Not a git repository: {self.repo_path}\n"
                "Make sure you're running from within a git repository."
            )

    def _run_status_command(self, args: list[str]) -> str:
        cmd = [self.git_binary] + args
        logger.debug("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                cwd=self.repo_path,
                capture_output=True,
                **GIT_TEXT_OPTIONS,
                check=True,
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            raise GitStatusError(f"Git command failed: {' '.join(cmd)}\n{e.stderr.strip()}")
