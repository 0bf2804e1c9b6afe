"""Hook contexts: repository state a hook type runs against.

A context prepares the working tree before hooks run and restores it after.
``PreCommitContext`` hides unstaged and untracked changes so hooks only see
what is about to be committed.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from ..core.errors import HookContextError, SpawnError
from ..core.process import SubprocessResult, spawn

logger = logging.getLogger(__name__)

STASH_MESSAGE = "hookguard: backup of working tree before running hooks"


def _git(root: Path, *args: str) -> SubprocessResult:
    try:
        return spawn(["git", *args], cwd=root)
    except SpawnError as e:
        raise HookContextError(str(e)) from e


def _git_ok(root: Path, *args: str) -> SubprocessResult:
    result = _git(root, *args)
    if not result.success:
        stderr = result.stderr.decode("utf-8", errors="replace").strip()
        raise HookContextError(f"git {' '.join(args)} failed: {stderr}")
    return result


def _split_z(raw: bytes) -> list[str]:
    return [p for p in raw.decode("utf-8", errors="replace").split("\0") if p]


class HookContext:
    """Context with nothing to set up; base for the git-aware ones."""

    def __init__(self, hook_type: str, root: Path | None = None, args: Sequence[str] = ()) -> None:
        self.hook_type = hook_type
        self.root = root or Path.cwd()
        # arguments git passed to the hook script
        self.args = list(args)

    def setup_environment(self) -> None:
        pass

    def cleanup_environment(self) -> None:
        pass

    def modified_files(self) -> list[str]:
        return []


class PreCommitContext(HookContext):
    def __init__(self, root: Path | None = None, args: Sequence[str] = ()) -> None:
        super().__init__("pre-commit", root, args)
        self._changes_stashed = False
        self._modified: list[str] | None = None

    def modified_files(self) -> list[str]:
        if self._modified is None:
            result = _git_ok(
                self.root, "diff", "--cached", "--name-only", "-z", "--diff-filter=ACMR"
            )
            self._modified = _split_z(result.stdout)
        return self._modified

    def _has_unstaged_changes(self) -> bool:
        result = _git_ok(self.root, "status", "--porcelain", "-z", "--untracked-files=all")
        entries = iter(_split_z(result.stdout))
        for entry in entries:
            # "XY path": Y is the work tree column, "??" marks untracked
            if entry[:2] == "??" or entry[1:2] not in ("", " "):
                return True
            if entry[:1] in ("R", "C"):
                next(entries, None)  # rename/copy source path
        return False

    def _has_commits(self) -> bool:
        return _git(self.root, "rev-parse", "--verify", "--quiet", "HEAD").success

    def setup_environment(self) -> None:
        # Cache the staged file list before the stash rewrites the tree
        self.modified_files()
        if not self._has_commits() or not self._has_unstaged_changes():
            logger.debug("no unstaged changes to stash")
            return
        _git_ok(
            self.root,
            "stash", "push", "--keep-index", "--include-untracked", "--quiet",
            "--message", STASH_MESSAGE,
        )
        self._changes_stashed = True
        logger.debug("stashed unstaged changes")

    def cleanup_environment(self) -> None:
        if not self._changes_stashed:
            return
        # Hooks may have modified tracked files; discard before restoring
        _git_ok(self.root, "reset", "--hard", "--quiet")
        _git_ok(self.root, "stash", "apply", "--index", "--quiet")
        _git_ok(self.root, "stash", "drop", "--quiet")
        self._changes_stashed = False
        logger.debug("restored unstaged changes")


class RunAllContext(HookContext):
    """Runs a hook type against every tracked file, without stashing."""

    def __init__(
        self, hook_type: str, root: Path | None = None, args: Sequence[str] = ()
    ) -> None:
        super().__init__(hook_type, root, args)
        self._files: list[str] | None = None

    def setup_environment(self) -> None:
        # Read the file list up front so git errors surface before any hook runs
        self.modified_files()

    def modified_files(self) -> list[str]:
        if self._files is None:
            self._files = _split_z(_git_ok(self.root, "ls-files", "-z").stdout)
        return self._files


def build_context(
    hook_type: str,
    root: Path | None = None,
    all_files: bool = False,
    args: Sequence[str] = (),
) -> HookContext:
    if all_files:
        return RunAllContext(hook_type, root, args)
    if hook_type == "pre-commit":
        return PreCommitContext(root, args)
    return HookContext(hook_type, root, args)
