"""Git helpers used after a library has been generated.

Initialises a repository in the destination, stages everything and records
an initial commit.  Also reads the user's configured git identity, which is
the default answer for the author prompt.
"""

from __future__ import annotations

import asyncio
import getpass
import shlex
from pathlib import Path

from ui5libgen.utils import console

INITIAL_COMMIT_MESSAGE = "Initialize repository with UI5 Library Generator"

#: Commands run, in order, inside a freshly generated library.
INIT_STEPS: tuple[tuple[str, ...], ...] = (
    ("init", "--quiet"),
    ("add", "."),
    ("commit", "--quiet", "--allow-empty", "-m", INITIAL_COMMIT_MESSAGE),
)


class GitError(Exception):
    """Raised when a git invocation fails."""

    def __init__(
        self,
        message: str,
        command: str = "",
        stderr: str = "",
        returncode: int | None = None,
    ) -> None:
        self.command = command
        self.stderr = stderr
        self.returncode = returncode
        super().__init__(message)


async def _git(*args: str, cwd: str | Path | None = None, timeout: float = 60.0) -> str:
    """Run ``git <args>`` in *cwd* and return its trimmed standard output."""
    command = shlex.join(("git", *args))
    try:
        process = await asyncio.create_subprocess_exec(
            "git",
            *args,
            cwd=cwd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError as exc:
        raise GitError("git is not installed or not on PATH", command=command) from exc

    try:
        out, err = await asyncio.wait_for(process.communicate(), timeout)
    except asyncio.TimeoutError as exc:
        process.kill()
        await process.wait()
        raise GitError(f"`{command}` did not finish within {timeout:g}s", command=command) from exc

    if process.returncode:
        stderr = err.decode(errors="replace").strip()
        raise GitError(
            f"`{command}` exited with {process.returncode}: {stderr}",
            command=command,
            stderr=stderr,
            returncode=process.returncode,
        )
    return out.decode(errors="replace").strip()


async def init_repository(path: str | Path) -> None:
    """Create a repository in *path* holding every generated file.

    Raises:
        GitError: On the first step that fails; later steps are skipped.
    """
    repo = Path(path)
    console.print(f"[cyan]Initialising git repository[/cyan] in [bold]{repo}[/bold]...")
    for step in INIT_STEPS:
        await _git(*step, cwd=repo)


async def default_author() -> str:
    """Return ``git config user.name``, or the OS login name if git has none."""
    try:
        name = await _git("config", "--get", "user.name", timeout=10.0)
    except GitError:
        name = ""
    if name:
        return name

    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return ""
