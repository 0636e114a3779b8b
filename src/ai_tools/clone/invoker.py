from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Protocol

from ai_tools.core.types import ParsedReference
from ai_tools.errors import CloneError

logger = logging.getLogger(__name__)

Runner = Callable[..., subprocess.CompletedProcess]


class CloneInvoker(Protocol):
    def clone(self, *, ref: ParsedReference, clone_url: str, destination: Path) -> None:
        ...


def _run_clone(cmd: List[str], *, runner: Runner, timeout_s: float) -> None:
    """Single attempt. A partial destination dir is left as-is on failure."""
    logger.debug("running: %s", " ".join(cmd))
    try:
        p = runner(
            cmd,
            text=True,
            capture_output=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout_s,
        )
    except FileNotFoundError as e:
        raise CloneError(f"{cmd[0]} not found in PATH", data={"cmd": cmd}) from e
    except subprocess.TimeoutExpired as e:
        raise CloneError(
            f"{cmd[0]} clone timed out after {timeout_s:g}s", data={"cmd": cmd, "timeout_s": timeout_s}
        ) from e

    if p.returncode != 0:
        stderr = (p.stderr or "").strip()
        raise CloneError(
            f"{cmd[0]} clone failed: exit status {p.returncode}" + (f": {stderr}" if stderr else ""),
            data={"cmd": cmd, "returncode": p.returncode, "stderr": stderr},
        )


@dataclass
class GitCloneInvoker:
    """Plain `git clone <clone_url> <destination>`."""

    timeout_s: float = 600.0
    runner: Runner = field(default=subprocess.run, repr=False)

    def clone(self, *, ref: ParsedReference, clone_url: str, destination: Path) -> None:
        _run_clone(["git", "clone", clone_url, str(destination)], runner=self.runner, timeout_s=self.timeout_s)


@dataclass
class GhCloneInvoker:
    """`gh repo clone owner/name <destination>`; gh supplies its own credentials to git."""

    timeout_s: float = 600.0
    runner: Runner = field(default=subprocess.run, repr=False)

    def clone(self, *, ref: ParsedReference, clone_url: str, destination: Path) -> None:
        _run_clone(["gh", "repo", "clone", ref.slug, str(destination)], runner=self.runner, timeout_s=self.timeout_s)


def make_invoker(method: str, *, timeout_s: float) -> CloneInvoker:
    if method == "git":
        return GitCloneInvoker(timeout_s=timeout_s)
    if method == "gh":
        return GhCloneInvoker(timeout_s=timeout_s)
    raise ValueError(f"Unsupported clone method: {method!r}. Supported: git, gh")
