from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TextIO

from ai_tools.core.types import CloneOutcome, ToolSpec, UserIdentity
from ai_tools.errors import InvalidReference

if TYPE_CHECKING:
    from ai_tools.clone.orchestrator import CloneSummary


@dataclass
class Reporter:
    """Human-facing progress lines. Diagnostics go through logging instead."""

    verbose: bool = False
    out: TextIO = field(default_factory=lambda: sys.stdout)

    def _print(self, line: str) -> None:
        print(line, file=self.out)

    def authenticated(self, user: UserIdentity) -> None:
        if self.verbose:
            self._print(f"Authenticated as: {user.login}")

    def start(self, total: int) -> None:
        self._print(f"Cloning {total} MCP tools...")

    def tool_started(self, tool: ToolSpec) -> None:
        self._print(f"Cloning {tool.name}...")

    def tool_finished(self, outcome: CloneOutcome) -> None:
        tool = outcome.tool
        if outcome.status == "CLONED":
            self._print(f"  ✓ Cloned to {outcome.path}")
        elif outcome.status == "SKIPPED":
            name = outcome.path.name if outcome.path is not None else tool.repo
            self._print(f"  {name} already exists, skipping")
        elif outcome.error_kind == InvalidReference.__name__:
            self._print(f"  Failed to parse repo URL {tool.repo}: {outcome.reason}")
        else:
            self._print(f"  Failed to clone {tool.name}: {outcome.reason}")

    def finish(self, summary: "CloneSummary") -> None:
        if self.verbose:
            self._print(f"{summary.cloned} cloned, {summary.skipped} skipped, {summary.failed} failed")
        self._print("Done!")
