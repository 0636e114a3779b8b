from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence

from ai_tools.core.types import CloneOutcome, CloneStatus, ToolSpec
from ai_tools.errors import ClonerError, ConfigError, InvalidReference
from ai_tools.github.client import AuthenticatedClient
from ai_tools.github.reference import parse_reference
from ai_tools.report import Reporter
from .invoker import CloneInvoker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CloneSummary:
    outcomes: List[CloneOutcome] = field(default_factory=list)

    def count(self, status: CloneStatus) -> int:
        return Counter(o.status for o in self.outcomes)[status]

    @property
    def cloned(self) -> int:
        return self.count("CLONED")

    @property
    def skipped(self) -> int:
        return self.count("SKIPPED")

    @property
    def failed(self) -> int:
        return self.count("FAILED")


@dataclass
class CloneOrchestrator:
    """
    Clone-or-skip over a static tool list, in declaration order.

    Per-tool errors are recorded and the loop moves on. Errors whose kind is
    fatal are re-raised untouched so the caller can end the run.
    """

    client: AuthenticatedClient
    invoker: CloneInvoker
    output_dir: Path
    reporter: Reporter

    def run(self, tools: Sequence[ToolSpec]) -> CloneSummary:
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigError(
                f"failed to create {self.output_dir} directory: {e}", data={"output_dir": str(self.output_dir)}
            ) from e
        self.reporter.start(len(tools))

        outcomes: List[CloneOutcome] = []
        for tool in tools:
            self.reporter.tool_started(tool)
            outcome = self.process(tool)
            self.reporter.tool_finished(outcome)
            outcomes.append(outcome)

        summary = CloneSummary(outcomes=outcomes)
        self.reporter.finish(summary)
        return summary

    def process(self, tool: ToolSpec) -> CloneOutcome:
        try:
            ref = parse_reference(tool.repo)
        except InvalidReference as e:
            return CloneOutcome(tool=tool, status="FAILED", reason=str(e), error_kind=type(e).__name__)

        target = self.output_dir / ref.name
        if target.exists():
            logger.debug("%s exists, treating as already cloned", target)
            return CloneOutcome(tool=tool, status="SKIPPED", path=target)

        try:
            info = self.client.get_repository(ref.owner, ref.name)
            self.invoker.clone(ref=ref, clone_url=info.clone_url, destination=target)
        except ClonerError as e:
            if e.fatal:
                raise
            logger.debug("clone of %s failed: %r", ref.slug, e.data)
            return CloneOutcome(
                tool=tool, status="FAILED", path=target, reason=str(e), error_kind=type(e).__name__
            )

        return CloneOutcome(tool=tool, status="CLONED", path=target)
