import io

from ai_tools.clone.orchestrator import CloneSummary
from ai_tools.core.types import CloneOutcome, ToolSpec, UserIdentity
from ai_tools.report import Reporter


def test_identity_only_when_verbose():
    quiet, loud = io.StringIO(), io.StringIO()
    Reporter(verbose=False, out=quiet).authenticated(UserIdentity(login="octocat"))
    Reporter(verbose=True, out=loud).authenticated(UserIdentity(login="octocat"))
    assert quiet.getvalue() == ""
    assert loud.getvalue() == "Authenticated as: octocat\n"


def test_verbose_summary_counts():
    out = io.StringIO()
    tool = ToolSpec(name="A", repo="o/a")
    summary = CloneSummary(
        outcomes=[
            CloneOutcome(tool=tool, status="CLONED"),
            CloneOutcome(tool=tool, status="FAILED", reason="x", error_kind="CloneError"),
            CloneOutcome(tool=tool, status="FAILED", reason="y", error_kind="InvalidReference"),
        ]
    )
    Reporter(verbose=True, out=out).finish(summary)
    assert out.getvalue().splitlines() == ["1 cloned, 0 skipped, 2 failed", "Done!"]


def test_parse_failure_line_uses_reference():
    out = io.StringIO()
    tool = ToolSpec(name="Bad", repo="nope")
    outcome = CloneOutcome(tool=tool, status="FAILED", reason="invalid", error_kind="InvalidReference")
    Reporter(out=out).tool_finished(outcome)
    assert out.getvalue() == "  Failed to parse repo URL nope: invalid\n"
