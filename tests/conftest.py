from __future__ import annotations

import io
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Set, Tuple

import pytest

from ai_tools.core.types import ParsedReference, RepositoryInfo, UserIdentity
from ai_tools.errors import AuthenticationError, RepositoryLookupError
from ai_tools.report import Reporter


@dataclass
class FakeClient:
    login: str = "octocat"
    missing: Set[str] = field(default_factory=set)
    authenticated: bool = True
    lookups: List[Tuple[str, str]] = field(default_factory=list)

    def get_current_user(self) -> UserIdentity:
        if not self.authenticated:
            raise AuthenticationError("bad credentials")
        return UserIdentity(login=self.login)

    def get_repository(self, owner: str, name: str) -> RepositoryInfo:
        self.lookups.append((owner, name))
        slug = f"{owner}/{name}"
        if slug in self.missing:
            raise RepositoryLookupError("failed to get repository info: HTTP 404 Not Found")
        return RepositoryInfo(full_name=slug, clone_url=f"https://github.com/{slug}.git")


@dataclass
class FakeInvoker:
    """Creates the destination dir like a real clone would."""

    fail: Dict[str, Exception] = field(default_factory=dict)
    calls: List[Tuple[str, Path]] = field(default_factory=list)

    def clone(self, *, ref: ParsedReference, clone_url: str, destination: Path) -> None:
        self.calls.append((clone_url, destination))
        if ref.slug in self.fail:
            raise self.fail[ref.slug]
        destination.mkdir(parents=True)


@pytest.fixture
def client() -> FakeClient:
    return FakeClient()


@pytest.fixture
def invoker() -> FakeInvoker:
    return FakeInvoker()


@pytest.fixture
def report_out() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def reporter(report_out: io.StringIO) -> Reporter:
    return Reporter(verbose=False, out=report_out)


def completed(cmd, returncode: int = 0, stdout: str = "", stderr: str = "") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=cmd, returncode=returncode, stdout=stdout, stderr=stderr)
