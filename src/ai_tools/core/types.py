from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Literal, Optional


JSON = Dict[str, Any]

CloneStatus = Literal["CLONED", "SKIPPED", "FAILED"]


@dataclass(frozen=True)
class ToolSpec:
    """
    One tool entry from the tools YAML.
    `repo` is the raw reference, either "owner/name" or a github.com URL.
    """
    name: str
    repo: str
    description: str = ""


@dataclass(frozen=True)
class ParsedReference:
    owner: str
    name: str

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class UserIdentity:
    login: str


@dataclass(frozen=True)
class RepositoryInfo:
    full_name: str
    clone_url: str
    default_branch: Optional[str] = None


@dataclass(frozen=True)
class CloneOutcome:
    tool: ToolSpec
    status: CloneStatus
    path: Optional[Path] = None     # target dir; None when the reference did not parse
    reason: Optional[str] = None    # set for FAILED
    error_kind: Optional[str] = None  # ClonerError subclass name, set for FAILED
