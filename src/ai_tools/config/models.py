from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Tuple

from ai_tools.core.types import JSON, ToolSpec

CloneMethod = Literal["git", "gh"]

DEFAULT_CONFIG_FILE = "mcp-tools.yaml"
DEFAULT_OUTPUT_DIR = "mcp"
DEFAULT_CLONE_TIMEOUT_S = 600.0
DEFAULT_HTTP_TIMEOUT_S = 30.0


@dataclass(frozen=True)
class ToolsConfig:
    """
    Parsed tools YAML.
    Keeps the raw dict next to the typed records for diagnostics.
    """

    source: Path
    raw: JSON
    tools: Tuple[ToolSpec, ...]  # declaration order == processing order


@dataclass(frozen=True)
class ClonerSettings:
    """Everything one `ai-tools clone` invocation needs besides the tool list."""

    config_file: Path = Path(DEFAULT_CONFIG_FILE)
    output_dir: Path = Path(DEFAULT_OUTPUT_DIR)
    verbose: bool = False

    clone_method: CloneMethod = "git"
    clone_timeout_s: float = DEFAULT_CLONE_TIMEOUT_S

    api_url: str = "https://api.github.com"
    http_timeout_s: float = DEFAULT_HTTP_TIMEOUT_S
