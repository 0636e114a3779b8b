from __future__ import annotations

import logging
import os
from pathlib import Path
from collections.abc import Mapping
from typing import Any, List, Optional

import yaml  # PyYAML

from ai_tools.config.models import ClonerSettings, CloneMethod, ToolsConfig
from ai_tools.core.types import ToolSpec
from ai_tools.errors import ConfigError

logger = logging.getLogger(__name__)

API_URL_ENV = "AI_TOOLS_API_URL"


def load_tools_config(path: Path | str) -> ToolsConfig:
    """
    Read and validate the tools file.
    There is no partial recovery: any problem raises ConfigError.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"failed to read {path}: {e}", data={"path": str(path)}) from e

    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"failed to parse YAML in {path}: {e}", data={"path": str(path)}) from e

    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        raise ConfigError(
            f"{path}: expected a mapping at the top level, got {type(raw).__name__}",
            data={"path": str(path)},
        )

    entries = raw.get("tools") or []
    if not isinstance(entries, list):
        raise ConfigError(f"{path}: 'tools' must be a list", data={"path": str(path)})

    tools: List[ToolSpec] = [_parse_tool(path, i, entry) for i, entry in enumerate(entries)]
    logger.debug("loaded %d tools from %s", len(tools), path)
    return ToolsConfig(source=path, raw=dict(raw), tools=tuple(tools))


def _parse_tool(path: Path, index: int, entry: Any) -> ToolSpec:
    where = f"{path}: tools[{index}]"
    if not isinstance(entry, Mapping):
        raise ConfigError(f"{where}: expected a mapping", data={"path": str(path), "index": index})

    values = {}
    for key in ("name", "repo", "description"):
        v = entry.get(key)
        if v is None:
            # A missing repo fails only its own entry, as an unparsable reference.
            if key in ("repo", "description"):
                v = ""
            else:
                raise ConfigError(f"{where}: missing '{key}'", data={"path": str(path), "index": index})
        if not isinstance(v, str):
            raise ConfigError(
                f"{where}: '{key}' must be a string", data={"path": str(path), "index": index}
            )
        values[key] = v

    return ToolSpec(name=values["name"], repo=values["repo"], description=values["description"])


def build_settings(
    *,
    config_file: str,
    output_dir: str,
    verbose: bool = False,
    clone_method: CloneMethod = "git",
    clone_timeout_s: Optional[float] = None,
    env: Optional[Mapping[str, str]] = None,
) -> ClonerSettings:
    env = os.environ if env is None else env
    defaults = ClonerSettings()
    api_url = (env.get(API_URL_ENV) or "").strip() or defaults.api_url

    return ClonerSettings(
        config_file=Path(config_file),
        output_dir=Path(output_dir),
        verbose=verbose,
        clone_method=clone_method,
        clone_timeout_s=clone_timeout_s if clone_timeout_s is not None else defaults.clone_timeout_s,
        api_url=api_url,
        http_timeout_s=defaults.http_timeout_s,
    )
