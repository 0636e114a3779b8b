from pathlib import Path

import pytest

from ai_tools.config.loader import build_settings, load_tools_config
from ai_tools.errors import ConfigError


def write(tmp_path: Path, text: str) -> Path:
    p = tmp_path / "mcp-tools.yaml"
    p.write_text(text, encoding="utf-8")
    return p


def test_loads_tools_in_declared_order(tmp_path):
    p = write(
        tmp_path,
        """
tools:
  - name: B
    repo: octo/bravo
    description: second letter
  - name: A
    repo: https://github.com/octo/alpha.git
""",
    )
    cfg = load_tools_config(p)
    assert [t.name for t in cfg.tools] == ["B", "A"]
    assert cfg.tools[0].description == "second letter"
    assert cfg.tools[1].description == ""
    assert cfg.source == p


def test_empty_file_yields_no_tools(tmp_path):
    assert load_tools_config(write(tmp_path, "")).tools == ()


def test_extra_keys_are_ignored(tmp_path):
    cfg = load_tools_config(write(tmp_path, "tools:\n  - {name: A, repo: o/a, stars: 3}\n"))
    assert cfg.tools[0].repo == "o/a"


def test_missing_file_is_config_error(tmp_path):
    with pytest.raises(ConfigError) as exc:
        load_tools_config(tmp_path / "nope.yaml")
    assert exc.value.fatal
    assert "failed to read" in str(exc.value)


@pytest.mark.parametrize(
    "text",
    [
        "tools: [unclosed",
        "- just\n- a list\n",
        "tools: octo/hello\n",
        "tools:\n  - octo/hello\n",
        "tools:\n  - name: A\n    repo: 42\n",
    ],
)
def test_malformed_config_is_config_error(tmp_path, text):
    with pytest.raises(ConfigError):
        load_tools_config(write(tmp_path, text))


def test_build_settings_reads_api_url_override():
    s = build_settings(
        config_file="x.yaml",
        output_dir="out",
        env={"AI_TOOLS_API_URL": "https://ghe.example.com/api/v3"},
    )
    assert s.api_url == "https://ghe.example.com/api/v3"
    assert s.config_file == Path("x.yaml")
    assert s.clone_timeout_s == 600.0


def test_build_settings_defaults():
    s = build_settings(config_file="x.yaml", output_dir="out", env={})
    assert s.api_url == "https://api.github.com"
    assert s.clone_method == "git"


@pytest.mark.parametrize("text", ["tools:\n  - name: A\n", "tools:\n  - name: A\n    repo: null\n"])
def test_missing_repo_loads_as_empty_reference(tmp_path, text):
    cfg = load_tools_config(write(tmp_path, text))
    assert cfg.tools[0].repo == ""


def test_missing_name_is_config_error(tmp_path):
    with pytest.raises(ConfigError, match="missing 'name'"):
        load_tools_config(write(tmp_path, "tools:\n  - repo: octo/hello\n"))


def test_non_utf8_file_is_config_error(tmp_path):
    p = tmp_path / "mcp-tools.yaml"
    p.write_bytes(b"tools:\n  - name: \xff\xfe\n    repo: octo/hello\n")
    with pytest.raises(ConfigError, match="failed to read"):
        load_tools_config(p)
