"""ai-tools package.

Clones the MCP tool repositories declared in a YAML file:
- config/: settings + tool list loading
- github/: reference parsing, credentials, REST client
- clone/: clone invokers + the clone-or-skip orchestrator
- cli/: the `ai-tools` entrypoint
"""

__version__ = "0.1.0"
