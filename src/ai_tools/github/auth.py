from __future__ import annotations

import logging
import os
import subprocess
from typing import Callable, Mapping, Optional, Sequence

from ai_tools.errors import AuthenticationError

logger = logging.getLogger(__name__)

# Same precedence the gh CLI itself uses.
TOKEN_ENV_VARS: Sequence[str] = ("GH_TOKEN", "GITHUB_TOKEN")

Runner = Callable[..., subprocess.CompletedProcess]


def token_from_env(env: Optional[Mapping[str, str]] = None) -> Optional[str]:
    env = os.environ if env is None else env
    for name in TOKEN_ENV_VARS:
        value = (env.get(name) or "").strip()
        if value:
            logger.debug("using token from %s", name)
            return value
    return None


def token_from_gh_cli(*, runner: Runner = subprocess.run, timeout_s: float = 15.0) -> Optional[str]:
    """Reads the token of the current `gh auth login` session, if any."""
    cmd = ["gh", "auth", "token"]
    try:
        p = runner(cmd, text=True, capture_output=True, timeout=timeout_s)
    except FileNotFoundError:
        logger.debug("gh CLI not found on PATH")
        return None
    except subprocess.TimeoutExpired:
        logger.debug("`gh auth token` timed out after %ss", timeout_s)
        return None

    if p.returncode != 0:
        logger.debug("`gh auth token` exited %s: %s", p.returncode, (p.stderr or "").strip())
        return None

    token = (p.stdout or "").strip()
    return token or None


def resolve_token(
    *,
    env: Optional[Mapping[str, str]] = None,
    runner: Runner = subprocess.run,
) -> str:
    """Returns an existing credential. Login itself is left to `gh auth login`."""
    token = token_from_env(env) or token_from_gh_cli(runner=runner)
    if not token:
        raise AuthenticationError(
            "no GitHub credentials found (is gh CLI authenticated? run 'gh auth login' "
            "or set GH_TOKEN)",
            data={"checked": [*TOKEN_ENV_VARS, "gh auth token"]},
        )
    return token
