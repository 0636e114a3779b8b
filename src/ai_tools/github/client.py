from __future__ import annotations

import http.client
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Protocol
from urllib.parse import quote

from ai_tools.core.types import RepositoryInfo, UserIdentity
from ai_tools.errors import AuthenticationError, RepositoryLookupError
from .http import HttpResult, get_json

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
API_VERSION = "2022-11-28"

# urllib can also raise ValueError (bad base URL) and HTTPException (truncated reads).
TRANSPORT_ERRORS = (OSError, ValueError, http.client.HTTPException)

Fetch = Callable[..., HttpResult]


class AuthenticatedClient(Protocol):
    """Minimal interface the orchestrator needs from a logged-in API session."""

    def get_current_user(self) -> UserIdentity:
        ...

    def get_repository(self, owner: str, name: str) -> RepositoryInfo:
        ...


@dataclass
class GitHubRestClient:
    """
    GitHub REST client bound to one token.
    Built once per run and never mutated afterwards.
    """

    token: str
    base_url: str = DEFAULT_API_URL
    timeout_s: float = 30.0
    fetch: Fetch = field(default=get_json, repr=False)

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": API_VERSION,
            "User-Agent": "ai-tools",
        }

    def _get(self, path: str) -> HttpResult:
        url = f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"
        logger.debug("GET %s", url)
        return self.fetch(url=url, headers=self._headers(), timeout_s=self.timeout_s)

    def get_current_user(self) -> UserIdentity:
        try:
            r = self._get("user")
        except TRANSPORT_ERRORS as e:
            raise AuthenticationError(
                f"failed to authenticate with GitHub: {e}", data={"error": str(e)}
            ) from e

        if not r.ok:
            raise AuthenticationError(
                f"failed to authenticate with GitHub (run 'gh auth login'): HTTP {r.status}{_api_message(r)}",
                data={"status": r.status, "body": r.body},
            )

        login = r.body.get("login")
        if not isinstance(login, str) or not login:
            raise AuthenticationError("GitHub did not return a login for the current user", data={"body": r.body})
        return UserIdentity(login=login)

    def get_repository(self, owner: str, name: str) -> RepositoryInfo:
        slug = f"{owner}/{name}"
        try:
            r = self._get(f"repos/{quote(owner, safe='')}/{quote(name, safe='')}")
        except TRANSPORT_ERRORS as e:
            raise RepositoryLookupError(
                f"failed to get repository info: {e}", data={"repo": slug, "error": str(e)}
            ) from e

        if not r.ok:
            raise RepositoryLookupError(
                f"failed to get repository info: HTTP {r.status}{_api_message(r)}",
                data={"repo": slug, "status": r.status},
            )

        clone_url = r.body.get("clone_url")
        if not isinstance(clone_url, str) or not clone_url:
            raise RepositoryLookupError("repository info has no clone_url", data={"repo": slug})

        return RepositoryInfo(
            full_name=str(r.body.get("full_name") or slug),
            clone_url=clone_url,
            default_branch=r.body.get("default_branch"),
        )


def _api_message(r: HttpResult) -> str:
    msg = r.body.get("message")
    return f" {msg}" if msg else ""
