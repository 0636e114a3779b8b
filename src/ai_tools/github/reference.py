from __future__ import annotations

from ai_tools.core.types import ParsedReference
from ai_tools.errors import InvalidReference

GITHUB_WEB_PREFIX = "https://github.com/"


def parse_reference(reference: str) -> ParsedReference:
    """Splits "owner/name" or "https://github.com/owner/name[.git]" into its parts.

    Only the literal github.com prefix is recognized; any other https host
    leaves extra segments behind and fails the two-segment check. An ssh URL
    like "git@github.com:o/r.git" is not special-cased: it splits into two
    segments and parses with owner "git@github.com:o".
    """
    ref = reference
    if ref.endswith(".git"):
        ref = ref[: -len(".git")]

    if ref.startswith(GITHUB_WEB_PREFIX):
        ref = ref[len(GITHUB_WEB_PREFIX):]

    parts = ref.split("/")
    if len(parts) != 2 or not all(parts):
        raise InvalidReference(
            "invalid repository URL format, expected owner/repo",
            data={"reference": reference, "segments": len(parts)},
            reference=reference,
        )

    owner, name = parts
    return ParsedReference(owner=owner, name=name)
