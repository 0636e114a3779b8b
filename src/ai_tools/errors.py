from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


@dataclass(slots=True)
class ClonerError(RuntimeError):
    """Represents an expected, structured failure during a clone run.

    Each subclass declares whether it is fatal. Fatal errors abort the whole
    run; the rest are recorded against a single tool and the run continues.
    Helpers only raise; the outermost caller decides what to do.

    The optional data payload carries machine-readable context
    (e.g., the offending reference, HTTP status, command return code).
    """

    message: str
    data: dict[str, object] | None = None

    fatal: ClassVar[bool] = False

    def __str__(self) -> str:
        return self.message


@dataclass(slots=True)
class ConfigError(ClonerError):
    """The tools file is missing, unreadable or malformed."""

    fatal: ClassVar[bool] = True


@dataclass(slots=True)
class AuthenticationError(ClonerError):
    """No usable credential, or the identity check was rejected."""

    fatal: ClassVar[bool] = True


@dataclass(slots=True)
class InvalidReference(ClonerError):
    reference: str = ""


@dataclass(slots=True)
class RepositoryLookupError(ClonerError):
    pass


@dataclass(slots=True)
class CloneError(ClonerError):
    pass
