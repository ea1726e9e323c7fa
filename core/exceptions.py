# =============================================================================
# core/exceptions.py  —  Error taxonomy
# =============================================================================
#
# Every error the gateway knows how to report derives from TriageError.
# ToolGateway.dispatch() turns any of them into a failure envelope, so the
# message of each exception is exactly what the calling agent reads.
# =============================================================================

from dataclasses import dataclass
from typing import Optional


class TriageError(Exception):
    """Base class for all errors surfaced by the gateway."""


class UnknownTool(TriageError):
    """The requested tool name is not registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name!r}")


class DuplicateTool(TriageError):
    """A tool with the same name is already registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Tool already registered: {name!r}")


@dataclass(frozen=True)
class Violation:
    """One field-level schema violation."""
    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class InvalidArguments(TriageError):
    """Arguments failed schema validation; no external call was made."""

    def __init__(self, tool: str, violations: list[Violation]):
        self.tool = tool
        self.violations = list(violations)
        details = "; ".join(str(v) for v in self.violations)
        super().__init__(f"Invalid arguments for {tool}: {details}")


class UpstreamError(TriageError):
    """A GitHub API call failed (auth, not found, rate limit, network)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class GenerationUnavailable(TriageError):
    """No Gemini API key is configured."""


class GenerationExhausted(TriageError):
    """Every candidate model failed to produce a summary."""

    def __init__(self, last_error: Optional[BaseException]):
        self.last_error = last_error
        super().__init__(
            "Gemini call failed. Set GEMINI_MODEL to a supported model. "
            f"Last error: {describe_error(last_error)}"
        )


def describe_error(err: Optional[BaseException]) -> str:
    """``"TypeName: message"`` for an exception, or ``"None"``."""
    if err is None:
        return "None"
    message = str(err)
    return f"{type(err).__name__}: {message}" if message else type(err).__name__
