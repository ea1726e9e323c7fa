# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the *shape* of everything that flows through the
# gateway: the result envelope handed back to MCP clients, and the compact
# projections of GitHub objects that handlers return.
#
# DESIGN PRINCIPLE — "No Phantom Fields":
#   GitHub responses are huge.  A projection carries only the fields a triage
#   agent reasons about; everything else is dropped at the edge.
# =============================================================================

import json
from dataclasses import dataclass, field
from typing import Any, Optional


def as_text(data: Any) -> str:
    """Render a payload as pretty JSON, or plain ``str()`` if it won't serialize."""
    try:
        return json.dumps(data, indent=2)
    except (TypeError, ValueError):
        return str(data)


# -----------------------------------------------------------------------------
# ContentBlock / ToolResult — the envelope every tool invocation returns
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ContentBlock:
    """One piece of result content.  Only ``"text"`` blocks are produced."""
    text: str
    type: str = "text"


@dataclass(frozen=True)
class ToolResult:
    """Success or failure envelope for a single tool invocation."""
    content: tuple[ContentBlock, ...]
    is_error: bool = False

    @classmethod
    def from_text(cls, text: str) -> "ToolResult":
        return cls(content=(ContentBlock(text=text),))

    @classmethod
    def from_data(cls, data: Any) -> "ToolResult":
        return cls.from_text(as_text(data))

    @classmethod
    def failure(cls, text: str) -> "ToolResult":
        return cls(content=(ContentBlock(text=text),), is_error=True)

    @property
    def text(self) -> str:
        """All text blocks joined by newlines."""
        return "\n".join(block.text for block in self.content if block.type == "text")


# -----------------------------------------------------------------------------
# Repository projection (list_repos)
# -----------------------------------------------------------------------------
@dataclass
class RepoSummary:
    name: str
    full_name: str
    private: bool
    url: str
    default_branch: Optional[str]
    pushed_at: Optional[str]


# -----------------------------------------------------------------------------
# Issue / PR search projection (search_issues)
# -----------------------------------------------------------------------------
# `type` is "pr" when the search hit carries a pull_request field, else
# "issue".  `repo` is "owner/name", lifted out of the item's repository_url.
# -----------------------------------------------------------------------------
@dataclass
class IssueSummary:
    type: str
    repo: Optional[str]
    number: int
    title: str
    state: str
    url: str
    labels: list[str] = field(default_factory=list)


@dataclass
class SearchResult:
    total: int
    items: list[IssueSummary] = field(default_factory=list)


# -----------------------------------------------------------------------------
# Issue state (close_issue)
# -----------------------------------------------------------------------------
@dataclass
class IssueState:
    number: int
    state: str


# -----------------------------------------------------------------------------
# Pull request inputs for summarization (summarize_pr)
# -----------------------------------------------------------------------------
@dataclass
class ChangedFile:
    filename: str
    additions: int
    deletions: int


@dataclass
class PullRequest:
    title: str
    body: Optional[str]
    files: list[ChangedFile] = field(default_factory=list)
