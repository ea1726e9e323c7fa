# =============================================================================
# core/triage.py  —  The five tool handlers
# =============================================================================
#
# Each handler is a leaf operation:
#   1. call one GitHub endpoint (summarize_pr: two, then Gemini)
#   2. project the response down to the fields a triage agent needs
#   3. return a ToolResult with the projection as pretty JSON text
#
# Handlers receive arguments that the gateway has ALREADY validated, so they
# never re-check types or bounds.  GitHub failures surface as UpstreamError
# and are left for the gateway to turn into failure envelopes.
# =============================================================================

from dataclasses import asdict
from typing import Any, Iterable, Optional

from core.exceptions import GenerationExhausted, GenerationUnavailable
from core.github import GitHubClient
from core.models import (
    ChangedFile,
    IssueState,
    IssueSummary,
    PullRequest,
    RepoSummary,
    SearchResult,
    ToolResult,
)
from core.summarize import PullRequestSummarizer, build_pr_prompt

PR_FILES_LIMIT = 50


# -----------------------------------------------------------------------------
# Projection helpers
# -----------------------------------------------------------------------------
def repo_from_url(repository_url: Optional[str]) -> Optional[str]:
    """``https://api.github.com/repos/o/r`` → ``"o/r"``."""
    if not repository_url or "/repos/" not in repository_url:
        return None
    return repository_url.split("/repos/")[1]


def label_names(labels: Optional[Iterable[Any]]) -> list[str]:
    """Flatten plain strings or label objects to names, dropping empties."""
    names = []
    for label in labels or ():
        if isinstance(label, str):
            name = label
        elif isinstance(label, dict):
            name = label.get("name")
        else:
            continue
        if name:
            names.append(name)
    return names


def project_repo(repo: dict) -> RepoSummary:
    return RepoSummary(
        name=repo.get("name"),
        full_name=repo.get("full_name"),
        private=repo.get("private"),
        url=repo.get("html_url"),
        default_branch=repo.get("default_branch"),
        pushed_at=repo.get("pushed_at"),
    )


def project_search_item(item: dict) -> IssueSummary:
    return IssueSummary(
        type="pr" if item.get("pull_request") else "issue",
        repo=repo_from_url(item.get("repository_url")),
        number=item.get("number"),
        title=item.get("title"),
        state=item.get("state"),
        url=item.get("html_url"),
        labels=label_names(item.get("labels")),
    )


# -----------------------------------------------------------------------------
# Handlers
# -----------------------------------------------------------------------------
class TriageHandlers:
    """Handler implementations bound to their upstream collaborators."""

    def __init__(self, github: GitHubClient, summarizer: PullRequestSummarizer):
        self.github = github
        self.summarizer = summarizer

    def list_repos(self, perPage: int = 100) -> ToolResult:
        repos = self.github.list_repos_for_authenticated_user(per_page=perPage, sort="updated")
        return ToolResult.from_data([asdict(project_repo(r)) for r in repos])

    def search_issues(self, q: str, perPage: int = 20) -> ToolResult:
        data = self.github.search_issues(q=q, per_page=perPage)
        result = SearchResult(
            total=data.get("total_count") or 0,
            items=[project_search_item(it) for it in data.get("items") or []],
        )
        return ToolResult.from_data(asdict(result))

    def label_issue(self, owner: str, repo: str, number: int, labels: list[str]) -> ToolResult:
        data = self.github.add_labels(owner, repo, number, labels)
        return ToolResult.from_data(label_names(data))

    def close_issue(self, owner: str, repo: str, number: int) -> ToolResult:
        data = self.github.update_issue(owner, repo, number, state="closed")
        return ToolResult.from_data(asdict(IssueState(number=data.get("number"), state=data.get("state"))))

    def fetch_pull_request(self, owner: str, repo: str, number: int) -> PullRequest:
        pr = self.github.get_pull(owner, repo, number)
        files = self.github.list_pull_files(owner, repo, number, per_page=PR_FILES_LIMIT)
        return PullRequest(
            title=pr.get("title", ""),
            body=pr.get("body"),
            files=[
                ChangedFile(
                    filename=f.get("filename"),
                    additions=f.get("additions", 0),
                    deletions=f.get("deletions", 0),
                )
                for f in files[:PR_FILES_LIMIT]
            ],
        )

    def summarize_pr(self, owner: str, repo: str, number: int) -> ToolResult:
        prompt = build_pr_prompt(self.fetch_pull_request(owner, repo, number))
        try:
            return ToolResult.from_text(self.summarizer.summarize(prompt))
        except GenerationUnavailable as e:
            # Degraded, not failed.
            return ToolResult.from_text(str(e))
        except GenerationExhausted as e:
            return ToolResult.failure(str(e))
