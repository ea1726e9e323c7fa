# =============================================================================
# core/catalog.py  —  The tool catalog (names, schemas, handlers)
# =============================================================================
#
# This is the external contract surface: tool names and argument names here
# are what agents integrate against.  Renaming `perPage`, `q`, `number` or
# any tool is a breaking change.
#
#   list_repos     perPage?  (1-100, default 100)
#   search_issues  q, perPage?  (1-100, default 20)
#   label_issue    owner, repo, number (>=1), labels (>=1 item)
#   close_issue    owner, repo, number (>=1)
#   summarize_pr   owner, repo, number (>=1)
# =============================================================================

from typing import Optional

from core.config import TriageConfig
from core.gateway import ToolDefinition, ToolGateway
from core.github import GitHubClient
from core.schema import INTEGER, STRING, STRING_ARRAY, FieldSpec
from core.summarize import GeminiGenerator, PullRequestSummarizer, TextGenerator
from core.triage import TriageHandlers

OWNER = FieldSpec(STRING, description="Repository owner (user or organization)")
REPO = FieldSpec(STRING, description="Repository name")
NUMBER = FieldSpec(INTEGER, minimum=1, description="Issue or pull request number")


def _per_page(default: int) -> FieldSpec:
    return FieldSpec(
        INTEGER,
        required=False,
        default=default,
        minimum=1,
        maximum=100,
        description=f"Results per page (1-100, default {default})",
    )


def tool_definitions(handlers: TriageHandlers) -> list[ToolDefinition]:
    return [
        ToolDefinition(
            name="list_repos",
            title="List repositories",
            description="List repositories for the authenticated user (first page, up to 100).",
            schema={"perPage": _per_page(100)},
            handler=handlers.list_repos,
            read_only=True,
            idempotent=True,
        ),
        ToolDefinition(
            name="search_issues",
            title="Search issues & PRs",
            description="Search issues and pull requests using GitHub query syntax (q).",
            schema={
                "q": FieldSpec(STRING, min_length=1, description="GitHub search query"),
                "perPage": _per_page(20),
            },
            handler=handlers.search_issues,
            read_only=True,
            idempotent=True,
        ),
        ToolDefinition(
            name="summarize_pr",
            title="Summarize PR",
            description=(
                "Summarize a pull request diff and discussion using Gemini. "
                "Params: owner, repo, number."
            ),
            schema={"owner": OWNER, "repo": REPO, "number": NUMBER},
            handler=handlers.summarize_pr,
            read_only=True,
        ),
        ToolDefinition(
            name="label_issue",
            title="Label issue",
            description="Add one or more labels to an issue",
            schema={
                "owner": OWNER,
                "repo": REPO,
                "number": NUMBER,
                "labels": FieldSpec(STRING_ARRAY, min_length=1, description="Labels to add"),
            },
            handler=handlers.label_issue,
            idempotent=True,
        ),
        ToolDefinition(
            name="close_issue",
            title="Close issue",
            description="Close an issue by number",
            schema={"owner": OWNER, "repo": REPO, "number": NUMBER},
            handler=handlers.close_issue,
            idempotent=True,
        ),
    ]


def build_gateway(
    config: TriageConfig,
    github: Optional[GitHubClient] = None,
    generator: Optional[TextGenerator] = None,
) -> ToolGateway:
    """Wire config, upstream clients and handlers into a ready gateway.

    ``github`` and ``generator`` default to real clients built from
    ``config``; tests pass fakes.  Without a Gemini key no generator is
    used at all, even one passed in.
    """
    if github is None:
        github = GitHubClient(token=config.github_token, base_url=config.github_api_url)
    if not config.has_gemini_key:
        generator = None
    elif generator is None:
        generator = GeminiGenerator(api_key=config.gemini_api_key)

    handlers = TriageHandlers(
        github=github,
        summarizer=PullRequestSummarizer(generator, default_model=config.gemini_model),
    )
    gateway = ToolGateway()
    for definition in tool_definitions(handlers):
        gateway.register(definition)
    return gateway
