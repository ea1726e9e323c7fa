"""Shared fixtures: an in-memory GitHub behind httpx.MockTransport and a fake Gemini."""

import json
import re

import httpx
import pytest

from core.catalog import build_gateway
from core.config import TriageConfig
from core.github import GitHubClient

# ============================================================================
# Mock Data
# ============================================================================

MOCK_REPOS = [
    {
        "name": "hello",
        "full_name": "octo/hello",
        "private": False,
        "html_url": "https://github.com/octo/hello",
        "default_branch": "main",
        "pushed_at": "2026-10-01T12:00:00Z",
        "stargazers_count": 42,
        "owner": {"login": "octo"},
    },
    {
        "name": "secret",
        "full_name": "octo/secret",
        "private": True,
        "html_url": "https://github.com/octo/secret",
        "default_branch": "trunk",
        "pushed_at": None,
    },
]

MOCK_SEARCH = {
    "total_count": 2,
    "incomplete_results": False,
    "items": [
        {
            "number": 7,
            "title": "Crash on startup",
            "state": "open",
            "html_url": "https://github.com/octo/hello/issues/7",
            "repository_url": "https://api.github.com/repos/octo/hello",
            "labels": [{"name": "bug"}, {"name": ""}, "triage", None],
        },
        {
            "number": 12,
            "title": "Add retry",
            "state": "closed",
            "html_url": "https://github.com/octo/tools/pull/12",
            "repository_url": "https://api.github.com/repos/octo/tools",
            "pull_request": {"url": "https://api.github.com/repos/octo/tools/pulls/12"},
            "labels": [],
        },
    ],
}

MOCK_PULL = {
    "number": 3,
    "title": "Switch cache backend",
    "body": "Replaces the in-process cache.",
    "state": "open",
}

MOCK_FILES = [
    {"filename": "cache/backend.py", "additions": 120, "deletions": 30, "status": "modified"},
    {"filename": "README.md", "additions": 4, "deletions": 0, "status": "modified"},
]

_ISSUE_PATH = re.compile(r"^/repos/([^/]+)/([^/]+)/(issues|pulls)/(\d+)(/labels|/files)?$")


# ============================================================================
# Fakes
# ============================================================================


class FakeGitHub:
    """A tiny stateful GitHub: enough for repos, search, labels, close and PRs."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.repos = [dict(r) for r in MOCK_REPOS]
        self.search = MOCK_SEARCH
        self.issues = {
            ("octo", "hello", 7): {"number": 7, "state": "open", "labels": ["help-wanted"]},
        }
        self.pulls = {("octo", "hello", 3): dict(MOCK_PULL)}
        self.files = {("octo", "hello", 3): list(MOCK_FILES)}
        self.fail_with = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            status, message = self.fail_with
            return httpx.Response(status, json={"message": message})

        method, path = request.method, request.url.path
        if method == "GET" and path == "/user/repos":
            return httpx.Response(200, json=self.repos)
        if method == "GET" and path == "/search/issues":
            return httpx.Response(200, json=self.search)

        match = _ISSUE_PATH.match(path)
        if match:
            owner, repo, kind, number, suffix = match.groups()
            key = (owner, repo, int(number))
            if kind == "pulls" and key in self.pulls:
                if suffix == "/files":
                    per_page = int(request.url.params.get("per_page", 30))
                    return httpx.Response(200, json=self.files[key][:per_page])
                if suffix is None:
                    return httpx.Response(200, json=self.pulls[key])
            if kind == "issues" and key in self.issues:
                issue = self.issues[key]
                payload = json.loads(request.content or b"{}")
                if method == "POST" and suffix == "/labels":
                    for label in payload["labels"]:
                        if label not in issue["labels"]:
                            issue["labels"].append(label)
                    return httpx.Response(200, json=[{"name": n} for n in issue["labels"]])
                if method == "PATCH" and suffix is None:
                    issue.update(payload)
                    return httpx.Response(200, json={"number": key[2], "state": issue["state"]})
        return httpx.Response(404, json={"message": "Not Found"})

    def client(self) -> GitHubClient:
        return GitHubClient(token="ghp_test", transport=httpx.MockTransport(self.handler))


class FakeGenerator:
    """Scripted text generator: model name → reply text or exception."""

    def __init__(self, outcomes: dict):
        self.outcomes = outcomes
        self.calls: list[tuple[str, str]] = []

    def generate(self, model: str, prompt: str) -> str:
        self.calls.append((model, prompt))
        outcome = self.outcomes.get(model, RuntimeError(f"unknown model {model}"))
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    @property
    def models_called(self) -> list[str]:
        return [model for model, _ in self.calls]


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def fake_github():
    return FakeGitHub()


@pytest.fixture
def config():
    return TriageConfig(github_token="ghp_test", gemini_api_key="gm_test")


@pytest.fixture
def generator():
    return FakeGenerator({"gemini-2.0-flash": "- intent: swap cache"})


@pytest.fixture
def gateway(config, fake_github, generator):
    return build_gateway(config, github=fake_github.client(), generator=generator)
