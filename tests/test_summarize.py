"""Tests for PR prompt construction, candidate ordering and the Gemini adapter."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from conftest import FakeGenerator
from core.exceptions import GenerationExhausted, GenerationUnavailable
from core.models import ChangedFile, PullRequest
from core.summarize import (
    GeminiGenerator,
    PullRequestSummarizer,
    build_pr_prompt,
    candidate_models,
)


class TestBuildPrompt:
    def test_fixed_shape(self):
        pr = PullRequest(
            title="Fix login",
            body="Closes #4",
            files=[ChangedFile("auth.py", 10, 2), ChangedFile("tests/test_auth.py", 30, 0)],
        )
        assert build_pr_prompt(pr) == (
            "Summarize this PR for a reviewer in 6-10 bullet points. "
            "Include: intent, risky areas, breaking changes, and testing steps.\n\n"
            "PR title: Fix login\n\n"
            "PR body:\nCloses #4\n\n"
            "Changed files:\nauth.py (+10/-2)\ntests/test_auth.py (+30/-0)"
        )

    @pytest.mark.parametrize("body", [None, ""])
    def test_placeholder_for_missing_body(self, body):
        assert "PR body:\n(no body)\n" in build_pr_prompt(PullRequest(title="t", body=body))

    def test_no_truncation(self):
        body = "x" * 200_000
        assert body in build_pr_prompt(PullRequest(title="t", body=body))


class TestCandidateModels:
    def test_default_then_fallbacks(self):
        assert candidate_models("gemini-2.0-flash") == [
            "gemini-2.0-flash", "gemini-1.5-flash", "gemini-1.5-pro",
        ]

    def test_configured_fallback_not_repeated(self):
        assert candidate_models("gemini-1.5-pro") == ["gemini-1.5-pro", "gemini-1.5-flash"]

    def test_missing_default(self):
        assert candidate_models(None)[0] == "gemini-2.0-flash"


class TestSummarizer:
    def test_unavailable_without_generator(self):
        summarizer = PullRequestSummarizer(None)
        assert not summarizer.available
        with pytest.raises(GenerationUnavailable):
            summarizer.summarize("prompt")

    def test_each_model_tried_once(self):
        generator = FakeGenerator({})
        with pytest.raises(GenerationExhausted) as exc_info:
            PullRequestSummarizer(generator, "gemini-1.5-flash").summarize("p")
        assert generator.models_called == ["gemini-1.5-flash", "gemini-1.5-pro"]
        assert isinstance(exc_info.value.last_error, RuntimeError)
        assert "unknown model gemini-1.5-pro" in str(exc_info.value)

    def test_prompt_passed_verbatim(self):
        generator = FakeGenerator({"gemini-2.0-flash": "ok"})
        PullRequestSummarizer(generator).summarize("the prompt")
        assert generator.calls == [("gemini-2.0-flash", "the prompt")]


class TestGeminiGenerator:
    def test_calls_generate_content(self):
        client = MagicMock()
        client.models.generate_content.return_value = SimpleNamespace(text="- bullet")
        generator = GeminiGenerator(api_key="k", client=client)
        assert generator.generate("gemini-1.5-pro", "prompt") == "- bullet"
        client.models.generate_content.assert_called_once_with(model="gemini-1.5-pro", contents="prompt")

    def test_empty_response_is_a_failure(self):
        client = MagicMock()
        client.models.generate_content.return_value = SimpleNamespace(text=None)
        with pytest.raises(ValueError):
            GeminiGenerator(api_key="k", client=client).generate("m", "p")

    def test_empty_response_falls_through_to_next_model(self):
        client = MagicMock()
        client.models.generate_content.side_effect = [
            SimpleNamespace(text=None),
            SimpleNamespace(text="- from flash"),
        ]
        summarizer = PullRequestSummarizer(GeminiGenerator(api_key="k", client=client))
        assert summarizer.summarize("p") == "- from flash"
        assert client.models.generate_content.call_count == 2
