# =============================================================================
# core/summarize.py  —  PR summary prompt + Gemini model fallback chain
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   1. build_pr_prompt() turns a PullRequest into a fixed-shape reviewer
#      prompt (title, body, one line per changed file).
#   2. PullRequestSummarizer sends that prompt to Gemini, walking an ordered
#      list of candidate models until one answers.
#
# THE FALLBACK CHAIN:
#   [configured model, "gemini-1.5-flash", "gemini-1.5-pro"]
#   - each model is tried exactly once, in order, with no delay
#   - the first model that returns text wins; nothing after it is tried
#   - every failure is treated alike (bad model name, quota, network)
#   - if all fail, GenerationExhausted carries the LAST error
#
# NO KEY, NO CALL:
#   Without a Gemini key there is no generator at all, and summarize()
#   raises GenerationUnavailable before touching the network.
# =============================================================================

import logging
from typing import Optional, Protocol

from google import genai

from core.config import DEFAULT_GEMINI_MODEL
from core.exceptions import GenerationExhausted, GenerationUnavailable
from core.models import PullRequest

logger = logging.getLogger(__name__)

FALLBACK_MODELS = ("gemini-1.5-flash", "gemini-1.5-pro")
NO_BODY = "(no body)"


def build_pr_prompt(pr: PullRequest) -> str:
    """Build the reviewer-summary prompt.  The prompt is never truncated."""
    file_summary = "\n".join(
        f"{f.filename} (+{f.additions}/-{f.deletions})" for f in pr.files
    )
    return (
        "Summarize this PR for a reviewer in 6-10 bullet points. "
        "Include: intent, risky areas, breaking changes, and testing steps.\n\n"
        f"PR title: {pr.title}\n\n"
        f"PR body:\n{pr.body or NO_BODY}\n\n"
        f"Changed files:\n{file_summary}"
    )


def candidate_models(default_model: Optional[str]) -> list[str]:
    """Ordered, de-duplicated list of models to try."""
    models: list[str] = []
    for name in (default_model or DEFAULT_GEMINI_MODEL, *FALLBACK_MODELS):
        if name not in models:
            models.append(name)
    return models


class TextGenerator(Protocol):
    def generate(self, model: str, prompt: str) -> str: ...


class GeminiGenerator:
    """google-genai backed text generation."""

    def __init__(self, api_key: str, client: Optional[genai.Client] = None):
        self._client = client or genai.Client(api_key=api_key)

    def generate(self, model: str, prompt: str) -> str:
        response = self._client.models.generate_content(model=model, contents=prompt)
        text = response.text
        if not text:
            raise ValueError(f"model {model} returned no text")
        return text


class PullRequestSummarizer:
    """Runs a prompt through the candidate models, first success wins."""

    def __init__(self, generator: Optional[TextGenerator], default_model: str = DEFAULT_GEMINI_MODEL):
        self.generator = generator
        self.models = candidate_models(default_model)

    @property
    def available(self) -> bool:
        return self.generator is not None

    def summarize(self, prompt: str) -> str:
        if self.generator is None:
            raise GenerationUnavailable("Gemini API key not set; cannot summarize PR.")

        last_error: Optional[Exception] = None
        for index, model in enumerate(self.models):
            try:
                text = self.generator.generate(model, prompt)
            except Exception as e:  # any failure moves on to the next model
                logger.warning("Gemini model %s failed: %s", model, e)
                last_error = e
                continue
            if index:
                logger.info("Summarized with fallback model %s", model)
            return text
        raise GenerationExhausted(last_error)
