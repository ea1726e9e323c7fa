# =============================================================================
# main.py  —  Entry Point for the GitHub Triage MCP Server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py
#
# WHAT HAPPENS:
#   1. Loads .env from this file's directory (not the working directory)
#   2. Reads GITHUB_TOKEN / GEMINI_API_KEY / GEMINI_MODEL into a TriageConfig
#   3. Builds the tool gateway and wraps it in a FastMCP server
#   4. Serves over stdio so MCP Inspector / Claude Desktop can attach
#
# Everything human-readable goes to stderr; stdout belongs to MCP.
# =============================================================================

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from core.catalog import build_gateway
from core.config import TriageConfig
from core.github import GitHubClient
from tools.mcp_server import create_server

logger = logging.getLogger("github-mcp")


def main() -> None:
    # override=False: real environment variables beat the .env file.
    load_dotenv(Path(__file__).resolve().parent / ".env", override=False)

    config = TriageConfig.from_env()
    if not config.has_github_token:
        logger.warning("GITHUB_TOKEN is not set. Tools will fail for GitHub API calls.")

    github = GitHubClient(token=config.github_token, base_url=config.github_api_url)
    server = create_server(build_gateway(config, github=github))

    logger.info("Starting server via stdio...")
    logger.info("Working directory: %s", os.getcwd())
    logger.info(
        "Env present: hasGithubToken=%s hasGeminiKey=%s",
        config.has_github_token,
        config.has_gemini_key,
    )
    logger.info("Gemini model: %s", config.gemini_model)
    try:
        server.run()
    finally:
        github.close()
        logger.info("Server stopped.")


if __name__ == "__main__":
    main()
