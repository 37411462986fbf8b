"""Repository URL -> rendered directory tree."""

from __future__ import annotations

import logging

from RepoTree.models import DEFAULT_DEPTH, DEPTH_CHOICES, TreeResult
from RepoTree.providers.base import RepoProvider
from RepoTree.providers.github import (
    AuthenticationError,
    GitHubError,
    GitHubProvider,
    NotFoundError,
    RateLimitError,
    TruncatedTreeError,
)
from RepoTree.tree_builder import InvalidDepthError, generate_tree
from RepoTree.url_parser import URLParseError, parse_repo_url

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = (
    "Failed to generate tree. Please check the repository URL and try again."
)


def generate_repo_tree(
    url: str,
    max_depth: int = DEFAULT_DEPTH,
    token: str | None = None,
    provider: RepoProvider | None = None,
) -> TreeResult:
    """Fetch the repository listing for *url* and render it to *max_depth*.

    Raises:
        InvalidDepthError: *max_depth* is not one of ``DEPTH_CHOICES``.
        URLParseError: *url* is not a GitHub repository URL.
        GitHubError: any failure talking to GitHub.
    """
    if max_depth not in DEPTH_CHOICES:
        raise InvalidDepthError(
            f"Depth must be one of {', '.join(map(str, DEPTH_CHOICES))}, got {max_depth}"
        )

    repo_info = parse_repo_url(url)
    if provider is None:
        provider = GitHubProvider(token=token)

    paths = provider.list_paths(repo_info, max_depth)
    text = generate_tree(paths, max_depth)
    logger.info(
        "Rendered %s to depth %d from %d paths",
        repo_info.display_name, max_depth, len(paths),
    )
    return TreeResult(
        repo_display_name=repo_info.display_name,
        branch=repo_info.branch,
        max_depth=max_depth,
        text=text,
        paths=paths,
        skipped_dirs=provider.skipped_dirs(),
    )


def describe_error(exc: Exception) -> str:
    """Return a short, user-facing reason for a failed generation."""
    if isinstance(exc, URLParseError):
        return f"Invalid repository URL: {exc}"
    if isinstance(exc, InvalidDepthError):
        return str(exc)
    if isinstance(exc, RateLimitError):
        return str(exc)
    if isinstance(exc, NotFoundError):
        return "Repository, branch or commit not found."
    if isinstance(exc, AuthenticationError):
        return str(exc)
    if isinstance(exc, TruncatedTreeError):
        return f"Repository is too large to list: {exc}"
    if isinstance(exc, GitHubError):
        return str(exc)
    return f"Unexpected error: {exc}"
