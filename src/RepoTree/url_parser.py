"""GitHub repository URL parsing."""

from __future__ import annotations

from urllib.parse import urlparse

from RepoTree.models import RepoInfo

GITHUB_HOSTS = frozenset({"github.com", "www.github.com"})


class URLParseError(Exception):
    """Raised when a URL cannot be parsed."""


def parse_repo_url(url: str) -> RepoInfo:
    """Parse a GitHub repository URL and return RepoInfo.

    Supported formats:
      - https://github.com/owner/repo
      - https://github.com/owner/repo.git
      - https://github.com/owner/repo/tree/branch
      - https://github.com/owner/repo/tree/branch/with/slashes
    """
    url = url.strip()
    if not url:
        raise URLParseError("URL is empty.")

    parsed = urlparse(url)
    if not parsed.scheme:
        raise URLParseError(f"Invalid URL (no scheme): {url}")
    if parsed.scheme not in ("http", "https"):
        raise URLParseError(f"Unsupported scheme: {parsed.scheme}")

    host = (parsed.hostname or "").lower()
    if host not in GITHUB_HOSTS:
        raise URLParseError(f"Unsupported host: {host}")

    parts = [p for p in parsed.path.split("/") if p]
    if len(parts) < 2:
        raise URLParseError(f"GitHub URL must include owner/repo: {url}")

    owner = parts[0]
    repo = parts[1].removesuffix(".git")
    if not repo:
        raise URLParseError(f"GitHub URL must include owner/repo: {url}")

    branch = None
    if len(parts) >= 4 and parts[2] == "tree":
        # Everything after /tree/ is the branch name (may contain slashes)
        branch = "/".join(parts[3:])

    return RepoInfo(owner=owner, repo=repo, branch=branch, raw_url=url)
