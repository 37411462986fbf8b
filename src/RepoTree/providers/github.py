"""GitHub REST API provider."""

from __future__ import annotations

import logging
import time
from urllib.parse import quote

import requests

from RepoTree.models import RepoInfo, TreeEntry
from RepoTree.providers.base import RepoProvider

logger = logging.getLogger(__name__)

class GitHubError(Exception):
    """Raised for GitHub API errors."""

class NotFoundError(GitHubError):
    """Raised when a repository, branch, commit or tree does not exist."""

class AuthenticationError(GitHubError):
    """Raised when GitHub rejects the supplied token."""

class TruncatedTreeError(GitHubError):
    """Raised when GitHub truncates a tree listing that cannot be split further."""

class RateLimitError(GitHubError):
    """Raised when GitHub rate limit is exceeded."""

    def __init__(self, reset_at: int):
        self.reset_at = reset_at
        wait = max(0, reset_at - int(time.time()))
        super().__init__(
            f"GitHub API rate limit exceeded. Resets in {wait} seconds."
        )

class GitHubProvider(RepoProvider):
    """Provider for GitHub repositories using the REST API.

    The path listing is resolved the long way round
    (repository -> branch -> commit -> tree) so that a branch name
    containing slashes never has to be passed as a tree reference.
    """

    API_BASE = "https://api.github.com"
    USER_AGENT = "RepoTree/1.0"
    TIMEOUT = 30

    def __init__(self, token: str | None = None, api_base: str | None = None):
        self.api_base = (api_base or self.API_BASE).rstrip("/")
        self.session = requests.Session()
        self._skipped_dirs: list[str] = []
        self.session.headers["Accept"] = "application/vnd.github+json"
        self.session.headers["User-Agent"] = self.USER_AGENT
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def _check_rate_limit(self, response: requests.Response) -> None:
        remaining = response.headers.get("X-RateLimit-Remaining")
        if remaining is not None and int(remaining) == 0:
            reset_at = int(response.headers.get("X-RateLimit-Reset", 0))
            raise RateLimitError(reset_at)

    def _api_get(
        self,
        path: str,
        params: dict | None = None,
        not_found: str = "Repository not found. Check the URL, or provide a token for private repos.",
    ) -> dict:
        url = f"{self.api_base}{path}"
        logger.debug("GET %s params=%s", url, params)
        try:
            resp = self.session.get(url, params=params, timeout=self.TIMEOUT)
        except requests.RequestException as exc:
            raise GitHubError(f"Could not reach GitHub: {exc}") from exc
        self._check_rate_limit(resp)

        if resp.status_code == 404:
            raise NotFoundError(not_found)
        if resp.status_code == 401:
            raise AuthenticationError("Authentication failed. Check your GitHub token.")
        if resp.status_code == 403:
            raise GitHubError(
                "Access denied. The token may lack permissions, or rate limit exceeded."
            )
        if not resp.ok:
            raise GitHubError(f"GitHub API returned HTTP {resp.status_code} for {path}")
        try:
            return resp.json()
        except ValueError as exc:
            raise GitHubError(f"GitHub API returned invalid JSON for {path}") from exc

    def _repo_path(self, repo_info: RepoInfo) -> str:
        return f"/repos/{repo_info.owner}/{repo_info.repo}"

    def get_default_branch(self, repo_info: RepoInfo) -> str:
        data = self._api_get(self._repo_path(repo_info))
        return _field(data, "default_branch")

    def get_commit_sha(self, repo_info: RepoInfo, branch: str) -> str:
        """Return the SHA of the latest commit on *branch*."""
        data = self._api_get(
            f"{self._repo_path(repo_info)}/branches/{quote(branch, safe='/')}",
            not_found=f"Branch '{branch}' not found in {repo_info.display_name}.",
        )
        return _field(data, "commit", "sha")

    def get_tree_sha(self, repo_info: RepoInfo, commit_sha: str) -> str:
        """Return the SHA of the root tree of *commit_sha*."""
        data = self._api_get(
            f"{self._repo_path(repo_info)}/git/commits/{commit_sha}",
            not_found=f"Commit {commit_sha} not found in {repo_info.display_name}.",
        )
        return _field(data, "tree", "sha")

    def get_tree(
        self, repo_info: RepoInfo, tree_sha: str, recursive: bool = True
    ) -> dict:
        params = {"recursive": "1"} if recursive else None
        return self._api_get(
            f"{self._repo_path(repo_info)}/git/trees/{tree_sha}",
            params=params,
            not_found=f"Tree {tree_sha} not found in {repo_info.display_name}.",
        )

    def _resolve_branch_commit(self, repo_info: RepoInfo, ref: str) -> tuple[str, str]:
        """Return ``(branch, commit_sha)`` for a ref taken from a URL.

        ``/tree/<ref>`` URLs can point at a folder (``main/src``), so when
        the whole ref is not a branch its leading parts are tried, longest
        first.
        """
        parts = ref.split("/")
        for end in range(len(parts), 0, -1):
            candidate = "/".join(parts[:end])
            try:
                return candidate, self.get_commit_sha(repo_info, candidate)
            except NotFoundError as exc:
                if end == 1:
                    raise NotFoundError(
                        f"Branch '{ref}' not found in {repo_info.display_name}."
                    ) from exc
                logger.debug("No branch named %s, trying a shorter ref", candidate)

    def resolve_tree_sha(self, repo_info: RepoInfo) -> str:
        """Resolve the root tree SHA for the repo's branch.

        Fills in ``repo_info.branch`` with the default branch when the URL
        did not name one, or with the branch part of a folder URL's ref.
        """
        if repo_info.branch:
            branch, commit_sha = self._resolve_branch_commit(repo_info, repo_info.branch)
        else:
            branch = self.get_default_branch(repo_info)
            commit_sha = self.get_commit_sha(repo_info, branch)
        repo_info.branch = branch

        tree_sha = self.get_tree_sha(repo_info, commit_sha)
        logger.info(
            "Resolved %s@%s to commit %s, tree %s",
            repo_info.display_name, branch, commit_sha, tree_sha,
        )
        return tree_sha

    def list_entries(
        self, repo_info: RepoInfo, max_depth: int | None = None
    ) -> list[TreeEntry]:
        """List every item of the repository's tree in GitHub's order."""
        self._skipped_dirs = []
        tree_sha = self.resolve_tree_sha(repo_info)
        data = self.get_tree(repo_info, tree_sha)

        if data.get("truncated"):
            logger.warning(
                "Tree listing for %s is truncated; walking directories individually",
                repo_info.display_name,
            )
            return self._walk_tree(repo_info, tree_sha, max_depth)

        return [_to_entry(item) for item in data.get("tree", [])]

    def list_paths(
        self, repo_info: RepoInfo, max_depth: int | None = None
    ) -> list[str]:
        entries = self.list_entries(repo_info, max_depth)
        logger.info("Listed %d paths for %s", len(entries), repo_info.display_name)
        return [entry.path for entry in entries]

    def skipped_dirs(self) -> list[str]:
        return list(self._skipped_dirs)

    def _walk_tree(
        self,
        repo_info: RepoInfo,
        tree_sha: str,
        max_depth: int | None,
        parent: str = "",
        level: int = 1,
    ) -> list[TreeEntry]:
        """Handle a truncated tree by listing one directory at a time.

        Directories are emitted before their contents, matching the
        order of a recursive listing. Directories below *max_depth*
        are not fetched. Directories that fail to list are recorded in
        ``skipped_dirs()``.
        """
        data = self.get_tree(repo_info, tree_sha, recursive=False)
        if data.get("truncated"):
            raise TruncatedTreeError(
                f"Directory '{parent or '/'}' has too many entries to list."
            )

        entries: list[TreeEntry] = []
        for item in data.get("tree", []):
            entry = _to_entry(item, parent)
            entries.append(entry)
            if entry.type != "tree" or not entry.sha:
                continue
            if max_depth is not None and level >= max_depth:
                continue
            try:
                entries.extend(
                    self._walk_tree(repo_info, entry.sha, max_depth, entry.path, level + 1)
                )
            except (RateLimitError, TruncatedTreeError):
                raise
            except GitHubError as exc:
                logger.warning("Skipping directory %s: %s", entry.path, exc)
                self._skipped_dirs.append(entry.path)
        return entries

def _field(data: dict, *keys: str) -> str:
    """Read a nested field from an API response, e.g. ``commit.sha``."""
    value = data
    try:
        for key in keys:
            value = value[key]
    except (KeyError, TypeError) as exc:
        raise GitHubError(
            f"Unexpected GitHub API response: missing '{'.'.join(keys)}'"
        ) from exc
    return value

def _to_entry(item: dict, parent: str = "") -> TreeEntry:
    path = item["path"]
    if parent:
        path = f"{parent}/{path}"
    return TreeEntry(
        path=path,
        type=item.get("type", "blob"),
        sha=item.get("sha", ""),
        size=item.get("size", 0),
    )
