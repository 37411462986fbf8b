"""Abstract base class for repository providers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from RepoTree.models import RepoInfo


class RepoProvider(ABC):
    """Base class for Git hosting service providers."""

    @abstractmethod
    def get_default_branch(self, repo_info: RepoInfo) -> str:
        """Return the default branch name for the repository."""

    @abstractmethod
    def list_paths(
        self, repo_info: RepoInfo, max_depth: int | None = None
    ) -> list[str]:
        """Return every tracked path in the repository, in provider order.

        Implementations may skip paths deeper than *max_depth* segments
        when that saves requests; callers truncate anyway.
        """

    def skipped_dirs(self) -> list[str]:
        """Directories left out of the last listing because they failed to load."""
        return []
