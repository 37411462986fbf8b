"""Data classes for RepoTree."""

from __future__ import annotations

from dataclasses import dataclass, field

# Depth values offered by the UI
DEPTH_CHOICES: tuple[int, ...] = (1, 2, 3, 4, 5)
DEFAULT_DEPTH = 3

# Nested mapping of path segment -> children, in first-seen order
TreeNode = dict[str, "TreeNode"]


@dataclass
class RepoInfo:
    owner: str
    repo: str
    branch: str | None = None
    raw_url: str = ""

    @property
    def display_name(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass
class TreeEntry:
    path: str
    type: str = "blob"  # blob / tree / commit (submodule)
    sha: str = ""
    size: int = 0


@dataclass
class TreeResult:
    repo_display_name: str
    branch: str | None
    max_depth: int
    text: str
    paths: list[str] = field(default_factory=list)
    skipped_dirs: list[str] = field(default_factory=list)

    @property
    def line_count(self) -> int:
        return self.text.count("\n")

    @property
    def is_partial(self) -> bool:
        return bool(self.skipped_dirs)
