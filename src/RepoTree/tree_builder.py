"""Depth-limited directory tree builder and ASCII renderer."""

from __future__ import annotations

from typing import Iterable

from RepoTree.models import TreeNode


class InvalidDepthError(ValueError):
    """Raised when a maximum depth is outside the accepted range."""


def build_hierarchy(paths: Iterable[str], max_depth: int) -> TreeNode:
    """Build a nested dict from slash-delimited paths, keeping at most
    *max_depth* leading segments of each path.

    Keys keep the order in which they were first seen; nothing is sorted.
    Paths that share a truncated prefix collapse into the same node.
    Empty segments (``"a//b"``, ``"/a"``) are kept as empty-string keys.
    """
    if max_depth < 1:
        raise InvalidDepthError(f"max_depth must be at least 1, got {max_depth}")

    tree: TreeNode = {}
    for path in paths:
        node = tree
        for part in path.split("/")[:max_depth]:
            node = node.setdefault(part, {})
    return tree


def render_tree(node: TreeNode, prefix: str = "") -> str:
    """Render a hierarchy as box-drawing lines, one per key.

    Example output:
        ├── src
        │   ├── main.py
        │   └── utils.py
        └── README.md

    Every line ends with a newline; an empty node renders to ``""``.
    """
    lines: list[str] = []
    _render_lines(node, lines, prefix)
    return "".join(lines)


def _render_lines(node: TreeNode, lines: list[str], prefix: str) -> None:
    entries = list(node.items())
    for i, (name, children) in enumerate(entries):
        is_last = i == len(entries) - 1
        connector = "└── " if is_last else "├── "
        lines.append(f"{prefix}{connector}{name}\n")

        if children:
            extension = "    " if is_last else "│   "
            _render_lines(children, lines, prefix + extension)


def generate_tree(paths: Iterable[str], max_depth: int) -> str:
    """Build and render the tree for *paths* in one call."""
    return render_tree(build_hierarchy(paths, max_depth))
