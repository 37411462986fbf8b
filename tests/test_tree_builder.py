"""Tests for tree_builder module."""

import pytest

from RepoTree.tree_builder import (
    InvalidDepthError,
    build_hierarchy,
    generate_tree,
    render_tree,
)


class TestBuildHierarchy:
    def test_empty(self):
        assert build_hierarchy([], 3) == {}

    def test_nested(self):
        tree = build_hierarchy(["a/b.txt", "a/c.txt", "d.txt"], 3)
        assert tree == {"a": {"b.txt": {}, "c.txt": {}}, "d.txt": {}}

    def test_truncates_at_depth(self):
        tree = build_hierarchy(["x/y/z.txt"], 2)
        assert tree == {"x": {"y": {}}}

    def test_shared_prefix_collapses(self):
        tree = build_hierarchy(["src/a.py", "src/b.py", "src/sub/c.py"], 1)
        assert tree == {"src": {}}

    def test_first_seen_order_kept(self):
        tree = build_hierarchy(["z.txt", "a/1", "m.txt", "a/0"], 2)
        assert list(tree) == ["z.txt", "a", "m.txt"]
        assert list(tree["a"]) == ["1", "0"]

    def test_existing_node_is_descended(self):
        tree = build_hierarchy(["docs", "README.md", "docs/index.md"], 3)
        assert list(tree) == ["docs", "README.md"]
        assert tree["docs"] == {"index.md": {}}

    def test_empty_path_is_empty_key(self):
        assert build_hierarchy([""], 3) == {"": {}}

    def test_empty_segments_kept(self):
        tree = build_hierarchy(["/a", "b//c", "d/"], 3)
        assert tree == {"": {"a": {}}, "b": {"": {"c": {}}}, "d": {"": {}}}

    def test_accepts_any_iterable(self):
        tree = build_hierarchy((p for p in ["a/b", "c"]), 2)
        assert tree == {"a": {"b": {}}, "c": {}}

    @pytest.mark.parametrize("depth", [0, -1])
    def test_non_positive_depth_rejected(self, depth):
        with pytest.raises(InvalidDepthError, match="at least 1"):
            build_hierarchy(["a/b"], depth)

    def test_invalid_depth_is_value_error(self):
        with pytest.raises(ValueError):
            build_hierarchy([], 0)


class TestRenderTree:
    def test_empty(self):
        assert render_tree({}) == ""

    def test_single_file(self):
        assert render_tree({"README.md": {}}) == "└── README.md\n"

    def test_flat_files(self):
        result = render_tree({"LICENSE": {}, "README.md": {}})
        assert result == "├── LICENSE\n└── README.md\n"

    def test_not_sorted(self):
        result = render_tree({"z.txt": {}, "a.txt": {}})
        assert result.splitlines() == ["├── z.txt", "└── a.txt"]

    def test_last_branch_uses_blank_continuation(self):
        result = render_tree({"a": {"b": {"c": {}}}})
        assert result == "└── a\n    └── b\n        └── c\n"

    def test_interior_branch_uses_vertical_continuation(self):
        result = render_tree({"a": {"b": {}, "c": {}}, "d": {}})
        assert result == "├── a\n│   ├── b\n│   └── c\n└── d\n"

    def test_last_is_local_to_each_level(self):
        tree = {"a": {"b": {"c": {}, "d": {}}}, "e": {"f": {}}}
        assert render_tree(tree).splitlines() == [
            "├── a",
            "│   └── b",
            "│       ├── c",
            "│       └── d",
            "└── e",
            "    └── f",
        ]

    def test_prefix_applied_to_every_line(self):
        result = render_tree({"a": {"b": {}}}, prefix=">> ")
        assert result == ">> └── a\n>>     └── b\n"

    def test_every_line_newline_terminated(self):
        result = render_tree({"a": {}, "b": {"c": {}}})
        assert result.endswith("\n")
        assert result.count("\n") == 3


class TestGenerateTree:
    PATHS = ["a/b.txt", "a/c.txt", "d.txt"]

    def test_depth_three(self):
        assert generate_tree(self.PATHS, 3) == (
            "├── a\n"
            "│   ├── b.txt\n"
            "│   └── c.txt\n"
            "└── d.txt\n"
        )

    def test_depth_one(self):
        assert generate_tree(self.PATHS, 1) == "├── a\n└── d.txt\n"

    def test_dropped_segment(self):
        assert generate_tree(["x/y/z.txt"], 2) == "└── x\n    └── y\n"

    @pytest.mark.parametrize("depth", [1, 2, 3, 4, 5])
    def test_empty_input(self, depth):
        assert generate_tree([], depth) == ""

    def test_idempotent(self):
        paths = ["src/app/page.tsx", "src/lib/a.ts", "README.md", "src/app/x.css"]
        assert generate_tree(paths, 3) == generate_tree(list(paths), 3)

    def test_no_segment_beyond_depth(self):
        paths = ["a/b/c/d/e", "a/b/x", "f"]
        lines = generate_tree(paths, 2).splitlines()
        names = [line.rsplit(" ", 1)[-1] for line in lines]
        assert names == ["a", "b", "f"]

    def test_top_level_lines_monotonic_in_depth(self):
        paths = ["a/b/c.txt", "d/e.txt", "f.txt"]
        previous = None
        for depth in range(1, 6):
            top = [
                line for line in generate_tree(paths, depth).splitlines()
                if line.startswith(("├── ", "└── "))
            ]
            if previous is not None:
                assert top == previous
            previous = top

    def test_one_elbow_per_sibling_group(self):
        paths = ["a/1", "a/2", "a/3", "b/1", "c"]
        lines = generate_tree(paths, 2).splitlines()
        top = [line for line in lines if not line.startswith(("│", " "))]
        under_a = lines[1:4]
        assert [line[:4] for line in top] == ["├── ", "├── ", "└── "]
        assert [line[4:8] for line in under_a] == ["├── ", "├── ", "└── "]
