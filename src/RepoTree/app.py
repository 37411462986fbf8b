"""Streamlit UI for RepoTree."""

from __future__ import annotations

import logging

import streamlit as st

from RepoTree import token_store
from RepoTree.generator import (
    GENERIC_ERROR_MESSAGE,
    describe_error,
    generate_repo_tree,
)
from RepoTree.models import DEFAULT_DEPTH, DEPTH_CHOICES, TreeResult
from RepoTree.providers.github import GitHubError, RateLimitError
from RepoTree.tree_builder import InvalidDepthError
from RepoTree.url_parser import URLParseError

logger = logging.getLogger(__name__)


def _qp(key: str, default: str = "") -> str:
    """Read a query parameter, returning *default* if absent."""
    params = st.query_params
    return params.get(key, default)


def _initial_depth() -> int:
    try:
        depth = int(_qp("depth", str(DEFAULT_DEPTH)))
    except ValueError:
        return DEFAULT_DEPTH
    return depth if depth in DEPTH_CHOICES else DEFAULT_DEPTH


def main() -> None:
    st.set_page_config(
        page_title="RepoTree",
        page_icon="🌳",
        layout="centered",
    )

    # --- Header with settings popover ---
    header_left, header_right = st.columns([8, 1])
    with header_left:
        st.title("GitHub Repository Tree Generator")
    with header_right:
        st.markdown("<div style='height: 1.5rem'></div>", unsafe_allow_html=True)
        with st.popover("", use_container_width=True):
            st.subheader("Settings")

            saved_token = token_store.load_token() or ""
            github_token = st.text_input(
                "GitHub Token (optional)",
                value=_qp("token") or saved_token,
                type="password",
                help="Required for private repos. Increases rate limit from 60 to 5,000 requests/hour.",
            )

            if token_store.is_available():
                remember = st.checkbox(
                    "Save token to OS keychain",
                    value=bool(saved_token),
                )
                if remember and github_token:
                    token_store.save_token(github_token)
                elif saved_token and not (remember and github_token):
                    token_store.delete_token()

    st.caption("Render the directory structure of a GitHub repository as text.")

    # --- Main form ---
    with st.form("tree_form"):
        url = st.text_input(
            "GitHub Repository URL",
            value=_qp("url"),
            placeholder="https://github.com/owner/repo",
        )
        depth = st.selectbox(
            "Tree Depth",
            options=DEPTH_CHOICES,
            index=DEPTH_CHOICES.index(_initial_depth()),
        )
        submitted = st.form_submit_button(
            "Generate Tree",
            type="primary",
            use_container_width=True,
        )

    if submitted and url:
        _run_generation(url, depth, github_token)
    elif submitted:
        st.error("Please enter a repository URL.")
    elif "result" in st.session_state:
        # Show previous result after rerun (e.g. download button click)
        _show_result(st.session_state["result"])


def _run_generation(url: str, depth: int, github_token: str) -> None:
    st.session_state.pop("result", None)
    token = github_token.strip() or None

    try:
        with st.spinner("Generating..."):
            result = generate_repo_tree(url, depth, token=token)
    except (URLParseError, InvalidDepthError, GitHubError) as exc:
        logger.info("Tree generation failed for %s: %s", url, exc)
        _show_error(exc)
        return
    except Exception as exc:
        logger.exception("Unexpected error generating tree for %s", url)
        _show_error(exc)
        return

    st.session_state["result"] = result
    _show_result(result)


def _show_error(exc: Exception) -> None:
    st.error(GENERIC_ERROR_MESSAGE)
    st.caption(describe_error(exc))
    if isinstance(exc, RateLimitError):
        st.info(
            "Tip: Add a GitHub token in Settings to increase your rate limit "
            "from 60 to 5,000 requests per hour."
        )


def _show_result(result: TreeResult) -> None:
    """Display the rendered tree and a download button."""
    if not result.text:
        st.warning("No files found in the repository.")
        return

    ref = f"{result.repo_display_name}@{result.branch}" if result.branch else result.repo_display_name
    st.caption(f"{ref} · depth {result.max_depth} · {result.line_count:,} lines")
    if result.is_partial:
        st.warning(
            "Partial listing: could not load "
            + ", ".join(f"`{d}`" for d in result.skipped_dirs)
        )

    # language=None keeps the block preformatted without highlighting
    st.code(result.text, language=None)

    owner_repo = result.repo_display_name.replace("/", "_")
    st.download_button(
        label="Download Tree",
        data=result.text,
        file_name=f"{owner_repo}_tree.txt",
        mime="text/plain",
        use_container_width=True,
    )


if __name__ == "__main__":
    main()
