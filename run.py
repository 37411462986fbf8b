"""Local entry point — launches the Streamlit app."""

import sys
from pathlib import Path

PORT = 8501


def main() -> None:
    src_dir = Path(__file__).resolve().parent / "src"
    if src_dir.exists() and str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))

    from streamlit.web import bootstrap

    app_path = str(src_dir / "RepoTree" / "app.py")
    bootstrap.run(
        app_path,
        is_hello=False,
        args=[],
        flag_options={
            "server.port": PORT,
            "browser.gatherUsageStats": False,
        },
    )


if __name__ == "__main__":
    main()
