"""Streamlit entry point used by ``streamlit run app/streamlit_app.py``."""

from __future__ import annotations

import sys
from pathlib import Path


def _ensure_repo_on_path() -> None:
    """Put the repository root first on ``sys.path``.

    Streamlit runs the script directly, so an unrelated ``app`` package
    elsewhere on the path could otherwise shadow this one.
    """

    repo_path = str(Path(__file__).resolve().parents[1])
    if repo_path not in sys.path:
        sys.path.insert(0, repo_path)


_ensure_repo_on_path()

from app.ui.main import run_app  # noqa: E402


def main() -> None:
    run_app()


if __name__ == "__main__":
    main()
