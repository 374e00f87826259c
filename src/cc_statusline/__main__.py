"""Allow running the renderer with ``python -m cc_statusline``."""

from .main import run_statusline

if __name__ == "__main__":
    run_statusline()
