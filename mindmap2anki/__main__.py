"""Entry point for running mindmap2anki as a module.

Usage:
    python -m mindmap2anki [input.html] [output.csv] [options]
"""
from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
