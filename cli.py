"""CLI entry point - wrapper for running from a checkout

``python cli.py`` behaves like ``python -m cli``.
"""

from cli.main import main

if __name__ == "__main__":
    main()
