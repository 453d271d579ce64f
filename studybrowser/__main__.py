"""
Package entry point.

Allows running the application via:

    python -m studybrowser

This simply forwards execution to studybrowser.cli.main().
"""

from studybrowser.cli import main

if __name__ == "__main__":
    main()
