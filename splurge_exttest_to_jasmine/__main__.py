"""Main entry point for running splurge-exttest-to-jasmine as a module.

This allows users to run the CLI with:
    python -m splurge_exttest_to_jasmine [command] [options]
"""

from .cli import main

if __name__ == "__main__":
    main()
