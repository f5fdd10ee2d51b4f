"""Main entry point for the Folio CLI.

Usage:
    python -m folio --help
    folio --help  # If installed via pip/uv
"""

from folio.cli import main

if __name__ == "__main__":
    main()
