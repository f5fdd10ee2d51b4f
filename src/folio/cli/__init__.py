"""CLI commands for Folio.

Provides command-line interface using Typer:
- folio serve: Run the API server
- folio check: Check document store and cache connectivity

Usage:
    folio --help
    folio serve --port 8080
    folio check
"""

import typer

from folio.cli.check import app as check_app
from folio.cli.serve import app as serve_app

# Main CLI application
app = typer.Typer(
    name="folio",
    help="Folio: catalog of authors and books",
    no_args_is_help=True,
)

# Add subcommands
app.add_typer(serve_app, name="serve")
app.add_typer(check_app, name="check")


@app.callback()
def callback() -> None:
    """Folio: catalog of authors and books."""
    pass


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
