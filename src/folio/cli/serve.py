"""CLI command for running the API server.

Usage:
    folio serve
    folio serve --port 8080 --host 0.0.0.0
    folio serve --reload --log-level debug
"""

from __future__ import annotations

import typer

from folio.config import settings

app = typer.Typer(help="Run the Folio API server")


@app.callback(invoke_without_command=True)
def serve(
    host: str = typer.Option(
        settings.host,
        "--host",
        "-h",
        help="Host to bind to",
    ),
    port: int = typer.Option(
        settings.port,
        "--port",
        "-p",
        help="Port to listen on",
    ),
    reload: bool = typer.Option(
        False,
        "--reload",
        "-r",
        help="Enable auto-reload for development",
    ),
    log_level: str = typer.Option(
        "info",
        "--log-level",
        "-l",
        help="Log level: debug, info, warning, error",
    ),
) -> None:
    """Run the Folio API server.

    Starts the uvicorn server with the FastAPI application.
    """
    import uvicorn

    typer.echo("Starting Folio server...")
    typer.echo(f"  Host: {host}")
    typer.echo(f"  Port: {port}")
    typer.echo(f"  Store: {settings.store_backend}")
    typer.echo(f"  Log level: {log_level}")
    if reload:
        typer.echo("  Reload: enabled")
    typer.echo()
    typer.echo(f"GraphQL endpoint: http://{host}:{port}/graphql")
    typer.echo()

    uvicorn.run(
        app="folio.api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=log_level.lower(),
    )
