"""CLI command for checking backing service connectivity.

Usage:
    folio check
"""

from __future__ import annotations

import asyncio

import typer

from folio.cache.redis import RedisConnection
from folio.config import Settings, settings

app = typer.Typer(help="Check document store and cache connectivity")


async def _run_checks(config: Settings) -> dict[str, bool]:
    from folio.persistence.factory import create_document_store

    results: dict[str, bool] = {}

    store = create_document_store(config)
    try:
        results["store"] = await store.health_check()
    finally:
        await store.close()

    connection = RedisConnection(config.redis_url)
    await connection.connect()
    try:
        results["cache"] = await connection.health_check()
    finally:
        await connection.close()

    return results


@app.callback(invoke_without_command=True)
def check() -> None:
    """Report whether the configured store and cache are reachable.

    Exits with code 1 when the document store is down. A down cache is
    reported but tolerated, since reads fall back to the store.
    """
    typer.echo(f"Store backend: {settings.store_backend}")
    results = asyncio.run(_run_checks(settings))

    for name, healthy in results.items():
        status = typer.style("up", fg=typer.colors.GREEN) if healthy else typer.style(
            "down", fg=typer.colors.RED
        )
        typer.echo(f"  {name}: {status}")

    if not results["store"]:
        raise typer.Exit(code=1)
