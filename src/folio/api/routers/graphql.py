"""GraphQL API router.

Mounts the Strawberry GraphQL schema to FastAPI.

Example:
    from folio.api.routers.graphql import create_router

    app.include_router(create_router(graphql_ide=True))
"""

from __future__ import annotations

from typing import Any, cast

from fastapi import Request
from strawberry.fastapi import GraphQLRouter

from folio.graphql import CatalogContext, schema


async def get_context(request: Request) -> CatalogContext:
    """Create the GraphQL context for one request.

    Args:
        request: FastAPI request object

    Returns:
        CatalogContext bound to the application's catalog service
    """
    return CatalogContext(request.app.state.catalog)


def create_router(graphql_ide: bool = True) -> GraphQLRouter[Any, Any]:
    """Create the GraphQL router; the GraphiQL playground is optional."""
    return GraphQLRouter(
        schema,
        path="/graphql",
        graphql_ide="graphiql" if graphql_ide else None,
        context_getter=cast(Any, get_context),
    )
