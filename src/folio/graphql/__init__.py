"""GraphQL API module for Folio.

Provides GraphQL interface using Strawberry:
- Author and Book types with live relationship fields
- Query resolvers backed by the cache-aside read path
- Mutation resolvers backed by the write-through mutation path

Example:
    from folio.graphql import schema
    from strawberry.fastapi import GraphQLRouter

    router = GraphQLRouter(schema)
    app.include_router(router, prefix="/graphql")
"""

from folio.graphql.context import CatalogContext
from folio.graphql.schema import Author, Book, Mutation, Query, schema

__all__ = [
    # Schema
    "schema",
    "CatalogContext",
    # Types
    "Author",
    "Book",
    # Root types
    "Query",
    "Mutation",
]
