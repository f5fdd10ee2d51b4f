"""API routers for Folio."""

from folio.api.routers import graphql, health

__all__ = ["graphql", "health"]
