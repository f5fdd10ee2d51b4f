"""Catalog consistency layer.

- ``CacheAside``: snapshot reads/writes with failure isolation
- ``RelationshipMaintainer``: author/book reference maintenance
- ``AuthorService`` / ``BookService``: read and mutation paths
- ``CatalogService``: facade and live relationship resolution
"""

from folio.catalog.authors import AuthorService
from folio.catalog.books import BookService
from folio.catalog.cache_aside import CacheAside
from folio.catalog.relationships import RelationshipMaintainer
from folio.catalog.service import CatalogService

__all__ = [
    "AuthorService",
    "BookService",
    "CacheAside",
    "CatalogService",
    "RelationshipMaintainer",
]
