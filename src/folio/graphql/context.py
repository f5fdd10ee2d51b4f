"""Per-request GraphQL context."""

from __future__ import annotations

from strawberry.fastapi import BaseContext

from folio.catalog.service import CatalogService


class CatalogContext(BaseContext):
    """Context object handed to every resolver.

    Holds the process-wide ``CatalogService``; nothing in it is cached
    across requests.
    """

    def __init__(self, catalog: CatalogService) -> None:
        super().__init__()
        self.catalog = catalog
