"""Translation of catalog errors into GraphQL errors.

Catalog error kinds map onto the codes clients already know:

    BAD_INPUT -> BAD_USER_INPUT
    NOT_FOUND -> NOT_FOUND
    INTERNAL  -> INTERNAL_SERVER_ERROR

Anything else raised inside a resolver is masked by the schema so no
internal detail leaks to clients.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from graphql import GraphQLError

from folio.core.errors import CatalogError, ErrorKind

logger = logging.getLogger(__name__)

ERROR_CODES: dict[ErrorKind, str] = {
    ErrorKind.BAD_INPUT: "BAD_USER_INPUT",
    ErrorKind.NOT_FOUND: "NOT_FOUND",
    ErrorKind.INTERNAL: "INTERNAL_SERVER_ERROR",
}

MASKED_ERROR_MESSAGE = "Internal Server Error"


def to_graphql_error(exc: CatalogError) -> GraphQLError:
    return GraphQLError(exc.message, extensions={"code": ERROR_CODES[exc.kind]})


@contextmanager
def catalog_errors() -> Iterator[None]:
    """Re-raise ``CatalogError`` as a coded ``GraphQLError``."""
    try:
        yield
    except CatalogError as exc:
        if exc.kind is ErrorKind.INTERNAL:
            logger.error("Catalog operation failed: %s", exc.message)
        raise to_graphql_error(exc) from exc


def should_mask_error(error: GraphQLError) -> bool:
    """Mask every error that did not come through ``catalog_errors``.

    Query validation errors (no original exception) are left alone.
    """
    original = error.original_error
    if original is None:
        return False
    if isinstance(original, GraphQLError) and "code" in (original.extensions or {}):
        return False
    logger.error("Unhandled resolver error", exc_info=original)
    return True
