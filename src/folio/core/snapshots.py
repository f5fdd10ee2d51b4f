"""Versioned snapshot envelopes for cached documents.

Every cached value is a JSON object ``{"kind": ..., "version": ..., "data": ...}``.
Decoding validates the envelope and the payload, so a stale schema or a
foreign blob under a colliding key surfaces as ``SnapshotError`` instead of a
half-populated document.
"""

from __future__ import annotations

from typing import Any, Literal, TypeVar

import orjson
from pydantic import BaseModel, ValidationError

from folio.core.errors import SnapshotError
from folio.core.model import Author, Book

SNAPSHOT_VERSION = 1

ORJSON_OPTIONS = orjson.OPT_NON_STR_KEYS | orjson.OPT_UTC_Z


class Snapshot(BaseModel):
    model_config = {"extra": "forbid"}

    version: Literal[1] = SNAPSHOT_VERSION
    data: Any


class AuthorSnapshot(Snapshot):
    kind: Literal["author"] = "author"
    data: Author


class AuthorListSnapshot(Snapshot):
    kind: Literal["author_list"] = "author_list"
    data: list[Author]


class BookSnapshot(Snapshot):
    kind: Literal["book"] = "book"
    data: Book


class BookListSnapshot(Snapshot):
    kind: Literal["book_list"] = "book_list"
    data: list[Book]


SnapshotT = TypeVar("SnapshotT", bound=Snapshot)


def encode_snapshot(snapshot: Snapshot) -> bytes:
    """Serialize a snapshot to canonical JSON bytes."""
    return orjson.dumps(snapshot.model_dump(by_alias=True), option=ORJSON_OPTIONS)


def decode_snapshot(snapshot_type: type[SnapshotT], raw: bytes | str) -> SnapshotT:
    """Decode and validate cached bytes as ``snapshot_type``.

    Raises:
        SnapshotError: if the bytes are not valid JSON or do not match the
            declared kind, version or payload schema.
    """
    try:
        return snapshot_type.model_validate_json(raw)
    except ValidationError as exc:
        raise SnapshotError(
            f"Cached value is not a valid {snapshot_type.__name__}: "
            f"{exc.error_count()} validation error(s)"
        ) from exc
