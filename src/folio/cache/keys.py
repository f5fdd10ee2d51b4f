"""Cache key schema for Folio.

Keys are shared with existing deployments and must not change:

- ``author:<id>`` / ``book:<id>``: single-entity snapshots, no expiry
- ``authors`` / ``books``: whole-collection snapshots
- ``<lowercased genre>``: books-by-genre listing
- ``price_<min>_<max>``: books-by-price-range listing
- ``<lowercased search term>``: author name search listing

Genre and search-term keys carry no namespace, so they collide:

- A search for "authors" shares the ``authors`` collection key, and a genre
  called "books" shares the ``books`` key. Both sides store the same
  snapshot kind, so each serves the other's cached list until it expires or
  is overwritten.
- A genre and a search term with the same text, or a genre called
  "authors", share a key across kinds. Snapshot decoding rejects the wrong
  kind, so these collisions degrade to a cache miss.
"""

from __future__ import annotations

import math
from decimal import Decimal


def format_number(value: float) -> str:
    """Render a number the way the legacy keys were written (JavaScript ``String(n)``).

    Shortest round-tripping digits; integral values have no decimal point
    (``10.0 -> "10"``); exponent form below ``1e-6`` and from ``1e21`` up,
    with an explicit sign and no zero padding (``1e-7``, ``1e+21``).
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    if value < 0:
        return "-" + format_number(-value)

    _, digits, exponent = Decimal(repr(value)).normalize().as_tuple()
    text = "".join(str(digit) for digit in digits)
    k = len(text)
    n = k + int(exponent)  # decimal point position relative to the digits

    if k <= n <= 21:
        return text + "0" * (n - k)
    if 0 < n <= 21:
        return f"{text[:n]}.{text[n:]}"
    if -6 < n <= 0:
        return "0." + "0" * -n + text
    mantissa = text if k == 1 else f"{text[0]}.{text[1:]}"
    return f"{mantissa}e{'+' if n - 1 >= 0 else '-'}{abs(n - 1)}"


class CacheKeys:
    """Cache key generator."""

    AUTHORS = "authors"
    BOOKS = "books"

    @classmethod
    def author(cls, identity: str) -> str:
        """Key for a single author snapshot."""
        return f"author:{identity}"

    @classmethod
    def book(cls, identity: str) -> str:
        """Key for a single book snapshot."""
        return f"book:{identity}"

    @classmethod
    def genre(cls, genre: str) -> str:
        """Key for a books-by-genre listing."""
        return genre.lower()

    @classmethod
    def price_range(cls, min_price: float, max_price: float) -> str:
        """Key for a books-by-price-range listing."""
        return f"price_{format_number(min_price)}_{format_number(max_price)}"

    @classmethod
    def author_search(cls, search_term: str) -> str:
        """Key for an author name search listing."""
        return search_term.lower()
