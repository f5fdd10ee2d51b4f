"""HTTP surface for Folio."""
