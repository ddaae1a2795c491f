"""Converters between the in-memory catalog and the catalog interchange file.

Primary Classes:
    CatalogWriter: Serializes a Catalog (strict; crash-safe file writes)
    CatalogReader: Parses a catalog file back (lenient)

Example:
-------
    >>> from homekit_catalog.converters import CatalogReader, CatalogWriter
    >>>
    >>> text = CatalogWriter().write_text(catalog)
    >>> decoded = CatalogReader().parse(text)
    >>> decoded.sorted_services() == catalog.sorted_services()
    True

"""

from homekit_catalog.converters.catalog_reader import CatalogReader, unquote
from homekit_catalog.converters.catalog_writer import CatalogWriter, format_timestamp, quote

__all__ = [
    "CatalogReader",
    "CatalogWriter",
    "format_timestamp",
    "quote",
    "unquote",
]
