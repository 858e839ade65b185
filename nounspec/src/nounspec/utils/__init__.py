"""Utility functions for common operations."""

from .catalog_io import load_catalog, load_catalogs, parse_catalog, save_catalog
from .linguistic import conjugate, pluralize, singularize, type_meta

__all__ = [
    "load_catalog",
    "load_catalogs",
    "parse_catalog",
    "save_catalog",
    "conjugate",
    "pluralize",
    "singularize",
    "type_meta",
]
