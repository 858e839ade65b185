"""Bundled noun catalogs."""

from .loader import CATALOGS_DIR, list_builtin_catalogs, load_builtin_catalog, load_builtin_catalogs

__all__ = ["CATALOGS_DIR", "list_builtin_catalogs", "load_builtin_catalog", "load_builtin_catalogs"]
