"""Utilities for loading and saving catalogs from/to JSON files."""

import json
from pathlib import Path
from typing import Any, List, Tuple
from pydantic import TypeAdapter
from nounspec.config.logging import get_logger
from nounspec.ir.catalog import CatalogIR

logger = get_logger(__name__)

_CATALOG = TypeAdapter(CatalogIR)


def _reject_duplicate_keys(pairs: List[Tuple[str, Any]]) -> dict:
    """object_pairs_hook that refuses repeated keys instead of keeping the last one."""
    result = {}
    for key, value in pairs:
        if key in result:
            raise ValueError(f"duplicate key '{key}'")
        result[key] = value
    return result


def parse_catalog(text: str, source: str = "<string>") -> CatalogIR:
    """
    Parse catalog JSON text.

    Args:
        text: JSON document
        source: Where the text came from, used in error messages

    Returns:
        Parsed CatalogIR

    Raises:
        ValueError: If the text is empty, not JSON, repeats a key or does
            not match the catalog shape
    """
    if not text.strip():
        raise ValueError(f"Catalog is empty: {source}")
    try:
        data = json.loads(text, object_pairs_hook=_reject_duplicate_keys)
        return _CATALOG.validate_python(data)
    except ValueError as e:
        raise ValueError(f"Failed to load catalog from {source}: {e}") from e


def load_catalog(path: Path) -> CatalogIR:
    """
    Load a CatalogIR from a JSON file.

    Args:
        path: Path to the JSON file

    Returns:
        Loaded CatalogIR instance

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or invalid
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Catalog file not found: {path}")

    catalog = parse_catalog(path.read_text(encoding="utf-8"), source=str(path))
    logger.info(f"Loaded catalog '{catalog.domain}' from {path} ({len(catalog.nouns)} nouns)")
    return catalog


def load_catalogs(directory: Path) -> List[CatalogIR]:
    """Load every *.json catalog in a directory, in file name order."""
    directory = Path(directory)
    if not directory.is_dir():
        raise FileNotFoundError(f"Catalog directory not found: {directory}")
    return [load_catalog(p) for p in sorted(directory.glob("*.json"))]


def save_catalog(catalog: CatalogIR, path: Path) -> None:
    """
    Save a CatalogIR to a JSON file in wire shape (defaults left out).

    Note:
        Creates parent directories if they don't exist.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(catalog.to_wire(), indent=2) + "\n", encoding="utf-8")
