"""Access to the catalogs bundled with the package."""

from pathlib import Path
from typing import List
from nounspec.config.logging import get_logger
from nounspec.ir.catalog import CatalogIR
from nounspec.utils.catalog_io import load_catalog

logger = get_logger(__name__)

# Base directory for bundled catalogs
CATALOGS_DIR = Path(__file__).resolve().parent


def list_builtin_catalogs() -> List[str]:
    """Domain names of the bundled catalogs, sorted."""
    return sorted(p.stem for p in CATALOGS_DIR.glob("*.json"))


def load_builtin_catalog(domain: str) -> CatalogIR:
    """
    Load one bundled catalog.

    Args:
        domain: Domain name, e.g. 'advertising'

    Returns:
        CatalogIR for that domain

    Raises:
        FileNotFoundError: If no catalog of that name is bundled
    """
    path = CATALOGS_DIR / f"{domain}.json"
    if not path.exists():
        available = ", ".join(list_builtin_catalogs())
        logger.error(f"Bundled catalog not found: {domain}")
        raise FileNotFoundError(f"No bundled catalog '{domain}'. Available catalogs: {available}")
    return load_catalog(path)


def load_builtin_catalogs() -> List[CatalogIR]:
    """Load every bundled catalog."""
    return [load_builtin_catalog(domain) for domain in list_builtin_catalogs()]
