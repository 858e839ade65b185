"""Typer CLI application."""

import dataclasses
import json
from pathlib import Path
from typing import List, Optional

import typer

from nounspec.catalogs import load_builtin_catalogs
from nounspec.config.logging import setup_logging
from nounspec.config.settings import get_settings
from nounspec.ir.catalog import CatalogIR
from nounspec.ir.validators import QaIssue, validate_conventions
from nounspec.registry import NounRegistry, NounSpecError, build_registry
from nounspec.utils.catalog_io import load_catalog, load_catalogs, save_catalog
from nounspec.utils.linguistic import type_meta

app = typer.Typer(help="nounspec: catalog of noun descriptors for SaaS domains")


def _fail(message: str) -> None:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(1)


def _collect_catalogs(files: Optional[List[Path]], no_builtin: bool) -> List[CatalogIR]:
    settings = get_settings()
    catalogs: List[CatalogIR] = []
    if settings.include_builtin and not no_builtin:
        catalogs.extend(load_builtin_catalogs())
    if settings.catalog_dir:
        catalogs.extend(load_catalogs(settings.catalog_dir))
    for path in files or []:
        catalogs.append(load_catalog(path))
    return catalogs


def _load_registry(files: Optional[List[Path]], no_builtin: bool) -> NounRegistry:
    try:
        return build_registry(_collect_catalogs(files, no_builtin))
    except (NounSpecError, FileNotFoundError, ValueError) as e:
        _fail(str(e))


def _print_issues(issues: List[QaIssue]) -> None:
    for issue in issues:
        typer.echo(str(issue))


@app.command()
def validate(
    catalogs: Optional[List[Path]] = typer.Argument(None, help="Extra catalog JSON files"),
    no_builtin: bool = typer.Option(False, "--no-builtin", help="Skip the bundled catalogs"),
    strict: bool = typer.Option(False, "--strict", help="Fail on backref inconsistencies"),
    warnings: bool = typer.Option(False, "--warnings", help="Also report naming convention warnings"),
):
    """
    Build the registry and audit it.

    Registration errors and unknown category entries always fail. Backref
    inconsistencies fail only in strict mode.
    """
    setup_logging()
    settings = get_settings()
    strict = strict or settings.strict_backrefs

    registry = _load_registry(catalogs, no_builtin)
    typer.echo(f"Registered {len(registry)} nouns ({len(registry.external)} external references)")

    try:
        categories = registry.categories()
    except NounSpecError as e:
        _fail(str(e))
    typer.echo(f"Categories: {len(categories)} labels, all names resolve")

    backref_issues = registry.validate_backrefs()
    _print_issues(backref_issues)
    typer.echo(f"Backrefs: {len(backref_issues)} inconsistencies")

    if warnings:
        convention_issues = validate_conventions(dict(registry.items()))
        _print_issues(convention_issues)
        typer.echo(f"Conventions: {len(convention_issues)} warnings")

    if backref_issues and strict:
        raise typer.Exit(1)
    typer.echo("✓ Catalog is valid")


@app.command("list")
def list_nouns(
    catalog: Optional[List[Path]] = typer.Option(None, "--catalog", "-c", help="Extra catalog JSON file (repeatable)"),
    no_builtin: bool = typer.Option(False, "--no-builtin", help="Skip the bundled catalogs"),
):
    """List nouns grouped by category."""
    setup_logging()
    registry = _load_registry(catalog, no_builtin)
    try:
        categories = registry.categories()
    except NounSpecError as e:
        _fail(str(e))

    listed = set()
    for label, names in categories.items():
        typer.echo(f"{label}: {', '.join(names)}")
        listed.update(names)
    uncategorized = [name for name in registry.names() if name not in listed]
    if uncategorized:
        typer.echo(f"(uncategorized): {', '.join(uncategorized)}")


@app.command()
def show(
    name: str,
    catalog: Optional[List[Path]] = typer.Option(None, "--catalog", "-c", help="Extra catalog JSON file (repeatable)"),
    no_builtin: bool = typer.Option(False, "--no-builtin", help="Skip the bundled catalogs"),
):
    """Print one noun descriptor as JSON."""
    setup_logging()
    registry = _load_registry(catalog, no_builtin)
    try:
        noun = registry.resolve(name)
    except NounSpecError as e:
        _fail(str(e))
    typer.echo(json.dumps(noun.to_wire(), indent=2))


@app.command()
def meta(
    name: str,
    catalog: Optional[List[Path]] = typer.Option(None, "--catalog", "-c", help="Extra catalog JSON file (repeatable)"),
    no_builtin: bool = typer.Option(False, "--no-builtin", help="Skip the bundled catalogs"),
):
    """Print derived type metadata (slugs, audit fields, event types) as JSON."""
    setup_logging()
    registry = _load_registry(catalog, no_builtin)
    try:
        noun = registry.resolve(name)
    except NounSpecError as e:
        _fail(str(e))
    typer.echo(json.dumps(dataclasses.asdict(type_meta(name, noun)), indent=2))


@app.command()
def export(
    out: Path,
    domain: str = typer.Option("all", "--domain", help="Domain label of the exported catalog"),
    catalog: Optional[List[Path]] = typer.Option(None, "--catalog", "-c", help="Extra catalog JSON file (repeatable)"),
    no_builtin: bool = typer.Option(False, "--no-builtin", help="Skip the bundled catalogs"),
):
    """Write the merged registry as a single catalog file."""
    setup_logging()
    registry = _load_registry(catalog, no_builtin)
    save_catalog(registry.to_catalog(domain), out)
    typer.echo(f"✓ Exported {len(registry)} nouns to {out}")


def main():
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
