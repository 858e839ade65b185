"""Validators for noun descriptors and catalogs."""

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Collection, Dict, Iterable, List, Literal, Mapping
from urllib.parse import urlparse
from pydantic import TypeAdapter, ValidationError
from .catalog import CatalogIR
from .noun import NounDescriptor, PropertyDescriptor
from nounspec.config.logging import get_logger
from nounspec.utils.linguistic import pluralize_phrase

logger = get_logger(__name__)

PASCAL_CASE = re.compile(r"^[A-Z][A-Za-z0-9]*$")
CAMEL_CASE = re.compile(r"^[a-z][A-Za-z0-9]*$")

_DATE = TypeAdapter(date)
_DATETIME = TypeAdapter(datetime)


@dataclass
class QaIssue:
    """QA issue found during validation."""

    stage: Literal["Descriptor", "Category", "Backref", "Convention"]
    code: str  # e.g., "UNKNOWN_RELATIONSHIP_TARGET", "BACKREF_MISSING"
    location: str  # e.g., "Ad" or "Ad.adGroup"
    message: str
    details: dict = field(default_factory=dict)
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        return f"[{self.severity}] {self.code} {self.location}: {self.message}"


def has_errors(issues: Iterable[QaIssue]) -> bool:
    """True if any issue is an error rather than a warning."""
    return any(issue.severity == "error" for issue in issues)


def _log_summary(kind: str, issues: List[QaIssue]) -> None:
    if issues:
        logger.warning(f"{kind} validation found {len(issues)} issues")
    else:
        logger.debug(f"{kind} validation passed")


def _conforms(value: Any, kind: str) -> bool:
    if kind == "json":
        return True
    if kind in ("string", "markdown"):
        return isinstance(value, str)
    if kind == "number":
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if kind == "boolean":
        return isinstance(value, bool)
    if kind == "url":
        if not isinstance(value, str):
            return False
        parsed = urlparse(value)
        return bool(parsed.scheme and parsed.netloc)
    if kind in ("date", "datetime"):
        if not isinstance(value, str):
            return False
        try:
            (_DATE if kind == "date" else _DATETIME).validate_python(value)
        except ValidationError:
            return False
        return True
    return False


def example_conforms(prop: PropertyDescriptor, example: Any) -> bool:
    """
    Check one example literal against a property's type.

    For array properties an example may be a single element or a list of
    elements.
    """
    if prop.array and isinstance(example, list):
        return all(_conforms(item, prop.type) for item in example)
    return _conforms(example, prop.type)


def validate_descriptor(
    name: str, noun: NounDescriptor, known_names: Collection[str]
) -> List[QaIssue]:
    """
    Validate one descriptor in isolation plus its relationship targets.

    Args:
        name: Noun name the descriptor is registered under
        noun: Descriptor to validate
        known_names: Noun names relationships may point at

    Returns:
        List of QaIssue objects (empty if validation passes)
    """
    issues: List[QaIssue] = []

    def issue(code: str, location: str, message: str, **details: Any) -> None:
        issues.append(
            QaIssue(
                stage="Descriptor",
                code=code,
                location=location,
                message=message,
                details={"noun": name, **details},
            )
        )

    if not name.strip():
        issue("EMPTY_NAME", repr(name), "noun name is empty")

    for prop_name, prop in noun.properties.items():
        if not prop_name.strip():
            issue("EMPTY_NAME", f"{name}.{prop_name}", f"{name}: property with empty name")
        for example in prop.examples or []:
            if not example_conforms(prop, example):
                issue(
                    "EXAMPLE_TYPE_MISMATCH",
                    f"{name}.{prop_name}",
                    f"{name}.{prop_name}: example {example!r} is not a valid "
                    f"{prop.type}{'[]' if prop.array else ''}",
                    property=prop_name,
                    type=prop.type,
                    example=example,
                )
        if prop.default is not None and not example_conforms(prop, prop.default):
            issue(
                "DEFAULT_TYPE_MISMATCH",
                f"{name}.{prop_name}",
                f"{name}.{prop_name}: default {prop.default!r} is not a valid "
                f"{prop.type}{'[]' if prop.array else ''}",
                property=prop_name,
                type=prop.type,
                default=prop.default,
            )

    for rel_name, rel in noun.relationships.items():
        location = f"{name}.{rel_name}"
        if not rel_name.strip():
            issue("EMPTY_NAME", location, f"{name}: relationship with empty name")
        if rel.target != name and rel.target not in known_names:
            issue(
                "UNKNOWN_RELATIONSHIP_TARGET",
                location,
                f"{location} references unknown noun '{rel.target}'",
                relationship=rel_name,
                target=rel.target,
            )
        if rel.backref is not None and not rel.backref.strip():
            issue("EMPTY_BACKREF", location, f"{location} declares an empty backref")

    for kind, values in (("action", noun.actions), ("event", noun.events)):
        seen = set()
        for value in values:
            if not value.strip():
                issue("EMPTY_NAME", name, f"{name}: {kind} with empty name")
                continue
            if value in seen:
                issue(
                    f"DUPLICATE_{kind.upper()}",
                    f"{name}.{value}",
                    f"{name}: {kind} '{value}' is listed more than once",
                    **{kind: value},
                )
            seen.add(value)

    _log_summary(f"Descriptor '{name}'", issues)
    return issues


def validate_backrefs(
    nouns: Mapping[str, NounDescriptor], external: Collection[str] = ()
) -> List[QaIssue]:
    """
    Check that every declared backref is mirrored on its target noun.

    For relationship N.r -> M with backref b, M must declare relationship b
    whose target is N. Every violation is reported; checking never stops at
    the first one.

    Args:
        nouns: All descriptors keyed by noun name
        external: Names defined elsewhere; backrefs to them cannot be checked

    Returns:
        List of QaIssue objects located at the source relationship
    """
    issues: List[QaIssue] = []

    for name, noun in nouns.items():
        for rel_name, rel in noun.relationships.items():
            if not rel.backref:
                continue

            location = f"{name}.{rel_name}"
            details = {
                "noun": name,
                "relationship": rel_name,
                "target": rel.target,
                "backref": rel.backref,
            }

            target = nouns.get(rel.target)
            if target is None:
                if rel.target in external:
                    logger.debug(f"Skipping backref check for {location}: '{rel.target}' is external")
                    continue
                issues.append(
                    QaIssue(
                        stage="Backref",
                        code="BACKREF_MISSING",
                        location=location,
                        message=f"{location}: backref target '{rel.target}' is not registered",
                        details=details,
                    )
                )
                continue

            mirror = target.relationships.get(rel.backref)
            if mirror is None:
                issues.append(
                    QaIssue(
                        stage="Backref",
                        code="BACKREF_MISSING",
                        location=location,
                        message=f"{location}: backref '{rel.backref}' is not declared on "
                        f"'{rel.target}'",
                        details=details,
                    )
                )
            elif mirror.target != name:
                issues.append(
                    QaIssue(
                        stage="Backref",
                        code="BACKREF_TARGET_MISMATCH",
                        location=location,
                        message=f"{location}: '{rel.target}.{rel.backref}' points at "
                        f"'{mirror.target}', expected '{name}'",
                        details={**details, "mirror_target": mirror.target},
                    )
                )

    _log_summary("Backref", issues)
    return issues


def validate_categories(
    categories: Mapping[str, List[str]], known_names: Collection[str]
) -> List[QaIssue]:
    """Every name listed in a category must be a registered noun."""
    issues: List[QaIssue] = []
    for label, names in categories.items():
        for noun_name in names:
            if noun_name not in known_names:
                issues.append(
                    QaIssue(
                        stage="Category",
                        code="UNKNOWN_CATEGORY_NOUN",
                        location=f"{label}:{noun_name}",
                        message=f"category '{label}' lists unknown noun '{noun_name}'",
                        details={"category": label, "noun": noun_name},
                    )
                )
    _log_summary("Category", issues)
    return issues


def validate_conventions(nouns: Mapping[str, NounDescriptor]) -> List[QaIssue]:
    """
    Lint naming conventions. Findings are warnings and never block loading.

    Args:
        nouns: All descriptors keyed by noun name

    Returns:
        List of warning-level QaIssue objects
    """
    issues: List[QaIssue] = []

    def warn(code: str, location: str, message: str, **details: Any) -> None:
        issues.append(
            QaIssue(
                stage="Convention",
                code=code,
                location=location,
                message=message,
                details=details,
                severity="warning",
            )
        )

    for name, noun in nouns.items():
        if not PASCAL_CASE.match(name):
            warn("NOUN_NAME_CASE", name, f"noun name '{name}' is not PascalCase", noun=name)

        fields: Dict[str, Iterable[str]] = {
            "property": noun.properties,
            "relationship": noun.relationships,
            "action": noun.actions,
            "event": noun.events,
        }
        for kind, names in fields.items():
            for field_name in names:
                if field_name.strip() and not CAMEL_CASE.match(field_name):
                    warn(
                        "FIELD_NAME_CASE",
                        f"{name}.{field_name}",
                        f"{kind} '{field_name}' on '{name}' is not camelCase",
                        noun=name,
                        kind=kind,
                    )

        for shadowed in sorted(set(noun.properties) & set(noun.relationships)):
            warn(
                "FIELD_NAME_SHADOWED",
                f"{name}.{shadowed}",
                f"'{shadowed}' on '{name}' is both a property and a relationship",
                noun=name,
            )

        expected_plural = pluralize_phrase(noun.singular)
        if noun.plural != expected_plural:
            warn(
                "PLURAL_MISMATCH",
                name,
                f"'{name}' plural '{noun.plural}' differs from inferred '{expected_plural}'",
                noun=name,
                expected=expected_plural,
            )

    _log_summary("Convention", issues)
    return issues


def validate_catalog(catalog: CatalogIR) -> List[QaIssue]:
    """
    Validate a single catalog document.

    Args:
        catalog: CatalogIR to validate

    Returns:
        List of QaIssue objects (errors and warnings)
    """
    known = set(catalog.nouns) | set(catalog.external)
    issues: List[QaIssue] = []

    for name, noun in catalog.nouns.items():
        issues.extend(validate_descriptor(name, noun, known))
    issues.extend(validate_categories(catalog.categories, set(catalog.nouns)))
    issues.extend(validate_backrefs(catalog.nouns, catalog.external))
    issues.extend(validate_conventions(catalog.nouns))

    if has_errors(issues):
        logger.warning(f"Catalog '{catalog.domain}' has {len(issues)} issues")
    else:
        logger.info(f"Catalog '{catalog.domain}' validation passed")
    return issues
