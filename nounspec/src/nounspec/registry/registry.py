"""Noun registry: validate descriptors once, then serve lookups."""

from typing import Any, Dict, Iterable, Iterator, List, Mapping, Set, Tuple, Union
from pydantic import ValidationError
from nounspec.config.logging import get_logger
from nounspec.ir.catalog import CatalogIR
from nounspec.ir.noun import NounDescriptor
from nounspec.ir.validators import (
    QaIssue,
    validate_backrefs,
    validate_categories,
    validate_descriptor,
)
from nounspec.utils.linguistic import pascal_case
from .errors import (
    BackrefInconsistencyError,
    DuplicateNounError,
    InvalidDescriptorError,
    UnknownNounError,
)

logger = get_logger(__name__)

DescriptorLike = Union[NounDescriptor, Mapping[str, Any]]


def _detached(noun: NounDescriptor) -> NounDescriptor:
    """Deep copy, so nested dicts of a stored descriptor never leave the registry."""
    return noun.model_copy(deep=True)


def _coerce(name: str, descriptor: DescriptorLike) -> NounDescriptor:
    """Turn a raw mapping into a NounDescriptor, reporting failures as QaIssues."""
    if isinstance(descriptor, NounDescriptor):
        return _detached(descriptor)
    try:
        return NounDescriptor.model_validate(descriptor)
    except ValidationError as e:
        issues = [
            QaIssue(
                stage="Descriptor",
                code="MALFORMED_DESCRIPTOR",
                location=".".join([name, *(str(part) for part in err["loc"])]),
                message=f"{'.'.join(str(part) for part in err['loc']) or name}: {err['msg']}",
                details={"noun": name, "type": err["type"]},
            )
            for err in e.errors()
        ]
        raise InvalidDescriptorError(name, issues) from e


class NounRegistry:
    """
    Registry of noun descriptors keyed by noun name.

    Built once (register / register_all / register_catalog), then read.
    Reads never mutate the registry, so one instance can be shared freely.
    """

    def __init__(self):
        self._nouns: Dict[str, NounDescriptor] = {}
        self._singulars: Dict[str, str] = {}  # singular -> noun name
        self._external: Set[str] = set()
        self._categories: Dict[str, List[str]] = {}

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------

    def declare_external(self, names: Iterable[str]) -> None:
        """Accept names defined by other catalogs as relationship targets."""
        for name in names:
            if name not in self._nouns:
                self._external.add(name)

    def register(self, descriptor: DescriptorLike, name: str | None = None) -> NounDescriptor:
        """
        Register a single descriptor.

        Args:
            descriptor: NounDescriptor or raw mapping in catalog shape
            name: Noun name; defaults to the PascalCase form of `singular`

        Returns:
            The registered NounDescriptor

        Raises:
            DuplicateNounError: If the name or singular is already registered
            InvalidDescriptorError: If the descriptor is malformed
        """
        if name is None:
            singular = (
                descriptor.singular
                if isinstance(descriptor, NounDescriptor)
                else str(descriptor.get("singular", ""))
            )
            name = pascal_case(singular)
        return self.register_all({name: descriptor})[name]

    def register_all(self, descriptors: Mapping[str, DescriptorLike]) -> Dict[str, NounDescriptor]:
        """
        Register a batch of descriptors that may reference one another.

        Relationship targets are resolved against registered, batch and
        external names. The batch is atomic: if any member fails nothing is
        registered.

        Args:
            descriptors: Descriptors keyed by noun name

        Returns:
            The registered descriptors keyed by name

        Raises:
            DuplicateNounError: On a name or singular collision
            InvalidDescriptorError: On the first malformed descriptor
        """
        batch: Dict[str, NounDescriptor] = {}
        batch_singulars: Dict[str, str] = {}

        for name, descriptor in descriptors.items():
            noun = _coerce(name, descriptor)
            if name in self._nouns:
                raise DuplicateNounError(name)
            existing = self._singulars.get(noun.singular) or batch_singulars.get(noun.singular)
            if existing is not None:
                raise DuplicateNounError(name, existing)
            batch[name] = noun
            batch_singulars[noun.singular] = name

        known = set(self._nouns) | set(batch) | self._external
        for name, noun in batch.items():
            issues = validate_descriptor(name, noun, known)
            if issues:
                raise InvalidDescriptorError(name, issues)

        for name, noun in batch.items():
            self._nouns[name] = noun
            self._singulars[noun.singular] = name
            self._external.discard(name)
            logger.debug(f"Registered noun: {name}")

        return {name: _detached(noun) for name, noun in batch.items()}

    def add_categories(self, categories: Mapping[str, Iterable[str]]) -> None:
        """Merge a category map; lists under an existing label are extended."""
        for label, names in categories.items():
            merged = self._categories.setdefault(label, [])
            for name in names:
                if name not in merged:
                    merged.append(name)

    def register_catalog(self, catalog: CatalogIR) -> None:
        """Register every noun of a catalog along with its externals and categories."""
        self.declare_external(catalog.external)
        self.register_all(catalog.nouns)
        self.add_categories(catalog.categories)
        logger.info(f"Registered catalog '{catalog.domain}' ({len(catalog.nouns)} nouns)")

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def resolve(self, name: str) -> NounDescriptor:
        """
        Look up a descriptor by noun name.

        The result is a copy; changing it never changes the registry.

        Raises:
            UnknownNounError: If no noun of that name is registered
        """
        try:
            noun = self._nouns[name]
        except KeyError:
            raise UnknownNounError(name) from None
        return _detached(noun)

    def names(self) -> List[str]:
        """Registered noun names in registration order."""
        return list(self._nouns)

    def items(self) -> List[Tuple[str, NounDescriptor]]:
        return [(name, _detached(noun)) for name, noun in self._nouns.items()]

    @property
    def external(self) -> Set[str]:
        return set(self._external)

    def __contains__(self, name: object) -> bool:
        return name in self._nouns

    def __len__(self) -> int:
        return len(self._nouns)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._nouns))

    def relationships_to(self, name: str) -> List[Tuple[str, str]]:
        """
        Find every relationship pointing at a noun.

        Args:
            name: Target noun name

        Returns:
            (source noun, relationship name) pairs
        """
        self.resolve(name)
        return [
            (source, rel_name)
            for source, noun in self._nouns.items()
            for rel_name, rel in noun.relationships.items()
            if rel.target == name
        ]

    def categories(self) -> Dict[str, List[str]]:
        """
        Category label -> noun names.

        Raises:
            UnknownNounError: If any category lists an unregistered noun
        """
        issues = validate_categories(self._categories, self._nouns)
        if issues:
            raise UnknownNounError([issue.details["noun"] for issue in issues])
        return {label: list(names) for label, names in self._categories.items()}

    # ------------------------------------------------------------------
    # Auditing
    # ------------------------------------------------------------------

    def validate_backrefs(self) -> List[QaIssue]:
        """Report every backref not mirrored on its target; never raises."""
        return validate_backrefs(self._nouns, self._external)

    def check_backrefs(self) -> None:
        """
        Raise if any backref is inconsistent.

        Raises:
            BackrefInconsistencyError: Carrying every inconsistency found
        """
        issues = self.validate_backrefs()
        if issues:
            raise BackrefInconsistencyError(issues)

    def to_catalog(self, domain: str, description: str = "") -> CatalogIR:
        """Snapshot the registry as a single catalog document."""
        return CatalogIR(
            domain=domain,
            description=description,
            nouns={name: _detached(noun) for name, noun in self._nouns.items()},
            categories={label: list(names) for label, names in self._categories.items()},
            external=sorted(self._external),
        )


def build_registry(catalogs: Iterable[CatalogIR]) -> NounRegistry:
    """
    Build a registry from catalog documents.

    All nouns go in as one batch so references across catalogs resolve. A
    name one catalog declares external and another defines ends up as a
    regular registered noun.

    Args:
        catalogs: Catalog documents to combine

    Returns:
        Populated NounRegistry

    Raises:
        DuplicateNounError: If two catalogs define the same noun
        InvalidDescriptorError: If any descriptor is malformed
    """
    catalogs = list(catalogs)
    registry = NounRegistry()

    defined: Dict[str, NounDescriptor] = {}
    for catalog in catalogs:
        for name, noun in catalog.nouns.items():
            if name in defined:
                raise DuplicateNounError(name)
            defined[name] = noun

    for catalog in catalogs:
        registry.declare_external(n for n in catalog.external if n not in defined)
    registry.register_all(defined)
    for catalog in catalogs:
        registry.add_categories(catalog.categories)

    logger.info(
        f"Built registry from {len(catalogs)} catalogs: "
        f"{len(registry)} nouns, {len(registry.external)} external"
    )
    return registry
