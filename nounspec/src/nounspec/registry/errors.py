"""Registry errors. All of them point at a defect in catalog data."""

from typing import Iterable, List, TYPE_CHECKING

if TYPE_CHECKING:
    from nounspec.ir.validators import QaIssue


class NounSpecError(Exception):
    """Base class for catalog and registry errors."""

    pass


class InvalidDescriptorError(NounSpecError):
    """Raised when a descriptor is malformed at registration time."""

    def __init__(self, name: str, issues: List["QaIssue"]):
        self.name = name
        self.issues = list(issues)
        lines = "; ".join(issue.message for issue in self.issues)
        super().__init__(f"Invalid descriptor '{name}': {lines}")


class DuplicateNounError(NounSpecError):
    """Raised when a noun name or singular is already registered."""

    def __init__(self, name: str, existing: str | None = None):
        self.name = name
        self.existing = existing or name
        if self.existing == name:
            message = f"Noun '{name}' is already registered"
        else:
            message = f"Noun '{name}' collides with registered noun '{self.existing}'"
        super().__init__(message)


class UnknownNounError(NounSpecError, KeyError):
    """Raised when a lookup or category names a noun that is not registered."""

    def __init__(self, names: str | Iterable[str]):
        self.names = [names] if isinstance(names, str) else list(names)
        super().__init__(f"Unknown noun(s): {', '.join(self.names)}")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])


class BackrefInconsistencyError(NounSpecError):
    """Raised when declared backrefs are not mirrored on their target nouns."""

    def __init__(self, issues: List["QaIssue"]):
        self.issues = list(issues)
        locations = ", ".join(issue.location for issue in self.issues)
        super().__init__(f"{len(self.issues)} backref inconsistencies: {locations}")
