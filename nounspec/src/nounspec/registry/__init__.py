"""Noun registry and its error taxonomy."""

from .errors import (
    BackrefInconsistencyError,
    DuplicateNounError,
    InvalidDescriptorError,
    NounSpecError,
    UnknownNounError,
)
from .registry import NounRegistry, build_registry

__all__ = [
    "NounRegistry",
    "build_registry",
    "NounSpecError",
    "InvalidDescriptorError",
    "DuplicateNounError",
    "UnknownNounError",
    "BackrefInconsistencyError",
]
