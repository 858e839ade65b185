"""Shared fixtures for nounspec tests."""

import logging

import pytest
from nounspec.config.settings import reset_settings


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep tests independent of the caller's environment and .env files."""
    for var in ("NOUNSPEC_CATALOG_DIR", "NOUNSPEC_INCLUDE_BUILTIN", "NOUNSPEC_STRICT_BACKREFS",
                "NOUNSPEC_LOG_LEVEL", "NOUNSPEC_LOG_FILE"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_settings()
    yield
    reset_settings()
    # CLI runs bind handlers to streams that are closed afterwards
    logging.getLogger("nounspec").handlers.clear()


@pytest.fixture
def document_nouns():
    """Document and DocumentVersion with mirrored backrefs."""
    return {
        "Document": {
            "singular": "document",
            "plural": "documents",
            "description": "A word-processing document",
            "properties": {
                "title": {"type": "string", "description": "Document title"},
                "content": {"type": "markdown", "optional": True},
                "tags": {"type": "string", "array": True, "optional": True},
            },
            "relationships": {
                "versions": {
                    "type": "DocumentVersion[]",
                    "backref": "document",
                    "description": "Version history",
                },
            },
            "actions": ["create", "update", "delete", "publish"],
            "events": ["created", "updated", "deleted", "published"],
        },
        "DocumentVersion": {
            "singular": "document version",
            "plural": "document versions",
            "properties": {
                "versionNumber": {"type": "number"},
                "createdAt": {"type": "datetime"},
            },
            "relationships": {
                "document": {"type": "Document", "backref": "versions"},
            },
            "actions": ["create", "restore"],
            "events": ["created", "restored"],
        },
    }


@pytest.fixture
def catalog_data(document_nouns):
    """A small catalog document in file shape."""
    return {
        "domain": "document",
        "description": "Documents",
        "external": ["Contact"],
        "categories": {"documents": ["Document", "DocumentVersion"]},
        "nouns": document_nouns,
    }
