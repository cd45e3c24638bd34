"""Shared fixtures for the JSON Tree Editor tests."""

import pytest

from json_tree_editor.config.models import EditorConfig
from json_tree_editor.services.document_store import InMemoryDocumentStore
from json_tree_editor.services.mutation_engine import MutationEngine


@pytest.fixture
def sample_document():
    return {
        "user": {
            "name": "Alice Johnson",
            "settings": {
                "theme": "dark",
                "notifications": True
            }
        },
        "tags": ["a", "b"],
        "count": 0
    }


@pytest.fixture
def config():
    return EditorConfig()


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def engine(sample_document, store, config):
    return MutationEngine(document=sample_document, store=store, config=config)
