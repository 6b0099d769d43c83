"""Shared fixtures for pipeline tests."""

import pytest

from grocery.common.entry_repository import InMemoryEntryRepository
from grocery.domain.categorization.knowledge_store import KnowledgeStore
from grocery.domain.ingestion.grocery_list import GroceryList


@pytest.fixture
def store():
    return KnowledgeStore()


@pytest.fixture
def grocery_list():
    return GroceryList()


@pytest.fixture
def entry_repository():
    return InMemoryEntryRepository()
