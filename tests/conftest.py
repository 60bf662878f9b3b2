"""Root pytest configuration and shared fixtures."""

import logging

import pytest

from mintydocs.hierarchy.inheritance import InheritanceResolver
from mintydocs.hierarchy.model import HierarchyModel
from mintydocs.page_store.store import InMemoryPageStore
from mintydocs.permissions.identity import Actor, StaticIdentityProvider
from mintydocs.permissions.resolver import PermissionResolver
from mintydocs.toc.engine import TocEngine
from mintydocs.toc.renderer import HtmlRenderer
from tests.fixtures.sample_docs import SAMPLE_USERS, populate_sample_docs

# Suppress ERROR logs from atlassian-python-api during wrapper tests.
logging.getLogger("atlassian").setLevel(logging.WARNING)


@pytest.fixture
def store():
    """In-memory store holding the sample documentation tree."""
    page_store = InMemoryPageStore()
    populate_sample_docs(page_store)
    return page_store


@pytest.fixture
def model(store):
    return HierarchyModel(store)


@pytest.fixture
def resolver(model):
    return InheritanceResolver(model)


@pytest.fixture
def renderer(store):
    return HtmlRenderer(store)


@pytest.fixture
def toc_engine(model, resolver, renderer):
    return TocEngine(model, resolver, renderer)


@pytest.fixture
def identity_provider():
    """Identity provider with the sample users; the current user is Alice."""
    return StaticIdentityProvider(SAMPLE_USERS, current_user="Alice")


@pytest.fixture
def permissions(model, identity_provider):
    return PermissionResolver(model, identity_provider)


@pytest.fixture
def alice():
    """Product admin of Widget."""
    return Actor("Alice")


@pytest.fixture
def root_user():
    """Holder of the global administer right."""
    return Actor("Root")
