"""Shared fixtures: app state built from in-memory store and fake collaborators."""

import pytest
from fastapi.testclient import TestClient

from server.app import create_app
from server.services import InMemoryAnalyticsStore
from server.state import set_state

from .fakes import THREE_MATCHES, FakeInferenceClient, FakeUrlSigner, build_state


@pytest.fixture
def store():
    return InMemoryAnalyticsStore()


@pytest.fixture
def inference():
    return FakeInferenceClient(response={"matches": THREE_MATCHES, "prompt": "ocean waves", "threshold": 0.1})


@pytest.fixture
def signer():
    return FakeUrlSigner()


@pytest.fixture
def client(store, inference, signer):
    set_state(build_state(store, inference, signer))
    with TestClient(create_app()) as test_client:
        yield test_client
    set_state(None)


@pytest.fixture
def make_client(store, inference, signer):
    """Build a TestClient over custom collaborators (defaults from the fixtures above)."""
    clients = []

    def _make(store_=None, inference_=None, signer_=None):
        set_state(build_state(store_ or store, inference_ or inference, signer_ or signer))
        test_client = TestClient(create_app())
        clients.append(test_client)
        return test_client

    yield _make
    for test_client in clients:
        test_client.close()
    set_state(None)
